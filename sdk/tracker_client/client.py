# sdk/tracker_client/client.py
"""
Project Tracker API Client

Async client built on httpx.AsyncClient. Each call is one request/response
round trip with no local caching; httpx failures are translated into the
SDK error taxonomy at this boundary.
"""

import os
import logging
from typing import Optional, Dict, Any, List, Union
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from .errors import APIError, DecodeError, NetworkError, NotFound
from .models import Project, ProjectDraft, User

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass
class Environment:
    """SDK environment configuration."""
    name: str
    api_url: str


# Predefined environments
ENVIRONMENTS = {
    "local": Environment(name="local", api_url="http://localhost:3000"),
}


async def _send(http: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    """Issue a request, mapping transport failures to NetworkError."""
    try:
        return await http.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        raise NetworkError(f"{method} {url} timed out") from e
    except httpx.TransportError as e:
        raise NetworkError(f"{method} {url} failed: {e}") from e


def _json(response: httpx.Response) -> Any:
    if response.is_success:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response is not JSON: {e}") from e
    raise APIError(response.status_code, response.text[:200])


def _decode_list(data: Any, model):
    if not isinstance(data, list):
        raise DecodeError(f"Expected a list, got {type(data).__name__}")
    try:
        return [model.model_validate(item) for item in data]
    except ValidationError as e:
        raise DecodeError(str(e)) from e


def _decode_one(data: Any, model):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


def update_body(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the full-replace PUT body from Project-shaped fields.

    A missing description or assignee is sent as an empty string; the
    assignee id comes from `assignee_id` or the embedded `assignee`.
    """
    status = fields.get("status")
    assignee_id = fields.get("assignee_id")
    if assignee_id is None:
        assignee = fields.get("assignee") or {}
        assignee_id = assignee.get("id") if isinstance(assignee, dict) else getattr(assignee, "id", None)
    return {
        "name": fields.get("name"),
        "description": fields.get("description") or "",
        "status": getattr(status, "value", status),
        "assignee_id": assignee_id or "",
    }


class AsyncProjectsClient:
    """Async client for project operations."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def list(self) -> List[Project]:
        """List all projects."""
        response = await _send(self._http, "GET", "/api/projects")
        return _decode_list(_json(response), Project)

    async def create(self, draft: Union[ProjectDraft, Dict[str, Any]]) -> Project:
        """Create a project; the server assigns id and timestamps."""
        if not isinstance(draft, ProjectDraft):
            draft = ProjectDraft.model_validate(draft)
        response = await _send(
            self._http, "POST", "/api/projects",
            json=draft.model_dump(mode="json", exclude_none=True),
        )
        return _decode_one(_json(response), Project)

    async def update(self, project_id: str, fields: Dict[str, Any]) -> Project:
        """Replace the mutable fields of a project."""
        response = await _send(
            self._http, "PUT", f"/api/projects/{project_id}",
            json=update_body(fields),
        )
        if response.status_code == 404:
            raise NotFound(resource_id=project_id)
        return _decode_one(_json(response), Project)


class AsyncUsersClient:
    """Async client for user operations."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def list(self) -> List[User]:
        """List all users."""
        response = await _send(self._http, "GET", "/api/users")
        return _decode_list(_json(response), User)


class AsyncTrackerClient:
    """
    Async Project Tracker API client.

    Example:
        ```python
        async with AsyncTrackerClient(environment="local") as client:
            projects = await client.projects.list()
            created = await client.projects.create({"name": "Launch"})
            await client.projects.update(created.id, {**created.to_wire(), "status": "Completed"})
        ```
    """

    def __init__(
        self,
        environment: str = "local",
        api_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the async client.

        Args:
            environment: Name of a predefined environment
            api_url: Override the API URL
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests, in-process apps)
        """
        # Resolve environment
        if environment in ENVIRONMENTS:
            base = ENVIRONMENTS[environment]
            self._env = Environment(name=base.name, api_url=base.api_url)
        else:
            self._env = Environment(name=environment, api_url="")

        if api_url:
            self._env.api_url = api_url
        elif env_url := os.environ.get("TRACKER_API_URL"):
            self._env.api_url = env_url

        if not self._env.api_url:
            self._env.api_url = ENVIRONMENTS["local"].api_url

        self._http = httpx.AsyncClient(
            base_url=self._env.api_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

        # Initialize sub-clients
        self.projects = AsyncProjectsClient(self._http)
        self.users = AsyncUsersClient(self._http)

        logger.info(f"AsyncTrackerClient initialized for {self._env.name} ({self._env.api_url})")

    @property
    def api_url(self) -> str:
        return self._env.api_url

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    async def close(self):
        """Close the HTTP client."""
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
