# sdk/tracker_client/store.py
"""
Project Store

The client-facing state container for projects: it owns the cache, picks
the online or offline path for every write, and keeps the orchestrator
subscribed to network transitions.

Usage:
    store = ProjectStore(client, OfflineQueue(JSONFileStore()), NetworkMonitor())
    await store.start()

    await store.create_project({"name": "Launch", "description": "Q3 launch"})
    await store.update_project("5", status=ProjectStatus.COMPLETED)
    store.projects   # current snapshot
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, TypeVar, Union

from pydantic import ValidationError

from .cache import ProjectCache
from .client import AsyncTrackerClient
from .errors import TrackerError
from .models import MutationKind, Project, ProjectDraft, QueuedMutation, User
from .network import NetworkMonitor
from .offline_queue import OfflineQueue
from .sync import SyncOrchestrator, SyncReport

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"
DEFAULT_RETRIES = 2

T = TypeVar("T")


def _iso(epoch_ms: Optional[int] = None) -> str:
    moment = datetime.now(timezone.utc) if epoch_ms is None else datetime.fromtimestamp(epoch_ms / 1000, timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _wire_value(value: Any) -> Any:
    return getattr(value, "value", value)


async def _with_retries(fetch: Callable[[], Awaitable[T]], retries: int, what: str) -> T:
    """Call `fetch`, retrying up to `retries` more times on SDK errors."""
    for attempt in range(retries + 1):
        try:
            return await fetch()
        except TrackerError as e:
            if attempt == retries:
                raise
            logger.warning(f"Fetching {what} failed (attempt {attempt + 1}/{retries + 1}): {e}")


class UserDirectory:
    """Read-only list of users, loaded on demand."""

    def __init__(self, client: AsyncTrackerClient, retries: int = DEFAULT_RETRIES):
        self._client = client
        self._retries = retries
        self._users: Tuple[User, ...] = ()
        self.is_loading = False
        self.error: Optional[TrackerError] = None

    @property
    def users(self) -> Tuple[User, ...]:
        return self._users

    def get(self, user_id: Optional[str]) -> Optional[User]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    async def load(self) -> Tuple[User, ...]:
        self.is_loading = True
        try:
            users = await _with_retries(self._client.users.list, self._retries, "users")
        except TrackerError as e:
            logger.error(f"Error loading users: {e}")
            self.error = e
            return self._users
        finally:
            self.is_loading = False

        self._users = tuple(users)
        self.error = None
        return self._users


class ProjectStore:
    """
    Projects as the UI sees them, with optimistic offline writes.

    Online writes go straight to the API and the cache takes the server's
    answer. Offline writes are queued and mirrored into the cache at once;
    the orchestrator replays them on the next reconnect.
    """

    def __init__(
        self,
        client: AsyncTrackerClient,
        queue: OfflineQueue,
        network: NetworkMonitor,
        cache: Optional[ProjectCache] = None,
        users: Optional[UserDirectory] = None,
        retries: int = DEFAULT_RETRIES,
    ):
        self._client = client
        self._queue = queue
        self._network = network
        self._cache = cache or ProjectCache()
        self._users = users
        self._retries = retries
        self._orchestrator = SyncOrchestrator(client, queue, self._cache)
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._creating = 0

        self.is_loading = False
        self.error: Optional[TrackerError] = None

    # -------------------------
    # State
    # -------------------------

    @property
    def projects(self) -> Tuple[Project, ...]:
        return self._cache.projects

    @property
    def cache(self) -> ProjectCache:
        return self._cache

    @property
    def orchestrator(self) -> SyncOrchestrator:
        return self._orchestrator

    @property
    def is_creating(self) -> bool:
        return self._creating > 0

    @property
    def is_online(self) -> bool:
        return self._network.is_online

    # -------------------------
    # Lifecycle
    # -------------------------

    async def start(self) -> Optional[SyncReport]:
        """
        Subscribe to network transitions and restore queued creates.

        When already online, pending changes are synced right away, which
        also loads the project list.
        """
        if self._unsubscribe is None:
            self._unsubscribe = self._orchestrator.attach(self._network)

        try:
            pending = await self._queue.pending()
        except TrackerError as e:
            logger.error(f"Error reading offline changes: {e}")
            pending = []
        self._restore_optimistic(pending)

        if self._network.is_online:
            report = await self._orchestrator.sync()
            if report.refreshed:
                self.error = None
            return report
        return None

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _restore_optimistic(self, pending: List[QueuedMutation]) -> None:
        for entry in pending:
            if entry.kind != MutationKind.CREATE or not entry.temp_id:
                continue
            if self._cache.get(entry.temp_id) is not None:
                continue
            try:
                project = self._optimistic_project(entry.temp_id, entry.payload, entry.timestamp)
            except ValidationError as e:
                logger.warning(f"Cannot restore queued create {entry.temp_id}: {e}")
                continue
            self._cache.prepend(project)

    # -------------------------
    # Reads
    # -------------------------

    async def load(self) -> Tuple[Project, ...]:
        """Fetch the project list, keeping optimistic entries not yet synced."""
        self.is_loading = True
        try:
            projects = await _with_retries(self._client.projects.list, self._retries, "projects")
        except TrackerError as e:
            logger.error(f"Error loading projects: {e}")
            self.error = e
            self._cache.invalidate()
            return self.projects
        finally:
            self.is_loading = False

        keep = [p for p in self._cache.projects if p.id.startswith(TEMP_ID_PREFIX)]
        self._cache.replace_all(projects, keep=keep)
        self.error = None
        return self.projects

    # -------------------------
    # Writes
    # -------------------------

    def _new_temp_id(self) -> str:
        temp_id = f"{TEMP_ID_PREFIX}{int(time.time() * 1000)}"
        suffix = 1
        candidate = temp_id
        while self._cache.get(candidate) is not None:
            suffix += 1
            candidate = f"{temp_id}-{suffix}"
        return candidate

    def _optimistic_project(self, temp_id: str, payload: Dict[str, Any], epoch_ms: Optional[int] = None) -> Project:
        now = _iso(epoch_ms)
        assignee = self._users.get(payload.get("assignee_id")) if self._users else None
        return Project(
            id=temp_id,
            name=payload.get("name"),
            description=payload.get("description"),
            status=payload.get("status") or "Backlog",
            assignee=assignee,
            created_at=now,
            updated_at=now,
        )

    async def create_project(self, draft: Union[ProjectDraft, Dict[str, Any]]) -> Project:
        """
        Create a project.

        Offline, the draft is queued and a temporary project is returned and
        shown first in the list until the sync replaces it.
        """
        if not isinstance(draft, ProjectDraft):
            draft = ProjectDraft.model_validate(draft)

        self._creating += 1
        try:
            if self._network.is_online:
                try:
                    project = await self._client.projects.create(draft)
                except TrackerError as e:
                    logger.error(f"Create error: {e}")
                    self.error = e
                    raise
            else:
                temp_id = self._new_temp_id()
                payload = draft.model_dump(mode="json", exclude_none=True)
                await self._queue.enqueue(MutationKind.CREATE, payload, temp_id=temp_id)
                project = self._optimistic_project(temp_id, payload)
        finally:
            self._creating -= 1

        self._cache.prepend(project)
        return project

    def _merged_payload(self, project: Union[Project, str], fields: Dict[str, Any]) -> Dict[str, Any]:
        if isinstance(project, Project):
            project_id = project.id
            base = project.to_wire()
        else:
            project_id = project
            cached = self._cache.get(project_id)
            base = cached.to_wire() if cached else {}

        changes = {key: _wire_value(value) for key, value in fields.items()}
        if "assignee_id" in changes:
            base.pop("assignee", None)
            user = self._users.get(changes["assignee_id"]) if self._users else None
            if user is not None:
                base["assignee"] = user.model_dump(mode="json", by_alias=True, exclude_none=True)

        return {**base, **changes, "id": project_id}

    async def update_project(self, project: Union[Project, str], **fields: Any) -> Optional[Project]:
        """
        Update a project with full-replace semantics.

        `fields` override the given (or cached) record. Online failures,
        including NotFound, are logged and re-raised with the cache left as
        it was. Offline, the merged record is queued and shown at once.
        """
        payload = self._merged_payload(project, fields)
        project_id = payload["id"]

        if self._network.is_online:
            server_id = self._orchestrator.resolve_id(project_id)
            try:
                record = await self._client.projects.update(server_id, payload)
            except TrackerError as e:
                logger.error(f"Update error for project {project_id}: {e}")
                self.error = e
                raise
            if server_id != project_id:
                self._cache.reconcile(project_id, record)
            else:
                self._cache.upsert(record)
            return record

        await self._queue.enqueue(MutationKind.UPDATE, payload)
        try:
            record = Project.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Queued update for {project_id} is partial, cache not updated: {e}")
            return None
        self._cache.upsert(record)
        return record

    async def sync(self) -> SyncReport:
        """Run a sync now, e.g. from a pull-to-refresh gesture."""
        return await self._orchestrator.sync()
