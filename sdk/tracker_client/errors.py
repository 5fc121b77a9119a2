# sdk/tracker_client/errors.py
"""
Project Tracker SDK Errors

API client functions raise these; the sync orchestrator catches them per
queued entry; the project cache never raises.
"""

from typing import Optional


class TrackerError(Exception):
    """Base class for every SDK error."""


class NetworkError(TrackerError):
    """The API could not be reached or the request timed out."""


class NotFound(TrackerError):
    """The addressed record does not exist on the server."""

    def __init__(self, message: str = "Project not found", resource_id: Optional[str] = None):
        super().__init__(message)
        self.resource_id = resource_id


class DecodeError(TrackerError):
    """The response body did not match the expected shape."""


class StorageError(TrackerError):
    """Local persistence failed to read or write."""


class APIError(TrackerError):
    """Any other non-success HTTP response."""

    def __init__(self, status_code: int, message: str = ""):
        super().__init__(f"HTTP {status_code}: {message}" if message else f"HTTP {status_code}")
        self.status_code = status_code
