"""
Project Tracker SDK

An offline-first Python client for the Project Tracker API.

Quick Start:
    ```python
    from tracker_client import (
        AsyncTrackerClient, JSONFileStore, NetworkMonitor, OfflineQueue, ProjectStore,
    )

    client = AsyncTrackerClient(api_url="http://localhost:3000")
    network = NetworkMonitor(check_url="http://localhost:3000/openapi.json")
    store = ProjectStore(client, OfflineQueue(JSONFileStore()), network)

    await store.start()            # syncs anything queued while offline
    network.watch(interval=5.0)    # reconnects trigger a sync

    await store.create_project({"name": "Launch"})
    ```
"""

__version__ = "0.1.0"

from .cache import ProjectCache
from .client import AsyncTrackerClient, Environment, ENVIRONMENTS
from .errors import (
    APIError,
    DecodeError,
    NetworkError,
    NotFound,
    StorageError,
    TrackerError,
)
from .models import (
    MutationKind,
    Project,
    ProjectDraft,
    ProjectStatus,
    QueuedMutation,
    User,
)
from .network import NetworkMonitor
from .offline_queue import OFFLINE_CHANGES_KEY, OfflineQueue, ReplayResult
from .storage import JSONFileStore, KeyValueStore, MemoryStore
from .store import ProjectStore, UserDirectory
from .sync import SyncOrchestrator, SyncReport, SyncState

__all__ = [
    "AsyncTrackerClient",
    "Environment",
    "ENVIRONMENTS",
    "APIError",
    "DecodeError",
    "NetworkError",
    "NotFound",
    "StorageError",
    "TrackerError",
    "MutationKind",
    "Project",
    "ProjectDraft",
    "ProjectStatus",
    "QueuedMutation",
    "User",
    "NetworkMonitor",
    "OFFLINE_CHANGES_KEY",
    "OfflineQueue",
    "ReplayResult",
    "JSONFileStore",
    "KeyValueStore",
    "MemoryStore",
    "ProjectCache",
    "ProjectStore",
    "UserDirectory",
    "SyncOrchestrator",
    "SyncReport",
    "SyncState",
]
