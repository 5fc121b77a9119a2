# sdk/tracker_client/sync.py
"""
Sync Orchestrator

Replays the offline queue when the network comes back, then refreshes the
project cache from the server.

States:
    IDLE     - waiting for the next offline -> online transition
    SYNCING  - draining the queue; further triggers are ignored

A sync run always completes: each queued entry either goes through or is
requeued, and the run returns to IDLE whatever the outcome.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict

from .cache import ProjectCache
from .client import AsyncTrackerClient
from .errors import TrackerError
from .models import MutationKind, Project, QueuedMutation
from .network import NetworkMonitor
from .offline_queue import OfflineQueue

logger = logging.getLogger(__name__)

REQUIRED_UPDATE_FIELDS = frozenset({"name", "status"})


class SyncState(str, Enum):
    IDLE = "idle"
    SYNCING = "syncing"


@dataclass
class SyncReport:
    """Summary of one sync run."""
    applied: int = 0
    failed: int = 0
    refreshed: bool = False
    skipped: bool = False


class SyncOrchestrator:
    """
    Drains the offline queue through the API client and reconciles the cache.

    Reconciliation:
    - a replayed create replaces its optimistic entry (matched by temp_id)
    - updates queued against a temp id are sent to the server id once the
      create went through; the mapping lives as long as this orchestrator
    - partial update payloads are completed from the cached record, or from
      a fresh read when the record is not cached
    """

    def __init__(
        self,
        client: AsyncTrackerClient,
        queue: OfflineQueue,
        cache: ProjectCache,
    ):
        self._client = client
        self._queue = queue
        self._cache = cache
        self._busy = False
        self._id_aliases: Dict[str, str] = {}

    @property
    def state(self) -> SyncState:
        return SyncState.SYNCING if self._busy else SyncState.IDLE

    @property
    def is_syncing(self) -> bool:
        return self._busy

    def resolve_id(self, project_id: str) -> str:
        """Server id for a temp id that has already been replayed."""
        return self._id_aliases.get(project_id, project_id)

    def attach(self, network: NetworkMonitor) -> Callable[[], None]:
        """Sync on every offline -> online transition. Returns an unsubscribe function."""

        async def on_change(online: bool):
            if online:
                await self.sync()

        return network.subscribe(on_change)

    async def apply(self, entry: QueuedMutation) -> Project:
        """Send one queued mutation to the API and merge the result into the cache."""
        if entry.kind == MutationKind.CREATE:
            record = await self._client.projects.create(entry.payload)
            if entry.temp_id:
                self._id_aliases[entry.temp_id] = record.id
                self._cache.reconcile(entry.temp_id, record)
            else:
                self._cache.upsert(record)
            return record

        queued_id = entry.payload.get("id")
        if not queued_id:
            raise ValueError(f"Queued update seq={entry.seq} has no project id")

        project_id = self.resolve_id(queued_id)
        fields: Dict[str, Any] = dict(entry.payload)
        cached = self._cache.get(project_id) or self._cache.get(queued_id)
        if cached is None and not REQUIRED_UPDATE_FIELDS <= entry.payload.keys():
            # Full replace needs the current record to fill in the gaps
            cached = next((p for p in await self._client.projects.list() if p.id == project_id), None)
        if cached is not None:
            fields = {**cached.to_wire(), **entry.payload}

        record = await self._client.projects.update(project_id, fields)
        self._cache.upsert(record)
        return record

    async def sync(self) -> SyncReport:
        """
        Drain the queue and refresh the cache.

        Returns a skipped report if a run is already in progress.
        """
        if self._busy:
            logger.debug("Sync already running, ignoring trigger")
            return SyncReport(skipped=True)

        self._busy = True
        report = SyncReport()
        try:
            result = await self._queue.drain_and_replay(self.apply)
            report.applied = len(result.applied)
            report.failed = len(result.failed)

            # Creates still queued include those added while the drain ran
            try:
                queued = await self._queue.pending()
            except TrackerError as e:
                logger.error(f"Error reading offline changes after sync: {e}")
                queued = result.failed
            still_pending = [
                self._cache.get(entry.temp_id)
                for entry in queued
                if entry.kind == MutationKind.CREATE and entry.temp_id
            ]

            try:
                projects = await self._client.projects.list()
            except TrackerError as e:
                logger.error(f"Error refreshing projects after sync: {e}")
                self._cache.invalidate()
            else:
                self._cache.replace_all(projects, keep=[p for p in still_pending if p is not None])
                report.refreshed = True
        finally:
            self._busy = False

        logger.info(
            f"Sync finished: {report.applied} applied, {report.failed} pending, "
            f"refreshed={report.refreshed}"
        )
        return report
