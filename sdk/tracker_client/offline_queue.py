# sdk/tracker_client/offline_queue.py
"""
Persisted Offline Queue

An append-only log of pending writes kept under one storage key as a JSON
array. Entries carry monotonic sequence numbers so the same logical edit
queued twice in a row is stored once.

Usage:
    queue = OfflineQueue(JSONFileStore("state.json"))
    await queue.enqueue(MutationKind.UPDATE, project.to_wire())

    result = await queue.drain_and_replay(apply)
    result.records   # server records of the entries that went through
    result.failed    # entries still queued, in original order
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .errors import StorageError
from .models import MutationKind, QueuedMutation
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

OFFLINE_CHANGES_KEY = "@offline_changes"

ApplyFn = Callable[[QueuedMutation], Awaitable[Any]]


@dataclass
class ReplayResult:
    """Outcome of one drain: applied entries with their results, and failures."""
    applied: List[Tuple[QueuedMutation, Any]] = field(default_factory=list)
    failed: List[QueuedMutation] = field(default_factory=list)

    @property
    def records(self) -> List[Any]:
        return [record for _, record in self.applied if record is not None]


class OfflineQueue:
    """
    Durable FIFO of QueuedMutation entries.

    Storage failures on enqueue are logged and the mutation is dropped,
    unless the queue is strict, in which case StorageError propagates.
    """

    def __init__(self, storage: KeyValueStore, key: str = OFFLINE_CHANGES_KEY, strict: bool = False):
        self._storage = storage
        self._key = key
        self._strict = strict
        self._last_seq = 0

    async def _load(self) -> List[QueuedMutation]:
        raw = await self._storage.get_item(self._key)
        if not raw:
            return []
        try:
            return [QueuedMutation.model_validate(item) for item in json.loads(raw)]
        except (ValueError, TypeError, ValidationError) as e:
            raise StorageError(f"Corrupt offline queue under {self._key!r}: {e}") from e

    async def _save(self, entries: List[QueuedMutation]) -> None:
        if entries:
            payload = json.dumps([entry.model_dump(mode="json") for entry in entries])
            await self._storage.set_item(self._key, payload)
        else:
            await self._storage.remove_item(self._key)

    def _next_seq(self, entries: List[QueuedMutation]) -> int:
        self._last_seq = max([self._last_seq, *(e.seq for e in entries)]) + 1
        return self._last_seq

    async def pending(self) -> List[QueuedMutation]:
        """Entries waiting to be replayed, oldest first."""
        return await self._load()

    async def count(self) -> int:
        return len(await self._load())

    async def enqueue(
        self,
        kind: MutationKind,
        payload: Dict[str, Any],
        temp_id: Optional[str] = None,
    ) -> Optional[QueuedMutation]:
        """
        Append a mutation to durable storage.

        Returns the stored entry (or the newest entry for the same record
        when it is identical), or None when the write failed on a non-strict
        queue.
        """
        try:
            entries = await self._load()
            candidate = QueuedMutation(
                seq=0,
                kind=kind,
                payload=payload,
                timestamp=int(time.time() * 1000),
                temp_id=temp_id,
            )
            # Only the newest entry for the same record absorbs a repeat
            for existing in reversed(entries):
                if existing.same_target(candidate):
                    if existing.same_change(candidate):
                        logger.debug(f"Mutation already queued as seq={existing.seq}")
                        return existing
                    break

            entry = candidate.model_copy(update={"seq": self._next_seq(entries)})
            entries.append(entry)
            await self._save(entries)
        except StorageError as e:
            if self._strict:
                raise
            logger.error(f"Error saving offline change: {e}")
            return None

        logger.info(f"Queued offline {entry.kind.value} (seq={entry.seq}, pending={len(entries)})")
        return entry

    async def drain_and_replay(self, apply: ApplyFn) -> ReplayResult:
        """
        Replay every queued entry in enqueue order.

        A failing entry does not stop the loop; failures are requeued
        verbatim in their original order. Entries enqueued while the drain
        was running are kept behind them. An empty queue leaves storage
        untouched.
        """
        result = ReplayResult()

        try:
            entries = await self._load()
        except StorageError as e:
            logger.error(f"Error reading offline changes: {e}")
            return result

        if not entries:
            return result

        for entry in entries:
            try:
                record = await apply(entry)
            except Exception as e:
                logger.error(f"Error syncing change seq={entry.seq} ({entry.kind.value}): {e}")
                result.failed.append(entry)
            else:
                result.applied.append((entry, record))

        try:
            drained = {entry.seq for entry in entries}
            arrived = [e for e in await self._load() if e.seq not in drained]
            await self._save(result.failed + arrived)
        except StorageError as e:
            # Applied entries stay stored and will be replayed again
            if self._strict:
                raise
            logger.error(f"Error persisting offline queue after sync: {e}")

        logger.info(f"Replayed offline queue: {len(result.applied)} applied, {len(result.failed)} requeued")
        return result

    async def clear(self) -> None:
        await self._storage.remove_item(self._key)
