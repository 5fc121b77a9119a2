# sdk/tracker_client/cache.py
"""
Project Cache

The client's single current list of projects. Every write builds a new
tuple and swaps it in with one assignment; readers hold whole snapshots
and never see a half-applied change. Merges key on project id, so the
last write to complete wins.
"""

import logging
from typing import Iterable, Optional, Tuple

from .models import Project

logger = logging.getLogger(__name__)


def _dedupe(projects: Iterable[Project]) -> Tuple[Project, ...]:
    # First occurrence keeps its position
    seen = set()
    ordered = []
    for project in projects:
        if project.id not in seen:
            seen.add(project.id)
            ordered.append(project)
    return tuple(ordered)


class ProjectCache:
    """Snapshot-swapping cache of Project records."""

    def __init__(self):
        self._snapshot: Optional[Tuple[Project, ...]] = None
        self._stale = True
        self._version = 0

    def _swap(self, snapshot: Tuple[Project, ...]) -> None:
        self._snapshot = snapshot
        self._stale = False
        self._version += 1

    @property
    def projects(self) -> Tuple[Project, ...]:
        """Current snapshot (empty before the first write)."""
        return self._snapshot or ()

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def is_stale(self) -> bool:
        return self._stale

    @property
    def version(self) -> int:
        """Incremented on every write; lets readers detect change cheaply."""
        return self._version

    def get(self, project_id: str) -> Optional[Project]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def replace_all(self, projects: Iterable[Project], keep: Iterable[Project] = ()) -> None:
        """Replace the whole list, e.g. after a fresh read.

        `keep` entries (optimistic records still awaiting the server) are
        placed in front of the fresh list.
        """
        self._swap(_dedupe([*keep, *projects]))

    def prepend(self, project: Project) -> None:
        """Put a new record at the front, dropping any older entry with its id."""
        self._swap(_dedupe([project, *self.projects]))

    def upsert(self, project: Project) -> None:
        """Replace the entry with the same id in place, or prepend if absent."""
        current = self.projects
        if not any(p.id == project.id for p in current):
            self.prepend(project)
            return
        self._swap(tuple(project if p.id == project.id else p for p in current))

    def reconcile(self, temp_id: str, record: Project) -> None:
        """
        Replace an optimistic entry with its server-confirmed record.

        If the server record is already cached (a refresh got there first),
        the optimistic entry is simply dropped.
        """
        current = self.projects
        if any(p.id == record.id for p in current):
            merged = [record if p.id == record.id else p for p in current if p.id != temp_id]
        elif any(p.id == temp_id for p in current):
            merged = [record if p.id == temp_id else p for p in current]
        else:
            merged = [record, *current]
        self._swap(tuple(merged))
        logger.debug(f"Reconciled {temp_id} -> {record.id}")

    def invalidate(self) -> None:
        """Mark the snapshot stale; the next load should refetch."""
        self._stale = True
