# src/tracker/repositories/projects.py
"""
Project Repository - Ports and Adapters

Port: ProjectRepository (abstract interface)
Adapters: InMemoryProjectRepository

Records keep the assignee as an identifier; the User is embedded by value
when a Project is read, so renaming a user is reflected on every read.
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, List, Optional

from ..models import Project, ProjectStatus, utc_now_iso
from .base import BaseRepository
from .users import UserRepository

logger = logging.getLogger(__name__)


SEED_PROJECTS = [
    {"id": "1", "name": "Project 1", "description": "Description 1",
     "status": ProjectStatus.BACKLOG, "assignee_id": "1"},
    {"id": "2", "name": "Project 2", "description": "Description 2",
     "status": ProjectStatus.BACKLOG, "assignee_id": None},
    {"id": "3", "name": "Project 3", "description": "Description 3",
     "status": ProjectStatus.TODO, "assignee_id": "2"},
    {"id": "4", "name": "Project 4", "description": "Description 4",
     "status": ProjectStatus.IN_PROGRESS, "assignee_id": "3"},
    {"id": "5", "name": "Project 5", "description": "Description 5",
     "status": ProjectStatus.COMPLETED, "assignee_id": "3"},
]


class ProjectRepository(BaseRepository[Project]):
    """
    Project Repository Port - defines the interface for project data access.
    """

    @abstractmethod
    def next_id(self) -> str:
        """Allocate an identifier no stored project uses."""
        pass


class InMemoryProjectRepository(ProjectRepository):
    """
    In-memory adapter for the project repository.

    Identifiers come from a monotonic counter that skips any value already
    present, so seeded or imported ids never collide with generated ones.
    """

    def __init__(self, users: UserRepository):
        self._users = users
        self._rows: Dict[str, Dict[str, Any]] = {}
        self._counter = 0

    @classmethod
    def with_seed_data(cls, users: UserRepository) -> "InMemoryProjectRepository":
        """Build a repository holding the demo projects."""
        repo = cls(users)
        now = utc_now_iso()
        for row in SEED_PROJECTS:
            repo._rows[row["id"]] = {**row, "created_at": now, "updated_at": now}
        logger.info(f"Seeded {len(SEED_PROJECTS)} projects")
        return repo

    def _hydrate(self, row: Dict[str, Any]) -> Project:
        """Build a Project, resolving the assignee at read time."""
        return Project(
            id=row["id"],
            name=row["name"],
            description=row.get("description"),
            status=row["status"],
            assignee=self._users.get_by_id(row.get("assignee_id")),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _resolve_assignee(self, assignee_id: Optional[str]) -> Optional[str]:
        # Unknown or blank assignee ids fall back to unassigned
        if assignee_id and self._users.exists(assignee_id):
            return assignee_id
        if assignee_id:
            logger.debug(f"Ignoring unknown assignee_id={assignee_id!r}")
        return None

    def next_id(self) -> str:
        while True:
            self._counter += 1
            candidate = str(self._counter)
            if candidate not in self._rows:
                return candidate

    def list(self) -> List[Project]:
        return [self._hydrate(row) for row in self._rows.values()]

    def get_by_id(self, entity_id: str) -> Optional[Project]:
        row = self._rows.get(entity_id)
        return self._hydrate(row) if row else None

    def create(self, data: Dict[str, Any]) -> Project:
        now = utc_now_iso()
        row = {
            "id": self.next_id(),
            "name": data["name"],
            "description": data.get("description"),
            "status": data.get("status") or ProjectStatus.BACKLOG,
            "assignee_id": self._resolve_assignee(data.get("assignee_id")),
            "created_at": now,
            "updated_at": now,
        }
        self._rows[row["id"]] = row
        logger.info(f"Created project {row['id']} ({row['name']!r})")
        return self._hydrate(row)

    def update_by_id(self, entity_id: str, data: Dict[str, Any]) -> Optional[Project]:
        row = self._rows.get(entity_id)
        if row is None:
            return None

        updated = {
            **row,
            "name": data["name"],
            "description": data.get("description"),
            "status": data["status"],
            "assignee_id": self._resolve_assignee(data.get("assignee_id")),
            "updated_at": max(utc_now_iso(), row["created_at"]),
        }
        self._rows[entity_id] = updated
        logger.info(f"Updated project {entity_id}")
        return self._hydrate(updated)
