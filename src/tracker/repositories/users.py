# src/tracker/repositories/users.py
"""
User Repository - Ports and Adapters

Port: UserRepository (read-only interface)
Adapters: InMemoryUserRepository
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models import User, utc_now_iso
from .base import ReadOnlyRepository

logger = logging.getLogger(__name__)


SEED_USERS = [
    {
        "id": "1",
        "name": "John Doe",
        "email": "john.doe@example.com",
        "avatar": "https://i.pravatar.cc/150?img=1",
    },
    {
        "id": "2",
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
        "avatar": "https://i.pravatar.cc/150?img=2",
    },
    {
        "id": "3",
        "name": "Alice Johnson",
        "email": "alice.johnson@example.com",
        "avatar": "https://i.pravatar.cc/150?img=3",
    },
]


class UserRepository(ReadOnlyRepository[User]):
    """User Repository Port. Users have no write path."""


class InMemoryUserRepository(UserRepository):
    """
    In-memory adapter for the user repository.
    """

    def __init__(self, users: Optional[Iterable[User]] = None):
        self._users: Dict[str, User] = {}
        for user in users or []:
            self._users[user.id] = user

    @classmethod
    def with_seed_data(cls) -> "InMemoryUserRepository":
        """Build a repository holding the demo users."""
        now = utc_now_iso()
        users = [User(**row, created_at=now, updated_at=now) for row in SEED_USERS]
        logger.info(f"Seeded {len(users)} users")
        return cls(users)

    def list(self) -> List[User]:
        return list(self._users.values())

    def get_by_id(self, entity_id: str) -> Optional[User]:
        if not entity_id:
            return None
        return self._users.get(entity_id)
