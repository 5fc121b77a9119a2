# src/tracker/repositories/base.py
"""
Base Repository - Abstract Interface (Port)

Defines the contract that all repository implementations must follow.
This is the "port" in ports and adapters terminology; routing code only
talks to these interfaces so the storage behind them can be swapped.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ReadOnlyRepository(ABC, Generic[T]):
    """
    Read-only repository for collections the API never mutates.
    """

    @abstractmethod
    def list(self) -> List[T]:
        """Get all entities in insertion order."""
        pass

    @abstractmethod
    def get_by_id(self, entity_id: str) -> Optional[T]:
        """
        Get a single entity by its ID.

        Args:
            entity_id: The unique identifier

        Returns:
            The entity or None if not found
        """
        pass

    def exists(self, entity_id: str) -> bool:
        """Check if an entity exists."""
        return self.get_by_id(entity_id) is not None


class BaseRepository(ReadOnlyRepository[T]):
    """
    Abstract base repository for collections that accept writes.

    Deletion is deliberately absent: records are created and replaced,
    never removed.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> T:
        """
        Create a new entity.

        Args:
            data: Entity data without identifier or timestamps

        Returns:
            The created entity
        """
        pass

    @abstractmethod
    def update_by_id(self, entity_id: str, data: Dict[str, Any]) -> Optional[T]:
        """
        Replace the mutable fields of an existing entity.

        Args:
            entity_id: The ID of the entity to update
            data: Full set of mutable fields

        Returns:
            The updated entity or None if no entity has that ID
        """
        pass
