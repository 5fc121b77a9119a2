# sdk/tracker_client/models.py
"""
Project Tracker SDK Data Models

Pydantic models for API responses, request drafts and queued offline
mutations. Wire names (createdAt, updatedAt) are kept as aliases.
"""

from typing import Optional, Dict, Any
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================

class ProjectStatus(str, Enum):
    """Project status values, identical to the wire strings."""
    BACKLOG = "Backlog"
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class MutationKind(str, Enum):
    """Kinds of writes the offline queue can hold."""
    CREATE = "create"
    UPDATE = "update"


# =============================================================================
# DOMAIN MODELS
# =============================================================================

class User(BaseModel):
    """A user projects can be assigned to."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class Project(BaseModel):
    """A project as returned by the API or fabricated optimistically."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None
    status: ProjectStatus
    assignee: Optional[User] = None
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict using the API's field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProjectDraft(BaseModel):
    """Fields a client supplies to create a project."""
    name: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.BACKLOG
    assignee_id: Optional[str] = None


# =============================================================================
# OFFLINE QUEUE
# =============================================================================

class QueuedMutation(BaseModel):
    """
    A pending write persisted while offline.

    `payload` is Project-shaped and may be partial. `temp_id` links a queued
    create to the optimistic cache entry it produced.
    """
    seq: int
    kind: MutationKind
    payload: Dict[str, Any] = Field(default_factory=dict)
    timestamp: int  # Epoch milliseconds at enqueue time
    temp_id: Optional[str] = None

    @property
    def target(self) -> Optional[str]:
        """Record this entry writes to: the temp id of a create, the id of an update."""
        if self.kind == MutationKind.CREATE:
            return self.temp_id
        return self.payload.get("id")

    def same_target(self, other: "QueuedMutation") -> bool:
        return self.kind == other.kind and self.target == other.target

    def same_change(self, other: "QueuedMutation") -> bool:
        """True if both entries describe the same logical edit."""
        return (
            self.kind == other.kind
            and self.payload == other.payload
            and self.temp_id == other.temp_id
        )
