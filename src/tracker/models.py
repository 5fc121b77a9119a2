# src/tracker/models.py
"""
Domain models for the Project Tracker API.

Records are serialized with camelCase timestamps (``createdAt``,
``updatedAt``) on the wire; Python code uses snake_case attributes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProjectStatus(str, Enum):
    """Project status values. The values are the exact wire strings."""
    BACKLOG = "Backlog"
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class User(BaseModel):
    """A user that projects can be assigned to."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="The unique identifier of the user")
    name: str = Field(..., description="The name of the user")
    email: str = Field(..., description="The email address of the user")
    avatar: Optional[str] = Field(None, description="The URL of the user's avatar image")
    created_at: str = Field(
        default_factory=utc_now_iso,
        alias="createdAt",
        description="The date and time when the user was created",
    )
    updated_at: str = Field(
        default_factory=utc_now_iso,
        alias="updatedAt",
        description="The date and time when the user was last updated",
    )


class Project(BaseModel):
    """A tracked project with its assignee embedded by value."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="The unique identifier of the project")
    name: str = Field(..., description="The name of the project")
    description: Optional[str] = Field(None, description="The description of the project")
    status: ProjectStatus = Field(..., description="The current status of the project")
    assignee: Optional[User] = None
    created_at: str = Field(
        ...,
        alias="createdAt",
        description="The date and time when the project was created",
    )
    updated_at: str = Field(
        ...,
        alias="updatedAt",
        description="The date and time when the project was last updated",
    )
