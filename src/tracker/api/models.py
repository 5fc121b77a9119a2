# src/tracker/api/models.py
"""
Pydantic models for API request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional

from ..models import ProjectStatus


# -------------------------
# Projects
# -------------------------

class ProjectCreate(BaseModel):
    """Request model for creating a project."""
    name: str
    description: str
    status: ProjectStatus = ProjectStatus.BACKLOG
    assignee_id: Optional[str] = Field(
        None, description="The ID of the user to assign the project to"
    )


class ProjectUpdate(BaseModel):
    """Request model for replacing a project's mutable fields."""
    name: str
    description: str
    status: ProjectStatus
    assignee_id: Optional[str] = Field(
        ..., description="The ID of the user to assign the project to"
    )


# -------------------------
# Errors
# -------------------------

class ErrorResponse(BaseModel):
    """Error body returned for unknown resources."""
    error: str
