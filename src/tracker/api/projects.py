# src/tracker/api/projects.py
"""
Projects endpoints.

List, create and full-replace update over the injected project repository.
Projects are never deleted.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .dependencies import get_project_repository
from .models import ErrorResponse, ProjectCreate, ProjectUpdate
from ..models import Project
from ..repositories import ProjectRepository

logger = logging.getLogger(__name__)

router = APIRouter()

PROJECT_NOT_FOUND = "Project not found"


@router.get(
    "",
    response_model=List[Project],
    response_model_exclude_none=True,
    summary="Returns all projects",
)
async def list_projects(repo: ProjectRepository = Depends(get_project_repository)):
    """List every project in insertion order."""
    return repo.list()


@router.post(
    "",
    response_model=Project,
    response_model_exclude_none=True,
    status_code=201,
    summary="Create a new project",
)
async def create_project(
    project: ProjectCreate,
    repo: ProjectRepository = Depends(get_project_repository),
):
    """
    Create a new project.

    The server assigns the identifier and timestamps. An absent or unknown
    assignee_id leaves the project unassigned.
    """
    return repo.create(project.model_dump())


@router.put(
    "/{project_id}",
    response_model=Project,
    response_model_exclude_none=True,
    summary="Update a project",
    responses={404: {"model": ErrorResponse, "description": PROJECT_NOT_FOUND}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": ProjectUpdate.model_json_schema(
                        ref_template="#/components/schemas/{model}"
                    )
                }
            },
        }
    },
)
async def update_project(
    project_id: str,
    request: Request,
    repo: ProjectRepository = Depends(get_project_repository),
):
    """
    Replace all mutable fields of a project.

    Returns 404 if the project does not exist, whatever the body holds;
    the body is only validated for existing projects.
    """
    if not repo.exists(project_id):
        logger.warning(f"Update for unknown project {project_id!r}")
        return JSONResponse(status_code=404, content={"error": PROJECT_NOT_FOUND})

    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON body", "input": None}]
        )

    try:
        project = ProjectUpdate.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors()]
        )

    return repo.update_by_id(project_id, project.model_dump())
