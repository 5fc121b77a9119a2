# src/tracker/api/__init__.py
"""
API - REST endpoints for projects and users.

- GET  /api/projects
- POST /api/projects
- PUT  /api/projects/{id}
- GET  /api/users
"""

from fastapi import APIRouter

from .projects import router as projects_router
from .users import router as users_router

router = APIRouter(prefix="/api")

# Include sub-routers
router.include_router(projects_router, prefix="/projects", tags=["Projects"])
router.include_router(users_router, prefix="/users", tags=["Users"])
