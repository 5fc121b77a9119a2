"""
Project Tracker API application.

`create_app()` wires the repositories into a FastAPI app; the module-level
`app` is what uvicorn serves.
"""

import logging
from typing import Optional

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router as api_router
from .config import TrackerConfig, get_config
from .openapi import install as install_openapi
from .repositories import (
    InMemoryProjectRepository,
    ProjectRepository,
    UserRepository,
    build_repositories,
)

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[TrackerConfig] = None,
    user_repository: Optional[UserRepository] = None,
    project_repository: Optional[ProjectRepository] = None,
) -> FastAPI:
    """
    Build the Project Tracker FastAPI app.

    Repositories default to seeded in-memory adapters; pass your own to swap
    storage without touching routing code.
    """
    config = config or get_config()

    if user_repository is None:
        user_repository, projects = build_repositories(seed=config.seed_data)
        project_repository = project_repository or projects
    elif project_repository is None:
        # Assignees must resolve against the injected users
        project_repository = (
            InMemoryProjectRepository.with_seed_data(user_repository)
            if config.seed_data
            else InMemoryProjectRepository(user_repository)
        )

    app = FastAPI(
        title="Project Tracker API",
        version="1.0.0",
        description="A simple project tracking API",
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        servers=[{"url": config.base_url, "description": "Development server"}],
    )
    app.state.config = config
    app.state.user_repository = user_repository
    app.state.project_repository = project_repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    install_openapi(app)

    @app.on_event("startup")
    def startup():
        logger.info(f"Server is running on port {config.api_port}")
        logger.info(f"API Documentation available at {config.base_url}/api-docs")
        logger.info(f"OpenAPI specification available at {config.base_url}/openapi.json")

    return app


app = create_app()
