# src/tracker/api/dependencies.py
"""
FastAPI dependencies that hand routers the repositories wired into the app.
"""

from fastapi import Request

from ..repositories import ProjectRepository, UserRepository


def get_project_repository(request: Request) -> ProjectRepository:
    return request.app.state.project_repository


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.user_repository
