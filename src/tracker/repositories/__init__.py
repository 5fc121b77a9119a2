# src/tracker/repositories/__init__.py
"""
Repository Layer - Ports and Adapters Pattern

Routing code depends on the ports (ProjectRepository, UserRepository);
the app factory decides which adapters to inject.

Usage:
    from tracker.repositories import build_repositories

    users, projects = build_repositories(seed=True)
    projects.create({"name": "Launch", "description": "", "status": "Backlog"})
"""

from typing import Tuple

from .base import BaseRepository, ReadOnlyRepository
from .projects import InMemoryProjectRepository, ProjectRepository
from .users import InMemoryUserRepository, UserRepository


def build_repositories(seed: bool = True) -> Tuple[UserRepository, ProjectRepository]:
    """Create the in-memory user and project repositories."""
    if seed:
        users = InMemoryUserRepository.with_seed_data()
        return users, InMemoryProjectRepository.with_seed_data(users)
    users = InMemoryUserRepository()
    return users, InMemoryProjectRepository(users)


__all__ = [
    "BaseRepository",
    "ReadOnlyRepository",
    "ProjectRepository",
    "InMemoryProjectRepository",
    "UserRepository",
    "InMemoryUserRepository",
    "build_repositories",
]
