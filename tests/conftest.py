# tests/conftest.py
"""
Pytest configuration and fixtures for the Project Tracker test suite.

Provides:
- A fresh FastAPI app per test (seeded in-memory repositories)
- FastAPI test client
- Sample request bodies
"""

import os
import pytest
from typing import Any, Dict
from fastapi.testclient import TestClient

# Set test environment before imports
os.environ["TRACKER_ENV"] = "test"

from tracker.config import TrackerConfig
from tracker.main import create_app
from tracker.repositories import build_repositories


@pytest.fixture
def config() -> TrackerConfig:
    """Test configuration with seed data enabled."""
    return TrackerConfig(environment="test", api_port=3000, seed_data=True)


@pytest.fixture
def repositories():
    """Seeded (users, projects) repositories."""
    return build_repositories(seed=True)


@pytest.fixture
def app(config, repositories):
    """App wired to the per-test repositories."""
    users, projects = repositories
    return create_app(config, user_repository=users, project_repository=projects)


@pytest.fixture
def client(app) -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def new_project() -> Dict[str, Any]:
    """Sample create body."""
    return {
        "name": "Mobile Launch",
        "description": "Ship the offline-first app",
        "status": "To Do",
        "assignee_id": "2",
    }
