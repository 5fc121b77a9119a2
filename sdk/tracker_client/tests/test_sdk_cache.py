# sdk/tracker_client/tests/test_sdk_cache.py
"""
Unit tests for the project cache.
"""

import pytest

from tracker_client import Project, ProjectCache, ProjectStatus


def make_project(project_id, name=None, status=ProjectStatus.BACKLOG):
    return Project(
        id=project_id,
        name=name or f"Project {project_id}",
        status=status,
        created_at="2024-01-15T10:00:00.000Z",
        updated_at="2024-01-15T10:00:00.000Z",
    )


@pytest.fixture
def cache():
    cache = ProjectCache()
    cache.replace_all([make_project("1"), make_project("2")])
    return cache


class TestProjectCache:
    """Tests for ProjectCache."""

    def test_starts_empty_and_stale(self):
        cache = ProjectCache()

        assert cache.projects == ()
        assert not cache.is_loaded
        assert cache.is_stale

    def test_replace_all(self, cache):
        assert [p.id for p in cache.projects] == ["1", "2"]
        assert cache.is_loaded
        assert not cache.is_stale

    def test_replace_all_keeps_optimistic_entries_first(self, cache):
        temp = make_project("temp-1")

        cache.replace_all([make_project("3")], keep=[temp])

        assert [p.id for p in cache.projects] == ["temp-1", "3"]

    def test_prepend(self, cache):
        cache.prepend(make_project("3"))

        assert [p.id for p in cache.projects] == ["3", "1", "2"]

    def test_upsert_replaces_in_place(self, cache):
        cache.upsert(make_project("2", status=ProjectStatus.COMPLETED))

        assert [p.id for p in cache.projects] == ["1", "2"]
        assert cache.get("2").status == ProjectStatus.COMPLETED

    def test_upsert_prepends_unknown(self, cache):
        cache.upsert(make_project("9"))

        assert cache.projects[0].id == "9"

    def test_reconcile_replaces_temp_entry(self, cache):
        cache.prepend(make_project("temp-1", name="A"))

        cache.reconcile("temp-1", make_project("6", name="A"))

        assert [p.id for p in cache.projects] == ["6", "1", "2"]

    def test_reconcile_when_server_record_already_cached(self, cache):
        """No duplicate when a refresh beat the reconciliation."""
        cache.prepend(make_project("temp-1", name="A"))
        cache.upsert(make_project("6", name="A"))

        cache.reconcile("temp-1", make_project("6", name="A"))

        ids = [p.id for p in cache.projects]
        assert ids.count("6") == 1
        assert "temp-1" not in ids

    def test_snapshots_are_immutable(self, cache):
        """Readers keep the snapshot they took."""
        before = cache.projects

        cache.prepend(make_project("3"))

        assert [p.id for p in before] == ["1", "2"]
        assert isinstance(cache.projects, tuple)

    def test_version_increments_on_write(self, cache):
        version = cache.version

        cache.upsert(make_project("1", name="Renamed"))

        assert cache.version == version + 1

    def test_invalidate(self, cache):
        cache.invalidate()

        assert cache.is_stale
        assert cache.is_loaded
