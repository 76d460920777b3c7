"""
Tests for the ProjectStorage implementations.

The same contract runs against MemoryStorage and DatabaseStorage (SQLite in
memory through the same SQLAlchemy models used with PostgreSQL).
"""
import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from sitebuilder.db import get_session_factory
from sitebuilder.db.init_db import create_tables, drop_all_tables
from sitebuilder.domain.errors import NotFoundError
from sitebuilder.storage import DatabaseStorage, MemoryStorage


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    drop_all_tables(engine)
    engine.dispose()


@pytest.fixture(params=["memory", "database"])
def any_storage(request):
    if request.param == "memory":
        store = MemoryStorage(seed_demo_user=False)
    else:
        store = DatabaseStorage(get_session_factory(request.getfixturevalue("sqlite_engine")))
    store.upsert_user({"id": "u1", "email": "u1@example.com", "first_name": "Ada", "last_name": "L"})
    store.upsert_user({"id": "u2", "email": "u2@example.com"})
    return store


def _pause():
    """Keep timestamps of consecutive writes distinct."""
    time.sleep(0.002)


class TestUsers:
    """Test user storage."""

    def test_get_missing_user(self, any_storage):
        assert any_storage.get_user("nobody") is None

    def test_upsert_updates_claims_and_keeps_created_at(self, any_storage):
        """Test that a second login refreshes the profile."""
        created = any_storage.get_user("u1")
        _pause()
        updated = any_storage.upsert_user({"id": "u1", "email": "ada@example.com", "first_name": "Ada"})

        assert updated["email"] == "ada@example.com"
        assert updated["last_name"] is None
        assert updated["created_at"] == created["created_at"]
        assert any_storage.get_user("u1")["email"] == "ada@example.com"


class TestProjects:
    """Test project storage."""

    def test_create_and_get(self, any_storage):
        project = any_storage.create_project({
            "title": "Site",
            "user_id": "u1",
            "components": [{"type": "hero"}],
            "html_code": "<p>x</p>",
        })

        stored = any_storage.get_project(project["id"])
        assert stored["title"] == "Site"
        assert stored["user_id"] == "u1"
        assert stored["components"] == [{"type": "hero"}]
        assert stored["html_code"] == "<p>x</p>"
        assert stored["css_code"] is None
        assert stored["is_published"] is False

    def test_ids_are_unique(self, any_storage):
        ids = {any_storage.create_project({"title": str(i), "user_id": "u1"})["id"] for i in range(5)}
        assert len(ids) == 5

    def test_user_projects_sorted_by_update(self, any_storage):
        """Test newest updated_at first and owner filtering."""
        first = any_storage.create_project({"title": "first", "user_id": "u1"})
        _pause()
        any_storage.create_project({"title": "second", "user_id": "u1"})
        any_storage.create_project({"title": "theirs", "user_id": "u2"})
        _pause()
        any_storage.update_project(first["id"], {"description": "edited"})

        assert [p["title"] for p in any_storage.get_user_projects("u1")] == ["first", "second"]
        assert [p["title"] for p in any_storage.get_user_projects("u2")] == ["theirs"]

    def test_update_is_partial_and_touches_updated_at(self, any_storage):
        project = any_storage.create_project({"title": "Site", "user_id": "u1", "css_code": "a{}"})
        _pause()
        updated = any_storage.update_project(project["id"], {"title": "New", "is_published": True})

        assert updated["title"] == "New"
        assert updated["is_published"] is True
        assert updated["css_code"] == "a{}"
        assert updated["updated_at"] > project["updated_at"]

    def test_update_ignores_unknown_fields(self, any_storage):
        project = any_storage.create_project({"title": "Site", "user_id": "u1"})
        updated = any_storage.update_project(project["id"], {"user_id": "u2", "id": "other"})
        assert updated["user_id"] == "u1"
        assert updated["id"] == project["id"]

    def test_update_missing_raises(self, any_storage):
        with pytest.raises(NotFoundError):
            any_storage.update_project("missing", {"title": "x"})

    def test_delete(self, any_storage):
        project = any_storage.create_project({"title": "Site", "user_id": "u1"})

        assert any_storage.delete_project(project["id"]) is True
        assert any_storage.get_project(project["id"]) is None
        assert any_storage.delete_project(project["id"]) is False

    def test_returned_entities_are_detached(self, any_storage):
        """Test that mutating a returned dict does not change storage."""
        project = any_storage.create_project({"title": "Site", "user_id": "u1", "components": [{"type": "a"}]})
        project["components"].append({"type": "b"})
        project["title"] = "changed"

        stored = any_storage.get_project(project["id"])
        assert stored["title"] == "Site"
        assert stored["components"] == [{"type": "a"}]


class TestEndpoints:
    """Test API endpoint metadata storage."""

    @pytest.fixture
    def project(self, any_storage):
        return any_storage.create_project({"title": "Site", "user_id": "u1"})

    def test_create_list_newest_first(self, any_storage, project):
        first = any_storage.create_api_endpoint({"project_id": project["id"], "method": "GET", "path": "/a"})
        _pause()
        second = any_storage.create_api_endpoint({"project_id": project["id"], "method": "POST", "path": "/b"})

        listed = any_storage.get_project_endpoints(project["id"])
        assert [e["id"] for e in listed] == [second["id"], first["id"]]
        assert listed[0]["method"] == "POST"

    def test_update_and_delete(self, any_storage, project):
        endpoint = any_storage.create_api_endpoint({"project_id": project["id"], "method": "GET", "path": "/a"})

        updated = any_storage.update_api_endpoint(endpoint["id"], {"description": "List"})
        assert updated["description"] == "List"
        assert updated["path"] == "/a"

        assert any_storage.delete_api_endpoint(endpoint["id"]) is True
        assert any_storage.get_api_endpoint(endpoint["id"]) is None
        assert any_storage.delete_api_endpoint(endpoint["id"]) is False

    def test_update_missing_raises(self, any_storage):
        with pytest.raises(NotFoundError):
            any_storage.update_api_endpoint("missing", {"path": "/x"})

    def test_project_delete_cascades(self, any_storage, project):
        endpoint = any_storage.create_api_endpoint({"project_id": project["id"], "method": "GET", "path": "/a"})
        any_storage.delete_project(project["id"])
        assert any_storage.get_api_endpoint(endpoint["id"]) is None


class TestStorageStats:
    """Test storage statistics."""

    def test_counts(self, any_storage):
        project = any_storage.create_project({"title": "Site", "user_id": "u1"})
        any_storage.create_api_endpoint({"project_id": project["id"], "method": "GET", "path": "/a"})

        stats = any_storage.get_storage_stats()
        assert stats["users"] == 2
        assert stats["projects"] == 1
        assert stats["api_endpoints"] == 1
        assert stats["storage_type"] in ("memory", "database")


class TestMemoryStorage:
    """Behaviour specific to the in-memory store."""

    def test_seeded_with_demo_user(self):
        user = MemoryStorage().get_user("local_user_123")
        assert user["email"] == "demo@example.com"
        assert user["first_name"] == "Demo"

    def test_instances_do_not_share_state(self):
        a, b = MemoryStorage(), MemoryStorage()
        a.create_project({"title": "Site", "user_id": "local_user_123"})
        assert b.get_user_projects("local_user_123") == []
