"""
Test configuration and fixtures for site builder tests.
"""
import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from sitebuilder.main import app
from sitebuilder.storage import MemoryStorage, DEMO_USER_ID, get_storage
from sitebuilder.dependencies import get_current_user, get_generation_service
from sitebuilder.generation.service import GenerationService
from sitebuilder.domain.events import event_publisher


class UserSwitcher:
    """Holds the user the API sees as signed in; tests call ``act_as`` to change it."""

    def __init__(self, storage):
        self.storage = storage
        self.user = storage.get_user(DEMO_USER_ID)

    def act_as(self, user_id, email=None):
        self.user = self.storage.upsert_user({
            "id": user_id,
            "email": email or f"{user_id}@example.com",
            "first_name": user_id.title(),
            "last_name": "Tester",
        })
        return self.user


@pytest.fixture(autouse=True)
def clean_event_publisher():
    """Each test starts without event subscribers."""
    event_publisher.clear_subscribers()
    yield
    event_publisher.clear_subscribers()


@pytest.fixture
def storage():
    """Fresh in-memory storage seeded with the demo user."""
    return MemoryStorage()


@pytest.fixture
def generation():
    """Generation service without a model, so every call uses the templates."""
    return GenerationService(None)


@pytest.fixture
def users(storage):
    return UserSwitcher(storage)


@pytest.fixture
def client(storage, generation, users):
    """Create test client wired to the test storage and generation service."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_generation_service] = lambda: generation
    app.dependency_overrides[get_current_user] = lambda: users.user
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def make_generator():
    """Build a mock text generator answering with ``responses`` in order."""
    def _make(*responses, model="gemini-test"):
        generator = Mock()
        generator.model = model
        generator.generate.side_effect = list(responses)
        return generator
    return _make


@pytest.fixture
def sample_project(client):
    """A project owned by the demo user, created through the API."""
    response = client.post("/api/projects", json={
        "title": "Landing Page",
        "description": "Marketing site",
        "components": [{"type": "hero", "content": "Hero"}],
        "htmlCode": "<h1>Hello</h1>",
        "cssCode": "h1 { color: red; }",
        "jsCode": "console.log('hi');",
    })
    assert response.status_code == 201
    return response.json()
