from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from users_api.app.core.config import Settings
from users_api.app.main import create_app
from users_api.app.services.user_store import UserStore


class FakeClock:
    """Clock that advances one second per call."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def store():
    return UserStore()


@pytest.fixture
def client(store):
    app = create_app(store=store, app_settings=Settings(api_prefix="/api/v1"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded(store):
    """Store with a few users carrying role/age/activity attributes."""
    store.create({"name": "Alice", "email": "alice@example.com", "role": "admin", "age": 34, "isActive": True})
    store.create({"name": "Bob", "email": "bob@example.com", "role": "user", "age": 17, "isActive": False})
    store.create({"name": "Carol", "email": "carol@sample.org", "roles": ["user", "editor"], "age": 25})
    return store


@pytest.fixture
def clock():
    return FakeClock()
