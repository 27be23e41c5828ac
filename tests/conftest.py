"""
pytest fixtures: the app wired to an in-memory store and a swappable
authenticated user, so no Firebase project is needed.
"""
import os

os.environ.setdefault("USE_IN_MEMORY_STORE", "1")

import pytest
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_firestore
from main import app
from models.user import User
from services.memory_store import InMemoryDB


@pytest.fixture
def db():
    """Store seeded with two registered users"""
    store = InMemoryDB()
    store.create_user("alice-uid", "Alice", "alice@example.com", "https://avatars.test/alice")
    store.create_user("bob-uid", "Bob", "bob@example.com", "https://avatars.test/bob")
    return store


@pytest.fixture
def login():
    """Switch the user the auth dependency reports"""
    def _login(user_id: str, email: str = None):
        app.dependency_overrides[get_current_user] = lambda: User(user_id=user_id, email=email)
    return _login


@pytest.fixture
def client(db, login):
    app.dependency_overrides[get_firestore] = lambda: db
    login("alice-uid", "alice@example.com")
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
