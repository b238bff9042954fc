import os

# cheap hashes for the suite; must be set before the app is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import mongomock
import pytest
from fastapi.testclient import TestClient

from anthropometric import db as real_db
from anthropometric import settings
from anthropometric.db_init import ensure_indexes
from anthropometric.main import app


@pytest.fixture(autouse=True)
def mock_db(monkeypatch):
    # replace mongodb with mongomock in-memory
    mock_client = mongomock.MongoClient()
    mock_db = mock_client["test_db"]

    monkeypatch.setattr(real_db, "_client", mock_client)
    monkeypatch.setattr(real_db, "_db", mock_db)
    ensure_indexes(mock_db)

    yield mock_db


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def api():
    return settings.API_PREFIX


@pytest.fixture
def register(client, api):
    """POST /auth/register with sensible defaults; returns the response."""
    def _register(email, role="professional", password="secret123", **extra):
        body = {
            "email": email,
            "password": password,
            "name": email.split("@")[0].title(),
            "role": role,
            "gender": "female",
            "age": 30,
            "country": "PT",
        }
        body.update(extra)
        return client.post(f"{api}/auth/register", json=body)
    return _register


@pytest.fixture
def signup(register):
    """Register and return (user, headers)."""
    def _signup(email, role="professional", **extra):
        data = register(email, role=role, **extra).json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}
    return _signup


@pytest.fixture
def professional(signup):
    return signup("pro@example.com")


@pytest.fixture
def auth_headers(professional):
    """Signup a professional and return an Authorization header"""
    return professional[1]
