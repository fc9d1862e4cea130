"""
HomeKeep Test Suite: Shared Fixtures

Runs in-process: the backend is imported from backend/ (same sys.path setup
as the contract tests) against a throwaway SQLite file. Environment is set
before any core module is imported because core.config reads it at import.

Usage:
    pytest tests/ -v --tb=short
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

_TMP_DIR = Path(tempfile.mkdtemp(prefix="homekeep-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ.setdefault("JWT_SECRET_KEY", "test-only-secret-key-with-enough-length")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["COOKIE_SECURE"] = "false"

BACKEND_DIR = Path(__file__).resolve().parents[1] / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.base import Base  # noqa: E402
from core.db import SessionLocal, engine  # noqa: E402
from core.store import SqlAlchemyEntityStore  # noqa: E402

TEST_PASSWORD = "CorrectHorse9"


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def tables():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session(tables):
    db = SessionLocal()
    yield db
    db.close()


@pytest.fixture()
def store(db_session):
    return SqlAlchemyEntityStore(db_session)


@pytest.fixture()
def make_user(store):
    """Insert a user directly; the password hash is never checked by these tests."""
    def _make(username):
        return store.insert_user({"username": username, "password_hash": "unused"})
    return _make


@pytest.fixture()
def make_device(store):
    def _make(owner, name="Dishwasher", **fields):
        return store.insert_device({"owner_user_id": owner.id, "name": name, **fields})
    return _make


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client(tables):
    from fastapi.testclient import TestClient
    from core.app import create_app

    with TestClient(create_app()) as c:
        yield c


@pytest.fixture()
def register(client):
    """Register a user and return Bearer headers for them.

    The session cookie set by /auth/register is dropped so every request in
    a test authenticates only through the headers it passes.
    """
    def _register(username, password=TEST_PASSWORD):
        r = client.post("/api/auth/register", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _register
