"""Pytest fixtures: per-test SQLite database for fast, isolated tests."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from upfor import models  # noqa: F401  (registers every table with Base.metadata)
from upfor.database import Base, get_db
from upfor.main import app

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: register users and wire up friendships through the API
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, name: str = "Test User", email: str = None) -> dict:
    """Helper: POST /api/users and return the user with its auth headers."""
    email = email or f"{name.lower().replace(' ', '.')}@example.com"
    resp = client.post("/api/users/", json={"name": name, "email": email})
    assert resp.status_code == 201, resp.text
    data = resp.json()
    return {
        "id": data["user"]["id"],
        "name": data["user"]["name"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


def make_friends(client: TestClient, requester: dict, recipient: dict) -> dict:
    """Helper: send and accept a friend request, return the friendship JSON."""
    resp = client.post(
        "/api/friends/request",
        json={"userId": recipient["id"]},
        headers=requester["headers"],
    )
    assert resp.status_code == 201, resp.text
    resp = client.post(
        "/api/friends/accept",
        json={"requestId": resp.json()["id"]},
        headers=recipient["headers"],
    )
    assert resp.status_code == 200, resp.text
    return resp.json()
