"""
Pytest configuration and shared fixtures.

Settings are read at import time, so the environment is prepared before
any application module is imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-at-least-32-bytes-long"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from database import build_engine, create_db_and_tables, get_session
from main import app

TEST_PASSWORD = "Secret123!"


@pytest.fixture()
def engine():
    """Fresh in-memory database per test."""
    db_engine = build_engine("sqlite://", poolclass=StaticPool)
    create_db_and_tables(db_engine)
    yield db_engine
    SQLModel.metadata.drop_all(db_engine)
    db_engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def client(engine):
    def override_get_session():
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_user(client, username="alice", email=None, password=TEST_PASSWORD):
    response = client.post(
        "/api/user/register",
        json={
            "username": username,
            "email": email or f"{username.lower()}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(client):
    """Registered user 'alice' with ready-made auth headers."""
    body = register_user(client, "alice")
    return {"user": body["user"], "headers": auth_headers(body["token"])}


@pytest.fixture()
def bob(client):
    body = register_user(client, "bob")
    return {"user": body["user"], "headers": auth_headers(body["token"])}
