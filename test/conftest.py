"""Pytest fixtures for the users API tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from models.user_model import User
from stores.user_store import StoreError, new_user_id


class InMemoryUserStore:
    """Keeps users in a list; stamps ids and dates the way the Mongo store does."""

    def __init__(self):
        self.users: list[User] = []
        self.insert_calls = 0

    async def insert(self, user: User) -> str:
        self.insert_calls += 1
        now = datetime.now(timezone.utc)
        stored = user.model_copy(
            update={"user_id": new_user_id(), "date_created": now, "date_modified": now}
        )
        self.users.append(stored)
        return stored.user_id

    async def list_all(self) -> list[User]:
        return list(self.users)


class FailingUserStore:
    """Every operation fails as if the database were unreachable."""

    def __init__(self):
        self.insert_calls = 0

    async def insert(self, user: User) -> str:
        self.insert_calls += 1
        raise StoreError("connection refused")

    async def list_all(self) -> list[User]:
        raise StoreError("connection refused")


@pytest.fixture
def valid_address_data():
    return {
        "Type": 1,
        "LineOne": "12973 SW 112th ST",
        "LineTwo": "Suite 153",
        "City": "Miami",
        "State": "FL",
        "Zipcode": "33172",
        "Phone": "305-527-3353",
    }


@pytest.fixture
def valid_user_data(valid_address_data):
    """A complete user document as a client would post it."""
    return {
        "UserType": 1,
        "FirstName": "Bill",
        "LastName": "Kennedy",
        "Email": "bill@ardanstudios.com",
        "Company": "Ardan Labs",
        "Addresses": [valid_address_data],
    }


@pytest.fixture
def valid_user(valid_user_data):
    return User.model_validate(valid_user_data)


@pytest.fixture
def memory_store():
    return InMemoryUserStore()


@pytest.fixture
def failing_store():
    return FailingUserStore()


def _client_for(store, monkeypatch):
    from main import app
    from libs.database import Database
    from routes.users import get_user_store

    # The lifespan would otherwise try to reach a real MongoDB.
    monkeypatch.setattr(Database, "connect", AsyncMock(return_value=None))
    monkeypatch.setattr(Database, "disconnect", AsyncMock(return_value=None))

    async def override_get_user_store():
        yield store

    app.dependency_overrides[get_user_store] = override_get_user_store
    return app


@pytest.fixture
def test_client(memory_store, monkeypatch):
    """A TestClient backed by the in-memory store."""
    app = _client_for(memory_store, monkeypatch)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(failing_store, monkeypatch):
    """A TestClient whose store always fails."""
    app = _client_for(failing_store, monkeypatch)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def unreachable_db_client(monkeypatch):
    """A TestClient using the real store while every collection lookup fails."""
    from main import app
    from libs.database import Database, DatabaseConnectionError

    monkeypatch.setattr(Database, "connect", AsyncMock(return_value=None))
    monkeypatch.setattr(Database, "disconnect", AsyncMock(return_value=None))
    monkeypatch.setattr(
        Database,
        "get_collection",
        AsyncMock(side_effect=DatabaseConnectionError("connection refused")),
    )

    app.dependency_overrides.clear()
    with TestClient(app) as client:
        yield client
