"""Shared test fixtures.

Provides fresh in-memory repositories, a FastAPI ``test_client`` (anonymous)
and ``auth_client`` (logged in), and a chainable mock Supabase client.

Environment is pinned before ``app`` is imported so the ``settings``
singleton always sees the in-memory backend with no seed data.
"""

import os

os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SESSION_COOKIE_SECURE"] = "false"

from collections.abc import Generator  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.repositories.memory import (  # noqa: E402
    InMemorySettingsStore,
    InMemoryTalentRepository,
    InMemoryUserStore,
)

TEST_EMAIL = "recruiter@example.com"
TEST_PASSWORD = "s3cret-pass"


@pytest.fixture()
def talent_repository() -> InMemoryTalentRepository:
    """A fresh, empty in-memory talent repository."""
    return InMemoryTalentRepository()


@pytest.fixture()
def settings_store() -> InMemorySettingsStore:
    """A fresh, unconfigured in-memory settings store."""
    return InMemorySettingsStore()


@pytest.fixture()
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


def chainable_table_mock() -> MagicMock:
    """Return a mock that supports fluent PostgREST chaining."""
    m = MagicMock()
    for method in (
        "select", "insert", "upsert", "update", "delete", "eq", "limit",
        "lt", "gt", "order",
    ):
        getattr(m, method).return_value = m
    m.execute.return_value = MagicMock(data=[])
    return m


@pytest.fixture()
def mock_supabase() -> MagicMock:
    """A Supabase client mock whose ``table()`` returns one chainable table."""
    mock_client = MagicMock()
    mock_client.table.return_value = chainable_table_mock()
    return mock_client


@pytest.fixture()
def test_client() -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient with a fresh lifespan (empty storage)."""
    from app.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture()
def auth_client(test_client: TestClient) -> TestClient:
    """A TestClient carrying the session cookie of a freshly registered user."""
    response = test_client.post(
        "/api/register",
        json={
            "email": TEST_EMAIL,
            "password": TEST_PASSWORD,
            "firstName": "Rita",
            "lastName": "Recruiter",
        },
    )
    assert response.status_code == 201
    return test_client
