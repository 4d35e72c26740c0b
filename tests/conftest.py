"""
Test configuration and fixtures
"""

import pytest
from fastapi.testclient import TestClient

from profile_history.repositories.app_repository import AppRepository
from profile_history.repositories.history_repository import UsageHistoryRepository
from profile_history.repositories.memory_store import MemoryKeyValueStore
from profile_history.repositories.starred_repository import StarredHistoryRepository
from profile_history.services.history_service import ProfileHistoryService


class FakeClock:
    """Deterministic millisecond clock advancing one second per call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    """Create a fresh in-memory store for each test"""
    return MemoryKeyValueStore()


@pytest.fixture
def history_repo(store, clock):
    return UsageHistoryRepository(store, max_items=20, clock=clock)


@pytest.fixture
def starred_repo(store):
    return StarredHistoryRepository(store)


@pytest.fixture
def app_repo(store):
    return AppRepository(store)


@pytest.fixture
def history_service(history_repo, starred_repo, app_repo):
    return ProfileHistoryService(
        history_repo=history_repo,
        starred_repo=starred_repo,
        app_repo=app_repo,
        default_limit=10,
    )


@pytest.fixture
def client(history_service, store):
    """Create a test client with service and store dependency overrides"""
    from profile_history.app import app
    from profile_history.dependencies import get_history_service, get_store

    async def override_get_history_service():
        return history_service

    async def override_get_store():
        return store

    app.dependency_overrides[get_history_service] = override_get_history_service
    app.dependency_overrides[get_store] = override_get_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
