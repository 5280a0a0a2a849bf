"""Shared fixtures for unit tests."""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import PersistenceState, Profile
from domain.entities.rms import RMSPerson
from domain.services.derived_cache import DerivedValueCache
from infrastructure.cache.memory_store import InMemoryCacheStore

# Fixed "current time" for timeline calculations
NOW = datetime(2024, 6, 15, 12, 0, 0)


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.response_plans = AsyncMock()
        self.visibilities = AsyncMock()
        self.reviews = AsyncMock()
        self.rms = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def profile_id() -> UUID:
    """A random profile ID."""
    return uuid4()


@pytest.fixture
def store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def cache(store: InMemoryCacheStore) -> DerivedValueCache:
    return DerivedValueCache(store)


@pytest.fixture
def rms_person() -> RMSPerson:
    """An RMS person with a full set of fields."""
    return RMSPerson(
        first_name="Jane",
        last_name="Doe",
        middle_initial=None,
        race="WHITE",
        sex="Female",
        height_in_inches=65,
        weight_in_pounds=140,
        location_address="123 Main St, Springfield, IL",
    )


@pytest.fixture
def saved_profile(profile_id: UUID, rms_person: RMSPerson) -> Profile:
    """A persisted profile without unsaved changes, linked to the RMS person."""
    rms_person.profile_id = profile_id
    return Profile(
        id=profile_id,
        rms_person=rms_person,
        analytics_token="abc123",
        state=PersistenceState.CLEAN,
        created_at=datetime(2020, 1, 1, 9, 30),
    )


@pytest.fixture
def actor_id() -> UUID:
    """A random actor ID (a responder or supervisor)."""
    return uuid4()
