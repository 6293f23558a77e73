"""Shared fixtures for the employer search test suite.

Fixtures build the real cache, repository and search service on top of an
in-memory storage backend, a controllable clock and a stub employer source, so
individual tests only swap the piece they exercise.
"""

from __future__ import annotations

import pytest

from employer_search.schemas.employer import Employer
from employer_search.services.employer_cache import EmployerCacheManager
from employer_search.services.employer_repository import EmployerRepository
from employer_search.services.favorites_service import FavoritesStore
from employer_search.services.search_service import SearchEmployersService
from employer_search.storage import InMemorySecureStorage, StorageClient

SAMPLE_EMPLOYERS: tuple[Employer, ...] = (
    Employer(id=1, name="ABC Company", place="AMSTERDAM", discount_percentage=20),
    Employer(id=2, name="Middle Corp", place="UTRECHT", discount_percentage=15),
    Employer(id=3, name="Zebra Corp", place="ROTTERDAM", discount_percentage=10),
    Employer(id=4, name="Amsterdam Tech", place="AMSTERDAM", discount_percentage=25),
    Employer(id=5, name="Test Company", place="EINDHOVEN", discount_percentage=5),
)


class FakeClock:
    """Deterministic wall clock for expiry tests."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubEmployerSource:
    """Employer source double recording calls and optionally failing."""

    def __init__(self, employers: list[Employer]) -> None:
        self.employers = list(employers)
        self.calls = 0
        self.error: Exception | None = None

    async def fetch_all(self) -> list[Employer]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.employers)


@pytest.fixture
def sample_employers() -> list[Employer]:
    """Five employers covering distinct names, places and discounts."""

    return list(SAMPLE_EMPLOYERS)


@pytest.fixture
def memory_storage() -> InMemorySecureStorage:
    return InMemorySecureStorage()


@pytest.fixture
def storage_client(memory_storage: InMemorySecureStorage) -> StorageClient:
    return StorageClient(memory_storage)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1_700_000_000.0)


@pytest.fixture
def cache_manager(storage_client: StorageClient, clock: FakeClock) -> EmployerCacheManager:
    return EmployerCacheManager(storage_client, clock=clock)


@pytest.fixture
def stub_source(sample_employers: list[Employer]) -> StubEmployerSource:
    return StubEmployerSource(sample_employers)


@pytest.fixture
def repository(
    stub_source: StubEmployerSource, cache_manager: EmployerCacheManager
) -> EmployerRepository:
    return EmployerRepository(stub_source, cache_manager)


@pytest.fixture
def search_service(repository: EmployerRepository) -> SearchEmployersService:
    return SearchEmployersService(repository)


@pytest.fixture
def favorites(storage_client: StorageClient) -> FavoritesStore:
    return FavoritesStore(storage_client)
