"""Tests for the expiring employer cache."""

from __future__ import annotations

import logging

import pytest

from employer_search.schemas.employer import Employer
from employer_search.services import employer_cache
from employer_search.services.employer_cache import EMPLOYER_CACHE_TTL, EmployerCacheManager
from employer_search.storage import (
    EMPLOYER_CACHE_KEY,
    EMPLOYER_CACHE_TIMESTAMP_KEY,
    InMemorySecureStorage,
    StorageClient,
    StorageError,
)


class FailingStorage(InMemorySecureStorage):
    """Storage double whose writes, reads, or deletes can be made to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = False
        self.fail_reads = False
        self.fail_deletes = False

    def get_bytes(self, key: str) -> bytes | None:
        if self.fail_reads:
            raise StorageError("read failed")
        return super().get_bytes(key)

    def set_bytes(self, key: str, value: bytes) -> None:
        if self.fail_writes:
            raise StorageError("write failed")
        super().set_bytes(key, value)

    def delete(self, *keys: str) -> None:
        if self.fail_deletes:
            raise StorageError("delete failed")
        super().delete(*keys)


def test_ttl_is_one_week() -> None:
    assert EMPLOYER_CACHE_TTL == 604800


def test_serialisation_uses_feed_aliases(sample_employers: list[Employer]) -> None:
    payload = employer_cache.serialize_employers(sample_employers[:1])

    assert payload == [
        {
            "EmployerID": 1,
            "Name": "ABC Company",
            "Place": "AMSTERDAM",
            "DiscountPercentage": 20,
        }
    ]
    assert employer_cache.deserialize_employers(payload) == sample_employers[:1]


def test_deserialise_rejects_non_list_payloads() -> None:
    with pytest.raises(TypeError):
        employer_cache.deserialize_employers({"EmployerID": 1})


@pytest.mark.asyncio
async def test_save_then_load_returns_same_employers(
    cache_manager: EmployerCacheManager, sample_employers: list[Employer]
) -> None:
    await cache_manager.save(sample_employers)

    loaded = await cache_manager.load()

    assert loaded is not None
    assert set(loaded) == set(sample_employers)
    assert not await cache_manager.is_expired()


@pytest.mark.asyncio
async def test_save_overwrites_previous_collection(
    cache_manager: EmployerCacheManager, sample_employers: list[Employer]
) -> None:
    await cache_manager.save(sample_employers)
    await cache_manager.save(sample_employers[:2])

    assert await cache_manager.load() == sample_employers[:2]


@pytest.mark.asyncio
async def test_empty_cache_is_expired_and_loads_nothing(
    cache_manager: EmployerCacheManager,
) -> None:
    assert await cache_manager.is_expired()
    assert await cache_manager.load() is None


@pytest.mark.asyncio
async def test_clear_is_idempotent(
    cache_manager: EmployerCacheManager,
    memory_storage: InMemorySecureStorage,
    sample_employers: list[Employer],
) -> None:
    await cache_manager.save(sample_employers)

    await cache_manager.clear()
    await cache_manager.clear()

    assert await cache_manager.load() is None
    assert memory_storage.keys() == []


@pytest.mark.asyncio
async def test_entry_older_than_ttl_is_expired_and_cleared_on_load(
    cache_manager: EmployerCacheManager,
    memory_storage: InMemorySecureStorage,
    sample_employers: list[Employer],
    clock,
) -> None:
    await cache_manager.save(sample_employers)
    clock.advance(EMPLOYER_CACHE_TTL + 1)

    assert await cache_manager.is_expired()
    assert await cache_manager.load() is None
    assert memory_storage.get_bytes(EMPLOYER_CACHE_KEY) is None
    assert memory_storage.get_bytes(EMPLOYER_CACHE_TIMESTAMP_KEY) is None


@pytest.mark.asyncio
async def test_entry_exactly_at_ttl_is_still_valid(
    cache_manager: EmployerCacheManager,
    sample_employers: list[Employer],
    clock,
) -> None:
    await cache_manager.save(sample_employers)
    clock.advance(EMPLOYER_CACHE_TTL)

    assert not await cache_manager.is_expired()
    assert await cache_manager.load() == sample_employers


@pytest.mark.asyncio
async def test_custom_ttl_is_honoured(
    storage_client: StorageClient, sample_employers: list[Employer], clock
) -> None:
    manager = EmployerCacheManager(storage_client, ttl_seconds=60, clock=clock)
    await manager.save(sample_employers)
    clock.advance(61)

    assert manager.ttl_seconds == 60
    assert await manager.load() is None


@pytest.mark.asyncio
async def test_write_failure_is_logged_not_raised(
    sample_employers: list[Employer], clock, caplog: pytest.LogCaptureFixture
) -> None:
    storage = FailingStorage()
    storage.fail_writes = True
    manager = EmployerCacheManager(StorageClient(storage), clock=clock)

    with caplog.at_level(logging.WARNING):
        await manager.save(sample_employers)

    assert "Failed to cache employers" in caplog.text
    assert await manager.load() is None


@pytest.mark.asyncio
async def test_read_failure_is_treated_as_miss(
    sample_employers: list[Employer], clock
) -> None:
    storage = FailingStorage()
    manager = EmployerCacheManager(StorageClient(storage), clock=clock)
    await manager.save(sample_employers)
    storage.fail_reads = True

    assert await manager.is_expired()
    assert await manager.load() is None


@pytest.mark.asyncio
async def test_clear_failure_is_logged_not_raised(
    clock, caplog: pytest.LogCaptureFixture
) -> None:
    storage = FailingStorage()
    storage.fail_deletes = True
    manager = EmployerCacheManager(StorageClient(storage), clock=clock)

    with caplog.at_level(logging.WARNING):
        await manager.clear()

    assert "Failed to clear employer cache" in caplog.text


@pytest.mark.asyncio
async def test_corrupt_blob_is_treated_as_miss(
    cache_manager: EmployerCacheManager,
    memory_storage: InMemorySecureStorage,
    storage_client: StorageClient,
    clock,
) -> None:
    storage_client.set_json(EMPLOYER_CACHE_TIMESTAMP_KEY, clock())
    memory_storage.set_bytes(EMPLOYER_CACHE_KEY, b"not json")

    assert await cache_manager.load() is None


@pytest.mark.asyncio
async def test_unexpected_payload_shape_is_treated_as_miss(
    cache_manager: EmployerCacheManager, storage_client: StorageClient, clock
) -> None:
    storage_client.set_json(EMPLOYER_CACHE_TIMESTAMP_KEY, clock())
    storage_client.set_json(EMPLOYER_CACHE_KEY, [{"EmployerID": "not-an-int"}])

    assert await cache_manager.load() is None


@pytest.mark.asyncio
async def test_non_numeric_timestamp_counts_as_expired(
    cache_manager: EmployerCacheManager, storage_client: StorageClient
) -> None:
    storage_client.set_json(EMPLOYER_CACHE_TIMESTAMP_KEY, "yesterday")

    assert await cache_manager.is_expired()
