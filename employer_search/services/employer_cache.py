"""Expiring cache for the full employer collection.

The cache keeps the *unfiltered* collection returned by the employer source
together with the time it was written.  Entries older than the TTL are treated
as absent and removed on the next read.  Caching is best effort: storage and
serialisation faults are logged and reported as a cache miss, never raised.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import ValidationError

from employer_search.schemas.employer import Employer
from employer_search.storage import (
    EMPLOYER_CACHE_KEY,
    EMPLOYER_CACHE_TIMESTAMP_KEY,
    StorageClient,
    StorageError,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# TTL constants
# ---------------------------------------------------------------------------
EMPLOYER_CACHE_TTL: int = 7 * 24 * 60 * 60


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------
def serialize_employers(employers: Iterable[Employer]) -> list[dict[str, Any]]:
    """Serialise employers into cache friendly dictionaries using feed aliases."""

    return [employer.model_dump(by_alias=True) for employer in employers]


def deserialize_employers(payload: Any) -> list[Employer]:
    """Rehydrate cached employer payloads back into ``Employer`` models."""

    if not isinstance(payload, list):
        raise TypeError("Expected cached employers to be a list")
    return [Employer.model_validate(item) for item in payload]


class EmployerCacheManager:
    """Persist the employer collection with a timestamp and answer freshness."""

    def __init__(
        self,
        client: StorageClient,
        *,
        ttl_seconds: int = EMPLOYER_CACHE_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._write_lock = asyncio.Lock()

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    async def save(self, employers: Iterable[Employer]) -> None:
        """Overwrite the cached collection and stamp it with the current time."""

        try:
            payload = serialize_employers(employers)
        except (TypeError, ValueError) as exc:
            logger.warning("Failed to serialise employers for caching: %s", exc)
            return

        timestamp = self._clock()
        async with self._write_lock:
            try:
                await asyncio.to_thread(self._client.set_json, EMPLOYER_CACHE_KEY, payload)
                await asyncio.to_thread(
                    self._client.set_json, EMPLOYER_CACHE_TIMESTAMP_KEY, timestamp
                )
            except StorageError as exc:
                logger.warning("Failed to cache employers: %s", exc)
                return

        logger.debug("Cached %d employers at %.0f", len(payload), timestamp)

    async def load(self) -> list[Employer] | None:
        """Return the cached employers, or ``None`` when absent or expired."""

        if await self.is_expired():
            await self.clear()
            return None

        try:
            payload = await asyncio.to_thread(self._client.get_json, EMPLOYER_CACHE_KEY)
        except StorageError as exc:
            logger.warning("Failed to load cached employers: %s", exc)
            return None

        if payload is None:
            return None

        try:
            return deserialize_employers(payload)
        except (TypeError, ValidationError) as exc:
            logger.warning("Cached employers could not be decoded: %s", exc)
            return None

    async def is_expired(self) -> bool:
        """Return ``True`` when no timestamp exists or it is older than the TTL."""

        try:
            timestamp = await asyncio.to_thread(
                self._client.get_json, EMPLOYER_CACHE_TIMESTAMP_KEY
            )
        except StorageError as exc:
            logger.warning("Failed to read cache timestamp: %s", exc)
            return True

        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return True

        age = self._clock() - timestamp
        if age > self._ttl_seconds:
            logger.info("Employer cache expired (age %.0fs)", age)
            return True
        return False

    async def clear(self) -> None:
        """Delete the cached collection and its timestamp.  Safe to repeat."""

        async with self._write_lock:
            try:
                await asyncio.to_thread(
                    self._client.delete, EMPLOYER_CACHE_KEY, EMPLOYER_CACHE_TIMESTAMP_KEY
                )
            except StorageError as exc:
                logger.warning("Failed to clear employer cache: %s", exc)


__all__ = [
    "EMPLOYER_CACHE_TTL",
    "EmployerCacheManager",
    "deserialize_employers",
    "serialize_employers",
]
