"""Repository combining the employer cache with the employer source."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from employer_search.schemas.employer import Employer, filter_employers
from employer_search.services.employer_cache import EmployerCacheManager
from employer_search.services.employer_source import EmployerSourceProtocol

logger = logging.getLogger(__name__)


@runtime_checkable
class EmployerRepositoryProtocol(Protocol):
    """Repository surface consumed by :class:`SearchEmployersService`."""

    async def search(self, query: str) -> list[Employer]:
        """Return employers whose name or place contains ``query``."""

    async def clear_expired_cache(self) -> bool:
        """Drop the cached collection when it is past its TTL."""


class EmployerRepository:
    """Serve employer searches from the cache, falling back to the source.

    The cache stores the unfiltered collection, so a warm cache answers every
    query without touching the source.  Filtering always happens after the
    cache decision.
    """

    def __init__(
        self,
        source: EmployerSourceProtocol,
        cache: EmployerCacheManager,
    ) -> None:
        self._source = source
        self._cache = cache

    async def search(self, query: str) -> list[Employer]:
        cached = await self._cache.load()
        if cached is not None:
            logger.debug("Serving employer search from cache (%d cached)", len(cached))
            return filter_employers(cached, query)

        # Source failures propagate to the caller and leave the cache untouched.
        employers = await self._source.fetch_all()
        await self._cache.save(employers)
        logger.info("Fetched %d employers from source", len(employers))
        return filter_employers(employers, query)

    async def clear_expired_cache(self) -> bool:
        """Clear the cache when expired.  Returns ``True`` if it was cleared."""

        if await self._cache.is_expired():
            await self._cache.clear()
            return True
        return False


__all__ = ["EmployerRepository", "EmployerRepositoryProtocol"]
