"""Stateful search coordinator for presentation layers.

A :class:`SearchSession` owns the inputs of a search screen (query text,
minimum discount, sort order, favorites-only toggle) and the resulting state
(employers, loading flag, error).  It implements the caller-side rules around
the search service:

* query edits are debounced and a settled query equal to the previously
  dispatched one is dropped;
* filter, sort, and favorites changes search immediately;
* each dispatch cancels the in-flight search, and a generation counter makes
  sure a late result from a superseded search is discarded (last request wins);
* the favorites-only view is applied here, after the search service returns.

:meth:`SearchSession.start` schedules the initial debounced search for the
empty query, so a fresh screen shows the full list.

All mutating methods must be called from a running event loop.
"""

from __future__ import annotations

import asyncio
import logging

from employer_search.schemas.employer import Employer, SortOption
from employer_search.schemas.error import ErrorType, SearchError
from employer_search.services.employer_source import EmployerSourceError
from employer_search.services.favorites_service import FavoritesStore, filter_favorites
from employer_search.services.search_service import SearchEmployersService

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3


class SearchSession:
    def __init__(
        self,
        search_service: SearchEmployersService,
        favorites: FavoritesStore,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._search_service = search_service
        self._favorites = favorites
        self._debounce_seconds = debounce_seconds

        self.query: str = ""
        self.min_discount: int | None = None
        self.sort_option: SortOption = SortOption.NAME_ASC
        self.favorites_only: bool = False

        self.employers: list[Employer] = []
        self.is_loading: bool = False
        self.error: SearchError | None = None

        self._last_dispatched_query: str | None = None
        self._debounce_task: asyncio.Task[None] | None = None
        self._search_task: asyncio.Task[None] | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of searches dispatched so far."""

        return self._generation

    def start(self) -> None:
        """Schedule the initial debounced search for the current query."""

        self.set_query(self.query)

    def set_query(self, text: str) -> None:
        """Record new query text and search once input settles."""

        self.query = text
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = asyncio.create_task(self._settle_query(text))

    def select_filter(self, min_discount: int | None) -> None:
        if min_discount == self.min_discount:
            return
        self.min_discount = min_discount
        self._dispatch()

    def select_sort(self, sort_option: SortOption) -> None:
        sort_option = SortOption(sort_option)
        if sort_option == self.sort_option:
            return
        self.sort_option = sort_option
        self._dispatch()

    def set_favorites_only(self, enabled: bool) -> None:
        if enabled == self.favorites_only:
            return
        self.favorites_only = enabled
        self._dispatch()

    def retry(self) -> None:
        """Re-run the current search immediately, bypassing the debounce."""

        self._dispatch()

    async def wait_idle(self) -> None:
        """Wait until no debounce or search work is pending."""

        while True:
            pending = [
                task
                for task in (self._debounce_task, self._search_task)
                if task is not None and not task.done()
            ]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        """Cancel pending work; the session keeps its last state."""

        for task in (self._debounce_task, self._search_task):
            if task is not None and not task.done():
                task.cancel()
        await self.wait_idle()
        self.is_loading = False

    async def _settle_query(self, text: str) -> None:
        await asyncio.sleep(self._debounce_seconds)
        normalized = text.strip()
        if normalized == self._last_dispatched_query:
            logger.debug("Skipping duplicate query %r", normalized)
            return
        self._dispatch()

    def _dispatch(self) -> None:
        if self._search_task is not None and not self._search_task.done():
            self._search_task.cancel()

        self._generation += 1
        self._last_dispatched_query = self.query.strip()
        self.is_loading = True
        self.error = None
        self._search_task = asyncio.create_task(
            self._run_search(
                self._generation,
                self.query,
                self.min_discount,
                self.sort_option,
                self.favorites_only,
            )
        )

    async def _run_search(
        self,
        generation: int,
        query: str,
        min_discount: int | None,
        sort_option: SortOption,
        favorites_only: bool,
    ) -> None:
        try:
            employers = await self._search_service.execute(
                query, min_discount=min_discount, sort_by=sort_option
            )
        except EmployerSourceError as exc:
            if generation != self._generation:
                return
            logger.warning("Employer search failed: %s", exc)
            self.error = SearchError(
                error_type=ErrorType.NETWORK_ERROR,
                message="Employers could not be loaded",
                detail=str(exc) or None,
                retryable=True,
            )
            self.is_loading = False
            return
        except Exception as exc:
            if generation != self._generation:
                return
            logger.exception("Unexpected error during employer search")
            self.error = SearchError(
                error_type=ErrorType.INTERNAL_ERROR,
                message="Search failed unexpectedly",
                detail=str(exc) or None,
                retryable=False,
            )
            self.is_loading = False
            return

        if generation != self._generation:
            logger.debug("Discarding results of superseded search %d", generation)
            return

        if favorites_only:
            favorite_ids = await asyncio.to_thread(self._favorites.all_favorite_ids)
            if generation != self._generation:
                return
            employers = filter_favorites(employers, favorite_ids)
        self.employers = employers
        self.is_loading = False


__all__ = ["DEFAULT_DEBOUNCE_SECONDS", "SearchSession"]
