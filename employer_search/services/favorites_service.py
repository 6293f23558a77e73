"""Locally persisted set of favorite employer identifiers.

Favorites are independent of search: the search service never consults them,
and an identifier stays favorited even when the employer is absent from the
current results.  Callers building a "favorites only" view intersect search
output with :meth:`FavoritesStore.all_favorite_ids` (see
:func:`filter_favorites`).
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from employer_search.schemas.employer import Employer
from employer_search.storage import FAVORITES_KEY, StorageClient, StorageError

logger = logging.getLogger(__name__)


class FavoritesStore:
    """Synchronous favorites set backed by secure storage."""

    def __init__(self, client: StorageClient, *, key: str = FAVORITES_KEY) -> None:
        self._client = client
        self._key = key
        self._lock = threading.Lock()

    def toggle(self, employer_id: int) -> bool:
        """Flip membership of ``employer_id`` and return the new state."""

        with self._lock:
            favorites = set(self._read())
            if employer_id in favorites:
                favorites.remove(employer_id)
                is_favorite = False
            else:
                favorites.add(employer_id)
                is_favorite = True

            try:
                self._client.set_json(self._key, sorted(favorites))
            except StorageError as exc:
                logger.warning("Failed to persist favorites: %s", exc)
                return not is_favorite
        return is_favorite

    def is_favorite(self, employer_id: int) -> bool:
        return employer_id in self.all_favorite_ids()

    def all_favorite_ids(self) -> frozenset[int]:
        with self._lock:
            return self._read()

    def clear(self) -> None:
        with self._lock:
            try:
                self._client.delete(self._key)
            except StorageError as exc:
                logger.warning("Failed to clear favorites: %s", exc)

    def _read(self) -> frozenset[int]:
        try:
            payload = self._client.get_json(self._key)
        except StorageError as exc:
            logger.warning("Failed to load favorites: %s", exc)
            return frozenset()

        if payload is None:
            return frozenset()
        if not isinstance(payload, list) or not all(
            isinstance(item, int) and not isinstance(item, bool) for item in payload
        ):
            logger.warning("Ignoring malformed favorites payload")
            return frozenset()
        return frozenset(payload)


def filter_favorites(
    employers: Iterable[Employer], favorite_ids: Iterable[int]
) -> list[Employer]:
    """Keep only favorited employers, preserving order."""

    wanted = frozenset(favorite_ids)
    return [employer for employer in employers if employer.id in wanted]


__all__ = ["FavoritesStore", "filter_favorites"]
