from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from employer_search.schemas.employer import Employer, SortOption
from employer_search.services.employer_repository import EmployerRepositoryProtocol

# Key function and ``reverse`` flag per option.  ``sorted`` stays stable when
# ``reverse`` is set, so ties keep their original relative order in every case.
_SORT_STRATEGIES: dict[SortOption, tuple[Callable[[Employer], Any], bool]] = {
    SortOption.NAME_ASC: (lambda employer: employer.name, False),
    SortOption.NAME_DESC: (lambda employer: employer.name, True),
    SortOption.DISCOUNT_DESC: (lambda employer: employer.discount_percentage, True),
    SortOption.DISCOUNT_ASC: (lambda employer: employer.discount_percentage, False),
    SortOption.LOCATION_ASC: (lambda employer: employer.place, False),
}


def filter_by_min_discount(
    employers: Iterable[Employer], min_discount: int | None
) -> list[Employer]:
    """Keep employers whose discount is at least ``min_discount``."""

    if min_discount is None:
        return list(employers)
    return [
        employer for employer in employers if employer.discount_percentage >= min_discount
    ]


def sort_employers(employers: Iterable[Employer], sort_by: SortOption) -> list[Employer]:
    """Return ``employers`` ordered according to ``sort_by``."""

    try:
        key, reverse = _SORT_STRATEGIES[SortOption(sort_by)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unsupported sort option: {sort_by!r}") from exc
    return sorted(employers, key=key, reverse=reverse)


class SearchEmployersService:
    def __init__(self, repository: EmployerRepositoryProtocol) -> None:
        self._repository = repository

    async def execute(
        self,
        query: str,
        min_discount: int | None = None,
        sort_by: SortOption = SortOption.NAME_ASC,
    ) -> list[Employer]:
        """Search employers, drop those below ``min_discount`` and sort the rest.

        Repository failures propagate unchanged.
        """

        trimmed_query = query.strip()
        employers = await self._repository.search(trimmed_query)
        filtered = filter_by_min_discount(employers, min_discount)
        return sort_employers(filtered, sort_by)


__all__ = ["SearchEmployersService", "filter_by_min_discount", "sort_employers"]
