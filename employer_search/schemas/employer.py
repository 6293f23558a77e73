from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortOption(str, Enum):
    """Orderings available for search results."""

    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    DISCOUNT_DESC = "discount_desc"
    DISCOUNT_ASC = "discount_asc"
    LOCATION_ASC = "location_asc"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS: dict[SortOption, str] = {
    SortOption.NAME_ASC: "Name (A-Z)",
    SortOption.NAME_DESC: "Name (Z-A)",
    SortOption.DISCOUNT_DESC: "Discount (High to Low)",
    SortOption.DISCOUNT_ASC: "Discount (Low to High)",
    SortOption.LOCATION_ASC: "Location (A-Z)",
}


class Employer(BaseModel):
    """Employer offering a discount.

    Instances are frozen so they can be used as dictionary keys and compared by
    value.  The aliases mirror the field names used by the upstream employer
    feed; the cache stores records in that same shape.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(alias="EmployerID")
    name: str = Field(alias="Name")
    place: str = Field(alias="Place")
    discount_percentage: int = Field(alias="DiscountPercentage", ge=0, le=100)

    @property
    def display_name(self) -> str:
        return f"{self.name} - {self.place}"

    def matches(self, query: str) -> bool:
        """Return ``True`` when ``query`` appears in the name or place.

        The comparison is a case-insensitive substring test; an empty query
        matches every employer.
        """

        if not query:
            return True

        needle = query.lower()
        return needle in self.name.lower() or needle in self.place.lower()


def filter_employers(employers: Iterable[Employer], query: str) -> list[Employer]:
    """Return the employers matching ``query`` in their original order."""

    if not query:
        return list(employers)
    return [employer for employer in employers if employer.matches(query)]


__all__ = ["Employer", "SortOption", "filter_employers"]
