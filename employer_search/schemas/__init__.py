"""Pydantic schemas shared by the employer search services."""

from employer_search.schemas.employer import (  # noqa: F401
    Employer,
    SortOption,
    filter_employers,
)
from employer_search.schemas.error import ErrorType, SearchError  # noqa: F401
