"""Providers of the complete employer collection."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, runtime_checkable

from employer_search.schemas.employer import Employer

logger = logging.getLogger(__name__)


class EmployerSourceError(Exception):
    """Raised when the employer collection cannot be retrieved."""


@runtime_checkable
class EmployerSourceProtocol(Protocol):
    """Minimal source surface required by the employer repository."""

    async def fetch_all(self) -> list[Employer]:
        """Return the complete collection or raise :class:`EmployerSourceError`."""


# (EmployerID, Name, Place, DiscountPercentage)
_EMPLOYER_ROWS: tuple[tuple[int, str, str, int], ...] = (
    (14116, "Achmea Zeist", "ZEIST", 17),
    (50832, "Achmea Vitaliteit b.v. Leusden", "LEUSDEN", 8),
    (10234, "Rabobank Nederland", "UTRECHT", 12),
    (20456, "ABN AMRO Bank N.V.", "AMSTERDAM", 15),
    (30789, "ING Groep N.V.", "AMSTERDAM", 10),
    (40123, "Philips Nederland B.V.", "EINDHOVEN", 5),
    (50456, "ASML Netherlands B.V.", "VELDHOVEN", 18),
    (60789, "Shell Nederland B.V.", "DEN HAAG", 7),
    (70234, "Unilever Nederland B.V.", "ROTTERDAM", 14),
    (80567, "KLM Royal Dutch Airlines", "SCHIPHOL", 9),
    (90890, "Heineken Nederland B.V.", "AMSTERDAM", 11),
    (11123, "Albert Heijn B.V.", "ZAANDAM", 6),
    (12456, "Ahold Delhaize", "ZAANDAM", 13),
    (13789, "PostNL N.V.", "DEN HAAG", 16),
    (14234, "NS Nederlandse Spoorwegen", "UTRECHT", 4),
    (15567, "ProRail B.V.", "UTRECHT", 19),
    (16890, "Gemeente Amsterdam", "AMSTERDAM", 8),
    (17123, "Gemeente Rotterdam", "ROTTERDAM", 12),
    (18456, "Gemeente Utrecht", "UTRECHT", 10),
    (19789, "Gemeente Den Haag", "DEN HAAG", 15),
    (21234, "Rijkswaterstaat", "UTRECHT", 7),
    (22567, "Belastingdienst", "APELDOORN", 11),
    (23890, "UWV Werkbedrijf", "AMSTERDAM", 9),
    (24123, "Politie Nederland", "DEN HAAG", 14),
    (25456, "Defensie", "DEN HAAG", 6),
    (26789, "Erasmus MC Rotterdam", "ROTTERDAM", 17),
    (27234, "AMC Amsterdam", "AMSTERDAM", 13),
    (28567, "UMCG Groningen", "GRONINGEN", 8),
    (29890, "Radboudumc Nijmegen", "NIJMEGEN", 10),
    (31123, "LUMC Leiden", "LEIDEN", 5),
    (32456, "TU Delft", "DELFT", 12),
    (33789, "TU Eindhoven", "EINDHOVEN", 16),
    (34234, "Universiteit Utrecht", "UTRECHT", 9),
    (35567, "Universiteit van Amsterdam", "AMSTERDAM", 11),
    (36890, "Vrije Universiteit Amsterdam", "AMSTERDAM", 7),
    (37123, "Rijksuniversiteit Groningen", "GRONINGEN", 14),
    (38456, "Universiteit Leiden", "LEIDEN", 18),
    (39789, "Wageningen University", "WAGENINGEN", 6),
    (41234, "Coolblue B.V.", "ROTTERDAM", 15),
    (42567, "Bol.com B.V.", "UTRECHT", 10),
    (43890, "Booking.com B.V.", "AMSTERDAM", 8),
    (44123, "TomTom N.V.", "AMSTERDAM", 13),
    (45456, "Adyen N.V.", "AMSTERDAM", 19),
    (46789, "Randstad Holding N.V.", "DIEMEN", 5),
    (47234, "Wolters Kluwer N.V.", "ALPHEN AAN DEN RIJN", 11),
    (48567, "DSM N.V.", "HEERLEN", 7),
    (49890, "AkzoNobel N.V.", "AMSTERDAM", 16),
    (51123, "NXP Semiconductors", "EINDHOVEN", 9),
    (52456, "VDL Groep B.V.", "EINDHOVEN", 12),
)

DEFAULT_EMPLOYERS: tuple[Employer, ...] = tuple(
    Employer(id=employer_id, name=name, place=place, discount_percentage=discount)
    for employer_id, name, place, discount in _EMPLOYER_ROWS
)


class StaticEmployerSource:
    """Serve a fixed employer collection after a simulated network delay."""

    def __init__(
        self,
        employers: tuple[Employer, ...] | list[Employer] = DEFAULT_EMPLOYERS,
        *,
        latency_seconds: float = 0.5,
    ) -> None:
        identifiers = [employer.id for employer in employers]
        if len(identifiers) != len(set(identifiers)):
            raise ValueError("Employer identifiers must be unique")
        self._employers = tuple(employers)
        self._latency_seconds = latency_seconds

    async def fetch_all(self) -> list[Employer]:
        if self._latency_seconds > 0:
            await asyncio.sleep(self._latency_seconds)
        logger.debug("Static source returned %d employers", len(self._employers))
        return list(self._employers)


__all__ = [
    "DEFAULT_EMPLOYERS",
    "EmployerSourceError",
    "EmployerSourceProtocol",
    "StaticEmployerSource",
]
