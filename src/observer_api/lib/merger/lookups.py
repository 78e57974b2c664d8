"""Region and commission lookups consumed by the merge.

The merge only needs a handful of read queries, described here as
protocols so that tests can supply in-memory fakes.  The SQLAlchemy
implementation lives in :mod:`observer_api.services.lookup_service`.
"""

import uuid
from dataclasses import dataclass
from typing import Protocol

from observer_api.models import Region, Uic


class RegionLookup(Protocol):
    """Read access to the region tree."""

    async def region_by_id(self, region_id: uuid.UUID) -> Region | None:
        """Return the region, or None if it does not exist."""
        ...

    def has_territorial_commission(self, region: Region) -> bool:
        """Return whether a territorial commission sits at this region's level."""
        ...

    async def first_territorial_commission(self, region: Region) -> Uic | None:
        """Return the region's first territorial commission, if any."""
        ...


class UicLookup(Protocol):
    """Read access to election commissions."""

    async def precinct_commission_by_number(self, number: int) -> Uic | None:
        """Return the precinct commission with this number."""
        ...

    async def commission_by_number(self, number: int) -> Uic | None:
        """Return any commission (precinct or territorial) with this number."""
        ...

    async def territorial_commission_by_name(self, name: str) -> Uic | None:
        """Return the territorial commission with this name."""
        ...


@dataclass(frozen=True)
class Lookups:
    """Collaborators used to resolve commission links."""

    regions: RegionLookup
    uics: UicLookup
