"""SQLAlchemy-backed region and commission lookups for the application merge.

Queries run with autoflush disabled: the merge calls them while the user
being merged still has unsaved changes, which must not reach the database
before the save decides whether to commit.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from observer_api.lib.merger.lookups import Lookups
from observer_api.models import Region, Uic, UicKind


class SqlRegionLookup:
    """Region lookups over the ``regions`` and ``uics`` tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def region_by_id(self, region_id: uuid.UUID) -> Region | None:
        result = await self._session.execute(
            select(Region).where(Region.id == region_id).execution_options(autoflush=False)
        )
        return result.scalar_one_or_none()

    def has_territorial_commission(self, region: Region) -> bool:
        return bool(region.has_tic)

    async def first_territorial_commission(self, region: Region) -> Uic | None:
        result = await self._session.execute(
            select(Uic)
            .where(Uic.kind == UicKind.TIC, Uic.region_id == region.id)
            .order_by(Uic.name)
            .limit(1)
            .execution_options(autoflush=False)
        )
        return result.scalar_one_or_none()


class SqlUicLookup:
    """Commission lookups over the ``uics`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def precinct_commission_by_number(self, number: int) -> Uic | None:
        return await self._first(select(Uic).where(Uic.kind == UicKind.UIC, Uic.number == number))

    async def commission_by_number(self, number: int) -> Uic | None:
        return await self._first(select(Uic).where(Uic.number == number))

    async def territorial_commission_by_name(self, name: str) -> Uic | None:
        return await self._first(select(Uic).where(Uic.kind == UicKind.TIC, Uic.name == name))

    async def _first(self, query) -> Uic | None:  # type: ignore[no-untyped-def]
        result = await self._session.execute(query.order_by(Uic.name).limit(1).execution_options(autoflush=False))
        return result.scalar_one_or_none()


def build_lookups(session: AsyncSession) -> Lookups:
    """Return merge lookups bound to ``session``."""
    return Lookups(regions=SqlRegionLookup(session), uics=SqlUicLookup(session))
