"""In-memory region and commission lookups for merge tests."""

import uuid

import pytest

from observer_api.lib.merger import Lookups
from observer_api.models import Region, RegionKind, Uic, UicKind


class FakeRegionLookup:
    """Region lookup over a dict of regions."""

    def __init__(self, regions: list[Region], commissions: list[Uic]) -> None:
        self.regions = {region.id: region for region in regions}
        self.commissions = commissions
        self.calls: list[str] = []

    async def region_by_id(self, region_id: uuid.UUID) -> Region | None:
        self.calls.append("region_by_id")
        return self.regions.get(region_id)

    def has_territorial_commission(self, region: Region) -> bool:
        return region.has_tic

    async def first_territorial_commission(self, region: Region) -> Uic | None:
        self.calls.append("first_territorial_commission")
        tics = sorted(
            (uic for uic in self.commissions if uic.is_tic and uic.region_id == region.id),
            key=lambda uic: uic.name,
        )
        return tics[0] if tics else None


class FakeUicLookup:
    """Commission lookup over a list of commissions."""

    def __init__(self, commissions: list[Uic]) -> None:
        self.commissions = commissions
        self.calls: list[str] = []

    async def precinct_commission_by_number(self, number: int) -> Uic | None:
        self.calls.append("precinct_commission_by_number")
        return self._first(lambda uic: not uic.is_tic and uic.number == number)

    async def commission_by_number(self, number: int) -> Uic | None:
        self.calls.append("commission_by_number")
        return self._first(lambda uic: uic.number == number)

    async def territorial_commission_by_name(self, name: str) -> Uic | None:
        self.calls.append("territorial_commission_by_name")
        return self._first(lambda uic: uic.is_tic and uic.name == name)

    def _first(self, predicate) -> Uic | None:  # type: ignore[no-untyped-def]
        for uic in self.commissions:
            if predicate(uic):
                return uic
        return None


@pytest.fixture
def city() -> Region:
    return Region(id=uuid.uuid4(), name="Moscow", kind=RegionKind.CITY, has_tic=False)


@pytest.fixture
def adm_region(city: Region) -> Region:
    return Region(id=uuid.uuid4(), name="Central", kind=RegionKind.ADM_REGION, parent_id=city.id, has_tic=True)


@pytest.fixture
def mun_region(adm_region: Region) -> Region:
    return Region(id=uuid.uuid4(), name="Arbat", kind=RegionKind.MUN_REGION, parent_id=adm_region.id, has_tic=True)


@pytest.fixture
def quiet_region(adm_region: Region) -> Region:
    """A municipal region without its own territorial commission."""
    return Region(
        id=uuid.uuid4(), name="Khamovniki", kind=RegionKind.MUN_REGION, parent_id=adm_region.id, has_tic=False
    )


@pytest.fixture
def empty_region(adm_region: Region) -> Region:
    """A municipal region flagged as having a territorial commission that has no row."""
    return Region(
        id=uuid.uuid4(), name="Presnensky", kind=RegionKind.MUN_REGION, parent_id=adm_region.id, has_tic=True
    )


@pytest.fixture
def commissions(adm_region: Region, mun_region: Region) -> dict[str, Uic]:
    return {
        "uic_123": Uic(id=uuid.uuid4(), kind=UicKind.UIC, number=123, name="UIC 123", region_id=mun_region.id),
        "uic_45": Uic(id=uuid.uuid4(), kind=UicKind.UIC, number=45, name="UIC 45", region_id=mun_region.id),
        "tic_arbat": Uic(id=uuid.uuid4(), kind=UicKind.TIC, number=None, name="TIC Arbat", region_id=mun_region.id),
        "tic_central": Uic(
            id=uuid.uuid4(), kind=UicKind.TIC, number=None, name="TIC Central", region_id=adm_region.id
        ),
    }


@pytest.fixture
def region_lookup(city, adm_region, mun_region, quiet_region, empty_region, commissions) -> FakeRegionLookup:
    return FakeRegionLookup([city, adm_region, mun_region, quiet_region, empty_region], list(commissions.values()))


@pytest.fixture
def uic_lookup(commissions) -> FakeUicLookup:
    return FakeUicLookup(list(commissions.values()))


@pytest.fixture
def lookups(region_lookup: FakeRegionLookup, uic_lookup: FakeUicLookup) -> Lookups:
    return Lookups(regions=region_lookup, uics=uic_lookup)
