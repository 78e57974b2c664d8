"""Unit tests for commission resolution chains."""

import uuid

import pytest

from observer_api.lib.merger import PRECINCT_CHAIN, TERRITORIAL_CHAIN, ResolutionContext, chain_for, resolve_commission
from observer_api.lib.merger.resolution import parse_commission_number
from observer_api.models import User, UserApp


def _context(value: str | None, *, uic: int | None = None, region_id=None, adm_region_id=None) -> ResolutionContext:
    user = User(region_id=region_id, adm_region_id=adm_region_id)
    return ResolutionContext(user=user, application=UserApp(id=uuid.uuid4(), phone="9161234567", uic=uic), value=value)


class TestChainFor:
    """Tests for chain_for."""

    def test_precinct(self, current_roles) -> None:
        assert chain_for(current_roles["observer_uic"]) is PRECINCT_CHAIN

    def test_territorial(self, current_roles) -> None:
        assert chain_for(current_roles["tic_member"]) is TERRITORIAL_CHAIN

    def test_none(self, current_roles) -> None:
        assert chain_for(current_roles["mobile"]) == ()


class TestParseCommissionNumber:
    """Tests for parse_commission_number."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("123", 123), (" 7 ", 7), (45, 45), ("12a", None), ("", None), (None, None), ("-3", None)],
    )
    def test_parse(self, value, expected) -> None:
        assert parse_commission_number(value) == expected


class TestPrecinctChain:
    """Precinct commissions: requested number, then the application's number."""

    @pytest.mark.asyncio
    async def test_requested_number_wins(self, lookups, commissions, uic_lookup) -> None:
        uic = await resolve_commission(PRECINCT_CHAIN, lookups, _context("123", uic=45))
        assert uic is commissions["uic_123"]
        assert uic_lookup.calls == ["precinct_commission_by_number"]

    @pytest.mark.asyncio
    async def test_falls_back_to_application_number(self, lookups, commissions, uic_lookup) -> None:
        uic = await resolve_commission(PRECINCT_CHAIN, lookups, _context("999", uic=45))
        assert uic is commissions["uic_45"]
        assert uic_lookup.calls == ["precinct_commission_by_number", "commission_by_number"]

    @pytest.mark.asyncio
    async def test_nothing_found(self, lookups) -> None:
        assert await resolve_commission(PRECINCT_CHAIN, lookups, _context(None)) is None


class TestTerritorialChain:
    """Territorial commissions: requested name, region, then administrative region."""

    @pytest.mark.asyncio
    async def test_name_wins(self, lookups, commissions, adm_region, mun_region) -> None:
        ctx = _context("TIC Central", region_id=mun_region.id, adm_region_id=adm_region.id)
        assert await resolve_commission(TERRITORIAL_CHAIN, lookups, ctx) is commissions["tic_central"]

    @pytest.mark.asyncio
    async def test_region_before_adm_region(self, lookups, commissions, adm_region, mun_region) -> None:
        ctx = _context("Unknown TIC", region_id=mun_region.id, adm_region_id=adm_region.id)
        assert await resolve_commission(TERRITORIAL_CHAIN, lookups, ctx) is commissions["tic_arbat"]

    @pytest.mark.asyncio
    async def test_unflagged_region_uses_adm_region(self, lookups, commissions, adm_region, quiet_region) -> None:
        ctx = _context(None, region_id=quiet_region.id, adm_region_id=adm_region.id)
        assert await resolve_commission(TERRITORIAL_CHAIN, lookups, ctx) is commissions["tic_central"]

    @pytest.mark.asyncio
    async def test_flagged_region_without_commission_stops(
        self, lookups, region_lookup, adm_region, empty_region
    ) -> None:
        ctx = _context(None, region_id=empty_region.id, adm_region_id=adm_region.id)
        assert await resolve_commission(TERRITORIAL_CHAIN, lookups, ctx) is None
        assert region_lookup.calls == ["region_by_id", "first_territorial_commission"]

    @pytest.mark.asyncio
    async def test_unknown_region_uses_adm_region(self, lookups, commissions, adm_region) -> None:
        ctx = _context(None, region_id=uuid.uuid4(), adm_region_id=adm_region.id)
        assert await resolve_commission(TERRITORIAL_CHAIN, lookups, ctx) is commissions["tic_central"]

    @pytest.mark.asyncio
    async def test_no_regions(self, lookups, region_lookup) -> None:
        assert await resolve_commission(TERRITORIAL_CHAIN, lookups, _context(None)) is None
        assert region_lookup.calls == []

    @pytest.mark.asyncio
    async def test_unknown_region(self, lookups) -> None:
        ctx = _context(None, region_id=uuid.uuid4())
        assert await resolve_commission(TERRITORIAL_CHAIN, lookups, ctx) is None

    @pytest.mark.asyncio
    async def test_city_has_no_commission(self, lookups, city) -> None:
        ctx = _context(None, adm_region_id=city.id)
        assert await resolve_commission(TERRITORIAL_CHAIN, lookups, ctx) is None
