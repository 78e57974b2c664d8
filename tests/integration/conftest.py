"""Seed data for integration tests against an in-memory database."""

from dataclasses import dataclass

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from observer_api.models import (
    CurrentRole,
    Organisation,
    Region,
    RegionKind,
    Role,
    Uic,
    UicKind,
)
from observer_api.services.notification_service import SmsNotifier

ROLE_NAMES = {
    "admin": "Administrator",
    "federal_repr": "Federal representative",
    "cc": "Central commission member",
    "mc": "Municipal commission member",
    "tc": "Territorial commission member",
    "observer": "Observer",
}


@dataclass
class Seed:
    """Rows created by the ``seed`` fixture."""

    roles: dict[str, Role]
    current_roles: dict[str, CurrentRole]
    adm_region: Region
    mun_region: Region
    organisation: Organisation
    uics: dict[str, Uic]


@pytest.fixture
async def seed(async_session: AsyncSession) -> Seed:
    """Insert reference data and commit it."""
    roles = {slug: Role(slug=slug, name=name) for slug, name in ROLE_NAMES.items()}
    current_roles = {
        "observer_uic": CurrentRole(
            slug="observer_uic", name="Observer at precinct commission", position=1, must_have_uic=True
        ),
        "tic_member": CurrentRole(
            slug="tic_member", name="Territorial commission member", position=2, must_have_tic=True
        ),
        "mobile": CurrentRole(slug="mobile", name="Mobile group", position=3),
    }
    city = Region(name="Moscow", kind=RegionKind.CITY, has_tic=False)
    async_session.add_all([*roles.values(), *current_roles.values(), city])
    await async_session.flush()

    adm_region = Region(name="Central", kind=RegionKind.ADM_REGION, parent_id=city.id, has_tic=True)
    async_session.add(adm_region)
    await async_session.flush()
    mun_region = Region(name="Arbat", kind=RegionKind.MUN_REGION, parent_id=adm_region.id, has_tic=True)
    organisation = Organisation(name="Citizen Observer")
    async_session.add_all([mun_region, organisation])
    await async_session.flush()

    uics = {
        "uic_123": Uic(kind=UicKind.UIC, number=123, name="UIC 123", region_id=mun_region.id),
        "tic_arbat": Uic(kind=UicKind.TIC, name="TIC Arbat", region_id=mun_region.id),
    }
    async_session.add_all(uics.values())
    await async_session.commit()
    return Seed(
        roles=roles,
        current_roles=current_roles,
        adm_region=adm_region,
        mun_region=mun_region,
        organisation=organisation,
        uics=uics,
    )


@pytest.fixture
def sms_requests() -> list[httpx.Request]:
    """Requests received by the fake SMS gateway."""
    return []


@pytest.fixture
def notifier(sms_requests: list[httpx.Request]) -> SmsNotifier:
    """SMS notifier backed by a recording transport."""

    def handler(request: httpx.Request) -> httpx.Response:
        sms_requests.append(request)
        return httpx.Response(200, json={"status": "queued"})

    return SmsNotifier("https://sms.test/send", api_key="key", transport=httpx.MockTransport(handler))
