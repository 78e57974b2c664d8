"""Commission resolution for nomination-duty assignments.

Each duty that must be tied to a commission has an ordered chain of
strategies.  A strategy returns a commission or None, and the first
commission found wins.  An empty result is not an error: the assignment is
created without a commission and completed by an administrator.

Precinct chain:
    1. precinct commission numbered by the requested value
    2. any commission numbered by the application's own precinct field

Territorial chain:
    1. territorial commission named by the requested value
    2. first territorial commission of the user's region if the region is
       flagged as having one, otherwise of the administrative region if that
       is flagged
"""

import uuid
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from loguru import logger

from observer_api.lib.merger.lookups import Lookups
from observer_api.models import CurrentRole, Region, Uic, User, UserApp


@dataclass(frozen=True)
class ResolutionContext:
    """What a strategy may look at.

    Attributes:
        user: The user being merged, with region fields already updated.
        application: The single application the duty was requested by.
        value: The requested value (commission number or name).
    """

    user: User
    application: UserApp
    value: str | None


Strategy = Callable[[Lookups, ResolutionContext], Awaitable[Uic | None]]


def parse_commission_number(value: object) -> int | None:
    """Parse a commission number from free text; None if it is not numeric."""
    if value is None:
        return None
    text = str(value).strip()
    if not text.isdigit():
        return None
    return int(text)


async def precinct_by_requested_number(lookups: Lookups, ctx: ResolutionContext) -> Uic | None:
    number = parse_commission_number(ctx.value)
    if number is None:
        return None
    return await lookups.uics.precinct_commission_by_number(number)


async def commission_by_application_number(lookups: Lookups, ctx: ResolutionContext) -> Uic | None:
    number = parse_commission_number(ctx.application.uic)
    if number is None:
        return None
    return await lookups.uics.commission_by_number(number)


async def territorial_by_requested_name(lookups: Lookups, ctx: ResolutionContext) -> Uic | None:
    if ctx.value is None or not ctx.value.strip():
        return None
    return await lookups.uics.territorial_commission_by_name(ctx.value.strip())


async def _territorial_region(lookups: Lookups, region_id: uuid.UUID | None) -> Region | None:
    """Return the region if it exists and is flagged as having a territorial commission."""
    if region_id is None:
        return None
    region = await lookups.regions.region_by_id(region_id)
    if region is None or not lookups.regions.has_territorial_commission(region):
        return None
    return region


async def regional_territorial(lookups: Lookups, ctx: ResolutionContext) -> Uic | None:
    """First territorial commission of the user's region, else of the administrative region.

    The branch is chosen by the region's flag alone: a flagged region without
    any commission row yields None rather than the administrative region's.
    """
    region = await _territorial_region(lookups, ctx.user.region_id)
    if region is None:
        region = await _territorial_region(lookups, ctx.user.adm_region_id)
    if region is None:
        return None
    return await lookups.regions.first_territorial_commission(region)


PRECINCT_CHAIN: tuple[Strategy, ...] = (
    precinct_by_requested_number,
    commission_by_application_number,
)

TERRITORIAL_CHAIN: tuple[Strategy, ...] = (
    territorial_by_requested_name,
    regional_territorial,
)


def chain_for(current_role: CurrentRole) -> tuple[Strategy, ...]:
    """Return the resolution chain that applies to a current role."""
    if current_role.must_have_uic:
        return PRECINCT_CHAIN
    if current_role.must_have_tic:
        return TERRITORIAL_CHAIN
    return ()


async def resolve_commission(
    chain: Sequence[Strategy],
    lookups: Lookups,
    ctx: ResolutionContext,
) -> Uic | None:
    """Evaluate strategies in order and return the first commission found."""
    for strategy in chain:
        uic = await strategy(lookups, ctx)
        if uic is not None:
            logger.debug(f"Commission {uic.name} resolved by {strategy.__name__}")
            return uic
    return None
