"""Derive a user account from one or more nomination applications.

When several organisations nominate the same person, each application may
disagree with the others.  The merge only writes a field when every
application agrees on it:

- scalar fields (name, year born, email, phone) are copied only from a
  single application, which also gets a fresh password;
- the administrative region is set when all applications agree on it, and
  the region only when they also agree on that;
- the organisation is set when all applications agree on it;
- the ``observer`` role is granted when every application allows it;
- duties are assigned for the current roles requested by every
  application, taking values from the first application.

Commission links are resolved only for single-application merges.  The
merge never persists anything; the caller saves the user.
"""

from collections.abc import Sequence

from loguru import logger

from observer_api.core.security import issue_password, normalize_phone_number
from observer_api.lib.merger.errors import InvalidMergeInput
from observer_api.lib.merger.lookups import Lookups
from observer_api.lib.merger.resolution import ResolutionContext, chain_for, resolve_commission
from observer_api.lib.roles.membership import RoleMembership
from observer_api.models import CurrentRole, User, UserApp, UserAppCurrentRole, UserCurrentRole

OBSERVER_ROLE = "observer"

RequestedRoles = list[tuple[UserAppCurrentRole, CurrentRole]]


def _all_equal(values: Sequence[object]) -> bool:
    return len(set(values)) == 1


def common_current_role_ids(requested: Sequence[RequestedRoles]) -> set:
    """Intersect the requested current roles of every application, in order."""
    if not requested:
        return set()
    common = {current_role.id for _, current_role in requested[0]}
    for pairs in requested[1:]:
        common &= {current_role.id for _, current_role in pairs}
    return common


class ApplicationMerger:
    """Applies nomination applications to a user.

    Args:
        lookups: Region and commission lookups used for commission links.
    """

    def __init__(self, lookups: Lookups) -> None:
        self._lookups = lookups

    async def merge(
        self,
        membership: RoleMembership,
        applications: UserApp | Sequence[UserApp],
        *,
        update_current_roles: bool = True,
    ) -> User:
        """Merge applications into ``membership.user``.

        Args:
            membership: Role membership of the target user.
            applications: One application or an ordered, non-empty list.
                The first application supplies requested values.
            update_current_roles: Whether to create duty assignments.

        Returns:
            The mutated (unsaved) user.

        Raises:
            InvalidMergeInput: If no applications are given.
            RoleNotFound: If an application requests an unknown current role.
            InvalidPhoneNumber: If a single application carries a malformed phone.
        """
        apps = [applications] if isinstance(applications, UserApp) else list(applications)
        if not apps:
            msg = "At least one application is required"
            raise InvalidMergeInput(msg)
        if any(not isinstance(app, UserApp) for app in apps):
            msg = "Only applications can be merged"
            raise InvalidMergeInput(msg)

        user = membership.user
        catalog = membership.catalog
        first = apps[0]
        single = len(apps) == 1

        # Resolve everything that can fail before touching the user.
        requested: list[RequestedRoles] = [
            [(pair, catalog.current_role_by_id(pair.current_role_id)) for pair in app.user_app_current_roles]
            for app in apps
        ]
        phone = normalize_phone_number(first.phone) if single else None
        grant_observer = all(app.can_be_observer for app in apps)
        if grant_observer:
            catalog.role(OBSERVER_ROLE)

        if single:
            self._copy_profile(user, first, phone)

        if _all_equal([app.adm_region_id for app in apps]):
            user.adm_region_id = first.adm_region_id
            if _all_equal([app.region_id for app in apps]):
                user.region_id = first.region_id

        if _all_equal([app.organisation_id for app in apps]):
            user.organisation_id = first.organisation_id

        if grant_observer:
            membership.add_role(OBSERVER_ROLE)

        common = common_current_role_ids(requested)
        logger.debug(
            f"Merging {len(apps)} application(s) into user {user.id}: "
            f"requested {[current_role.slug for _, current_role in requested[0]]}, common {len(common)}"
        )
        if update_current_roles and common:
            await self._assign_current_roles(user, first, requested[0], common, resolve_commissions=single)
        return user

    @staticmethod
    def _copy_profile(user: User, app: UserApp, phone: str | None) -> None:
        user.last_name = app.last_name
        user.first_name = app.first_name
        user.patronymic = app.patronymic
        user.year_born = app.year_born
        user.email = app.email
        user.phone = phone
        user.user_app = app
        user.user_app_id = app.id
        issue_password(user)

    async def _assign_current_roles(
        self,
        user: User,
        app: UserApp,
        pairs: RequestedRoles,
        common: set,
        *,
        resolve_commissions: bool,
    ) -> None:
        for pair, current_role in pairs:
            if current_role.id not in common:
                continue
            if any(existing.current_role_id == current_role.id for existing in user.user_current_roles):
                continue
            assignment = UserCurrentRole(current_role_id=current_role.id, current_role=current_role)
            user.user_current_roles.append(assignment)
            if not resolve_commissions:
                continue
            chain = chain_for(current_role)
            if not chain:
                continue
            uic = await resolve_commission(chain, self._lookups, ResolutionContext(user, app, pair.value))
            if uic is None:
                logger.info(f"No commission found for {current_role.slug} of user {user.id} (value={pair.value!r})")
                continue
            assignment.uic = uic
            assignment.uic_id = uic.id
