"""Permission gate for role changes made by an acting user."""

import uuid
from collections.abc import Iterable

from loguru import logger

from observer_api.lib.roles.catalog import coerce_id
from observer_api.lib.roles.errors import RoleMutationForbidden
from observer_api.lib.roles.membership import RoleMembership
from observer_api.models import Role


class PolicyGate:
    """Rejects a membership change set that touches roles outside ``valid_roles``.

    ``valid_roles`` is the set of roles the acting user may grant or revoke,
    given as :class:`Role` records or role ids, either UUIDs or their string
    form.  ``None`` means the change comes from a trusted context and nothing
    is restricted.

    Raises:
        RoleNotFound: If a given id is not a valid UUID.
    """

    def __init__(self, valid_roles: Iterable[Role | uuid.UUID | str] | None = None) -> None:
        if valid_roles is None:
            self._valid_role_ids: frozenset | None = None
        else:
            self._valid_role_ids = frozenset(
                role.id if isinstance(role, Role) else coerce_id(role) for role in valid_roles
            )

    @property
    def restricted(self) -> bool:
        return self._valid_role_ids is not None

    def check(self, membership: RoleMembership) -> None:
        """Validate every staged row of ``membership``.

        Raises:
            RoleMutationForbidden: If any new or removed row references a
                role outside the permitted set.
        """
        if self._valid_role_ids is None:
            return
        bad_names: list[str] = []
        for user_role in membership.pending_changes():
            if user_role.role_id in self._valid_role_ids:
                continue
            name = user_role.role_name
            if name not in bad_names:
                bad_names.append(name)
        if bad_names:
            logger.warning(f"Rejected role change for user {membership.user.id}: {bad_names}")
            raise RoleMutationForbidden(bad_names)
