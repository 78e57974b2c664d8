"""Read-only registry of roles and current roles."""

import uuid
from collections.abc import Iterable

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from observer_api.lib.roles.errors import RoleNotFound
from observer_api.models import CurrentRole, Role


def coerce_id(value: object) -> uuid.UUID:
    """Convert a role id given as UUID or string into a UUID.

    Raises:
        RoleNotFound: If the value is not a valid UUID.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except ValueError:
        raise RoleNotFound(value) from None


class RoleCatalog:
    """Resolves role slugs and ids to loaded role records.

    Roles are immutable reference data, so the catalog is loaded once per
    unit of work and answers every later lookup from memory.
    """

    def __init__(self, roles: Iterable[Role] = (), current_roles: Iterable[CurrentRole] = ()) -> None:
        self._roles = list(roles)
        self._current_roles = list(current_roles)
        self._roles_by_slug = {role.slug: role for role in self._roles}
        self._roles_by_id = {role.id: role for role in self._roles}
        self._current_roles_by_slug = {current_role.slug: current_role for current_role in self._current_roles}
        self._current_roles_by_id = {current_role.id: current_role for current_role in self._current_roles}

    @classmethod
    async def load(cls, session: AsyncSession) -> "RoleCatalog":
        """Load every role and current role from the database.

        Args:
            session: The database session.

        Returns:
            A populated catalog.
        """
        roles = (await session.execute(select(Role).order_by(Role.slug))).scalars().all()
        current_roles = (
            (await session.execute(select(CurrentRole).order_by(CurrentRole.position, CurrentRole.slug)))
            .scalars()
            .all()
        )
        logger.debug(f"Loaded role catalog ({len(roles)} roles, {len(current_roles)} current roles)")
        return cls(roles, current_roles)

    @property
    def roles(self) -> list[Role]:
        return list(self._roles)

    @property
    def current_roles(self) -> list[CurrentRole]:
        return list(self._current_roles)

    def role(self, slug: str) -> Role:
        """Return the role with the given slug.

        Raises:
            RoleNotFound: If no such role exists.
        """
        try:
            return self._roles_by_slug[str(slug)]
        except KeyError:
            raise RoleNotFound(slug) from None

    def role_by_id(self, role_id: object) -> Role:
        """Return the role with the given id (UUID or its string form).

        Raises:
            RoleNotFound: If no such role exists.
        """
        try:
            return self._roles_by_id[coerce_id(role_id)]
        except KeyError:
            raise RoleNotFound(role_id) from None

    def current_role(self, slug: str) -> CurrentRole:
        """Return the current role with the given slug.

        Raises:
            RoleNotFound: If no such current role exists.
        """
        try:
            return self._current_roles_by_slug[str(slug)]
        except KeyError:
            raise RoleNotFound(slug) from None

    def current_role_by_id(self, current_role_id: object) -> CurrentRole:
        """Return the current role with the given id.

        Raises:
            RoleNotFound: If no such current role exists.
        """
        try:
            return self._current_roles_by_id[coerce_id(current_role_id)]
        except KeyError:
            raise RoleNotFound(current_role_id) from None
