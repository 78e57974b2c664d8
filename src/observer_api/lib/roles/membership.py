"""General-role membership of a single user.

Mutations are staged: :meth:`RoleMembership.add_role` and friends only
record what should change, :meth:`RoleMembership.apply` writes the staged
rows into ``user.user_roles`` right before commit.  This lets
:class:`~observer_api.lib.roles.policy.PolicyGate` inspect the complete
change set and reject it as a whole.
"""

from collections.abc import Iterable

from observer_api.lib.roles.catalog import RoleCatalog
from observer_api.lib.roles.errors import RoleNotFound
from observer_api.models import User, UserRole


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class RoleMembership:
    """Roles assigned to one user, with a per-slug lookup cache.

    The cache belongs to this instance only.  Call :meth:`invalidate`
    whenever the user is committed, since the stored rows may have
    changed underneath.

    Args:
        user: The user whose roles are managed.
        catalog: Registry used to resolve slugs and ids.
    """

    def __init__(self, user: User, catalog: RoleCatalog) -> None:
        self.user = user
        self.catalog = catalog
        self._cache: dict[str, bool] = {}
        self._added: list[UserRole] = []
        self._removed: list[UserRole] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_role(self, slug: str) -> bool:
        """Return whether the user holds the role, counting staged changes."""
        if slug not in self._cache:
            self._cache[slug] = self._lookup(slug)
        return self._cache[slug]

    def has_any_of_roles(self, slugs: Iterable[str]) -> bool:
        return any(self.has_role(slug) for slug in slugs)

    def role_ids(self) -> set:
        """Ids of the roles the user will hold once staged changes are applied."""
        ids = {user_role.role_id for user_role in self.user.user_roles if not self._is_marked(user_role)}
        ids.update(user_role.role_id for user_role in self._added)
        return ids

    def pending_changes(self) -> list[UserRole]:
        """Rows that are new or marked for removal."""
        return [*self._added, *self._removed]

    @property
    def has_pending_changes(self) -> bool:
        return bool(self._added or self._removed)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_role(self, slug: str) -> None:
        """Stage the role for addition. No-op if the user already holds it.

        Raises:
            RoleNotFound: If the slug is unknown.
        """
        role = self.catalog.role(slug)
        if self.has_role(slug):
            return
        marked = self._marked_row(role.id)
        if marked is not None:
            self._removed.remove(marked)
        else:
            self._added.append(UserRole(role_id=role.id, role=role))
        self._cache[slug] = True

    def remove_role(self, slug: str) -> None:
        """Mark the role's assignment for removal on the next commit.

        Raises:
            RoleNotFound: If the slug is unknown.
        """
        role = self.catalog.role(slug)
        for user_role in self.user.user_roles:
            if user_role.role_id == role.id and not self._is_marked(user_role):
                self._removed.append(user_role)
        self._added = [user_role for user_role in self._added if user_role.role_id != role.id]
        self._cache[slug] = False

    def set_roles(self, values: Iterable[object]) -> None:
        """Replace the membership with exactly the given role ids.

        Blank entries are ignored and ids may be strings, as submitted by
        a form.  Existing rows for wanted roles are kept, so calling this
        twice with the same ids is a no-op.

        Raises:
            RoleNotFound: If an id is unknown.
        """
        wanted: list = []
        for value in values:
            if _is_blank(value):
                continue
            role_id = self.catalog.role_by_id(value).id
            if role_id not in wanted:
                wanted.append(role_id)

        kept: set = set()
        for user_role in self.user.user_roles:
            if user_role.role_id in wanted:
                kept.add(user_role.role_id)
                if self._is_marked(user_role):
                    self._removed.remove(user_role)
            elif not self._is_marked(user_role):
                self._removed.append(user_role)

        self._added = [
            user_role for user_role in self._added if user_role.role_id in wanted and user_role.role_id not in kept
        ]
        kept.update(user_role.role_id for user_role in self._added)

        for role_id in wanted:
            if role_id not in kept:
                role = self.catalog.role_by_id(role_id)
                self._added.append(UserRole(role_id=role.id, role=role))
        self._cache.clear()

    def apply(self) -> None:
        """Write staged rows into ``user.user_roles``.

        Removed rows leave the collection and are deleted as orphans on
        flush.
        """
        for user_role in self._removed:
            self.user.user_roles.remove(user_role)
        for user_role in self._added:
            self.user.user_roles.append(user_role)
        self._added = []
        self._removed = []

    def invalidate(self) -> None:
        """Drop cached lookups. Called at every commit boundary."""
        self._cache.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lookup(self, slug: str) -> bool:
        try:
            role = self.catalog.role(slug)
        except RoleNotFound:
            return False
        return role.id in self.role_ids()

    def _is_marked(self, user_role: UserRole) -> bool:
        return any(marked is user_role for marked in self._removed)

    def _marked_row(self, role_id: object) -> UserRole | None:
        for user_role in self._removed:
            if user_role.role_id == role_id:
                return user_role
        return None
