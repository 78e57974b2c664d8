"""Which accounts receive login credentials."""

from observer_api.models import User

# Coordinators and commission members; plain observers never log in.
LOGIN_ROLES: frozenset[str] = frozenset({"admin", "tc", "mc", "cc", "federal_repr"})


def may_login(user: User) -> bool:
    """Return True if any of the user's roles grants access to the database."""
    return not LOGIN_ROLES.isdisjoint(user.role_slugs)
