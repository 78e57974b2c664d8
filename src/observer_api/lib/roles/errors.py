"""Role engine exceptions."""

from collections.abc import Sequence


def to_sentence(words: Sequence[str]) -> str:
    """Join words as ``"a"``, ``"a and b"`` or ``"a, b and c"``."""
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return f"{', '.join(words[:-1])} and {words[-1]}"


class RoleError(Exception):
    """Base class for role engine errors."""


class RoleNotFound(RoleError):
    """A role or current-role identifier does not exist in the catalog.

    Args:
        identifier: The slug or id that failed to resolve.
    """

    def __init__(self, identifier: object) -> None:
        self.identifier = identifier
        super().__init__(f"Role not found: {identifier!r}")


class RoleMutationForbidden(RoleError):
    """The acting user tried to add or remove roles outside their permitted set.

    Args:
        role_names: Human-readable names of the offending roles.
    """

    def __init__(self, role_names: Sequence[str]) -> None:
        self.role_names = list(role_names)
        super().__init__(f"You are not allowed to change the {to_sentence(self.role_names)} role of users")
