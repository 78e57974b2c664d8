"""Unit tests for the role-change permission gate."""

import pytest

from observer_api.lib.roles import PolicyGate, RoleCatalog, RoleMembership, RoleMutationForbidden, RoleNotFound
from observer_api.lib.roles.errors import to_sentence
from observer_api.models import User, UserRole


def _membership(catalog: RoleCatalog, *slugs: str) -> RoleMembership:
    user = User(phone="9161234567")
    for slug in slugs:
        role = catalog.role(slug)
        user.user_roles.append(UserRole(role_id=role.id, role=role))
    return RoleMembership(user, catalog)


class TestPolicyGate:
    """Tests for PolicyGate.check."""

    def test_unrestricted_allows_everything(self, catalog: RoleCatalog) -> None:
        membership = _membership(catalog)
        membership.add_role("admin")
        gate = PolicyGate(None)
        assert not gate.restricted
        gate.check(membership)

    def test_permitted_addition(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog)
        membership.add_role("observer")
        PolicyGate([roles["observer"]]).check(membership)

    def test_forbidden_addition(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog)
        membership.add_role("admin")
        with pytest.raises(RoleMutationForbidden) as exc_info:
            PolicyGate([roles["observer"]]).check(membership)
        assert exc_info.value.role_names == ["Admin"]
        assert str(exc_info.value) == "You are not allowed to change the Admin role of users"

    def test_forbidden_removal(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog, "tc")
        membership.remove_role("tc")
        with pytest.raises(RoleMutationForbidden, match="Tc"):
            PolicyGate([roles["observer"]]).check(membership)

    def test_mixed_change_set_rejected_as_a_whole(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog)
        membership.add_role("observer")
        membership.add_role("admin")
        with pytest.raises(RoleMutationForbidden):
            PolicyGate([roles["observer"]]).check(membership)
        # Nothing was written to the user
        assert membership.user.user_roles == []

    def test_accepts_role_ids(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog)
        membership.add_role("mc")
        PolicyGate([roles["mc"].id]).check(membership)

    def test_accepts_string_ids(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog)
        membership.add_role("observer")
        PolicyGate([str(roles["observer"].id)]).check(membership)

    def test_string_ids_still_restrict(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog)
        membership.add_role("admin")
        with pytest.raises(RoleMutationForbidden, match="Admin"):
            PolicyGate([f" {roles['observer'].id} "]).check(membership)

    def test_malformed_id_raises(self) -> None:
        with pytest.raises(RoleNotFound):
            PolicyGate(["not-a-uuid"])

    def test_untouched_stored_roles_are_ignored(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog, "admin")
        membership.add_role("observer")
        PolicyGate([roles["observer"]]).check(membership)

    def test_names_reported_once_each(self, catalog: RoleCatalog, roles) -> None:
        membership = _membership(catalog, "cc")
        membership.set_roles([roles["admin"].id, roles["tc"].id])
        with pytest.raises(RoleMutationForbidden) as exc_info:
            PolicyGate([]).check(membership)
        assert sorted(exc_info.value.role_names) == ["Admin", "Cc", "Tc"]


class TestToSentence:
    """Tests for to_sentence."""

    @pytest.mark.parametrize(
        ("words", "expected"),
        [
            ([], ""),
            (["Admin"], "Admin"),
            (["Admin", "Observer"], "Admin and Observer"),
            (["Admin", "Tc", "Observer"], "Admin, Tc and Observer"),
        ],
    )
    def test_joins(self, words: list[str], expected: str) -> None:
        assert to_sentence(words) == expected
