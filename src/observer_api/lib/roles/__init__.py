"""Role engine: catalog, membership, permission gate and login eligibility.

Public API:
    - RoleCatalog: slug/id to role resolution
    - RoleMembership: staged, cached role membership of one user
    - PolicyGate: restricts which roles an actor may change
    - may_login / LOGIN_ROLES: login eligibility
    - RoleError, RoleNotFound, RoleMutationForbidden: errors
"""

from observer_api.lib.roles.catalog import RoleCatalog
from observer_api.lib.roles.eligibility import LOGIN_ROLES, may_login
from observer_api.lib.roles.errors import RoleError, RoleMutationForbidden, RoleNotFound
from observer_api.lib.roles.membership import RoleMembership
from observer_api.lib.roles.policy import PolicyGate

__all__ = [
    "LOGIN_ROLES",
    "PolicyGate",
    "RoleCatalog",
    "RoleError",
    "RoleMembership",
    "RoleMutationForbidden",
    "RoleNotFound",
    "may_login",
]
