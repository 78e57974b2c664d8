"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from observer_api.models.current_role import CurrentRole, UserCurrentRole
from observer_api.models.organisation import MobileGroup, Organisation
from observer_api.models.region import Region, RegionKind
from observer_api.models.role import Role, UserRole
from observer_api.models.uic import Uic, UicKind
from observer_api.models.user import User
from observer_api.models.user_app import AppState, UserApp, UserAppCurrentRole

__all__ = [
    "AppState",
    "CurrentRole",
    "MobileGroup",
    "Organisation",
    "Region",
    "RegionKind",
    "Role",
    "Uic",
    "UicKind",
    "User",
    "UserApp",
    "UserAppCurrentRole",
    "UserCurrentRole",
    "UserRole",
]
