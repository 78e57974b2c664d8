"""User Pydantic v2 schemas."""

from uuid import UUID

from pydantic import BaseModel, Field

from observer_api.models import User


class UserSummary(BaseModel):
    """Compact user representation used in pickers and listings."""

    id: UUID
    text: str = Field(description="Full name")
    phone: str
    roles: list[str] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, text=user.full_name, phone=user.phone, roles=sorted(user.role_slugs))
