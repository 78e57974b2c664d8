"""General account roles and their assignment to users."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from observer_api.models.base import Base, UUIDMixin

if TYPE_CHECKING:
    from observer_api.models.user import User


class Role(Base, UUIDMixin):
    """A named capability such as ``admin`` or ``observer``.

    Attributes:
        slug: Stable identifier used in code (e.g. "tc", "federal_repr").
        name: Human-readable name used in validation messages.
    """

    __tablename__ = "roles"

    slug: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    def __repr__(self) -> str:
        return f"<Role {self.slug}>"


class UserRole(Base, UUIDMixin):
    """Assignment of a general role to a user. One row per (user, role)."""

    __tablename__ = "user_roles"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    role_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("roles.id"), nullable=False)

    user: Mapped["User"] = relationship(back_populates="user_roles")  # noqa: F821
    role: Mapped[Role] = relationship(lazy="selectin")

    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),)

    @property
    def role_name(self) -> str:
        return self.role.name
