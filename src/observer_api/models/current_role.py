"""Nomination-duty roles and their assignment to users."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from observer_api.models.base import Base, UUIDMixin
from observer_api.models.uic import Uic

if TYPE_CHECKING:
    from observer_api.models.user import User


class CurrentRole(Base, UUIDMixin):
    """A duty a user is nominated for in the current election cycle.

    Attributes:
        slug: Stable identifier.
        name: Display name.
        position: Display order.
        must_have_uic: Assignment must be linked to a precinct commission.
        must_have_tic: Assignment must be linked to a territorial commission.
    """

    __tablename__ = "current_roles"

    slug: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    must_have_uic: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    must_have_tic: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")

    def __repr__(self) -> str:
        return f"<CurrentRole {self.slug}>"


class UserCurrentRole(Base, UUIDMixin):
    """A user's nomination-duty assignment, optionally tied to a commission."""

    __tablename__ = "user_current_roles"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    current_role_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("current_roles.id"), nullable=False)
    uic_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("uics.id"), nullable=True)
    nomination_source_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    user: Mapped["User"] = relationship(back_populates="user_current_roles")  # noqa: F821
    current_role: Mapped[CurrentRole] = relationship(lazy="selectin")
    uic: Mapped[Uic | None] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("user_id", "current_role_id", name="uq_user_current_roles_user_role"),
    )
