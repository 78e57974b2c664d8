"""Observer account model."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from observer_api.models.base import Base, UUIDMixin
from observer_api.models.current_role import UserCurrentRole
from observer_api.models.role import UserRole
from observer_api.models.user_app import UserApp


class User(Base, UUIDMixin):
    """An observer-database account, identified by phone number.

    General roles live in ``user_roles`` and must be changed through
    :class:`observer_api.lib.roles.membership.RoleMembership`; nomination
    duties live in ``user_current_roles`` and are created by the
    application merge.
    """

    __tablename__ = "users"

    phone: Mapped[str] = mapped_column(String(10), unique=True, nullable=False, index=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    patronymic: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year_born: Mapped[int | None] = mapped_column(Integer, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    region_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("regions.id"), nullable=True)
    adm_region_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("regions.id"), nullable=True)
    organisation_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("organisations.id"), nullable=True)
    mobile_group_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("mobile_groups.id"), nullable=True)
    user_app_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("user_apps.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    user_roles: Mapped[list[UserRole]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    user_current_roles: Mapped[list[UserCurrentRole]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    user_app: Mapped[UserApp | None] = relationship(lazy="selectin")

    # Plaintext of the most recently generated password; never persisted.
    password = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.last_name, self.first_name, self.patronymic) if part)

    @property
    def role_slugs(self) -> set[str]:
        return {user_role.role.slug for user_role in self.user_roles}
