"""Nomination applications submitted by organisations.

An application names a candidate and the duties (current roles) the
organisation nominates them for.  Applications are the input of the
account merge and are only ever changed by being approved.
"""

import uuid
from enum import StrEnum

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, Uuid
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from observer_api.models.base import Base, TimestampMixin, UUIDMixin


class AppState(StrEnum):
    """Review state of an application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserAppCurrentRole(Base, UUIDMixin):
    """A requested (current role, value) pair of an application.

    ``value`` is a precinct commission number or a territorial commission
    name, depending on the current role.
    """

    __tablename__ = "user_app_current_roles"

    user_app_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("user_apps.id", ondelete="CASCADE"),
        nullable=False,
    )
    current_role_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("current_roles.id"), nullable=False)
    value: Mapped[str | None] = mapped_column(String(200), nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class UserApp(Base, UUIDMixin, TimestampMixin):
    """A nomination application."""

    __tablename__ = "user_apps"

    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    patronymic: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year_born: Mapped[int | None] = mapped_column(Integer, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    uic: Mapped[int | None] = mapped_column(Integer, nullable=True)
    can_be_observer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    state: Mapped[str] = mapped_column(String(20), nullable=False, default=AppState.PENDING, server_default="pending")
    region_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("regions.id"), nullable=True)
    adm_region_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("regions.id"), nullable=True)
    organisation_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("organisations.id"), nullable=True)

    user_app_current_roles: Mapped[list[UserAppCurrentRole]] = relationship(
        order_by=UserAppCurrentRole.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (CheckConstraint("state IN ('pending', 'approved', 'rejected')", name="ck_user_apps_state"),)

    @property
    def approved(self) -> bool:
        return self.state == AppState.APPROVED

    def approve(self) -> None:
        """Mark the application approved. No-op if it already is."""
        if not self.approved:
            self.state = AppState.APPROVED
