"""Reference data: nominating organisations and mobile groups."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from observer_api.models.base import Base, UUIDMixin


class Organisation(Base, UUIDMixin):
    """An organisation that submits nomination applications."""

    __tablename__ = "organisations"

    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)


class MobileGroup(Base, UUIDMixin):
    """A mobile observer group a user may belong to."""

    __tablename__ = "mobile_groups"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
