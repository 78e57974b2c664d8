"""Region hierarchy: cities, administrative regions and municipal regions."""

import uuid
from enum import IntEnum

from sqlalchemy import Boolean, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from observer_api.models.base import Base, UUIDMixin


class RegionKind(IntEnum):
    """Level of a region in the hierarchy."""

    CITY = 1
    ADM_REGION = 2
    MUN_REGION = 3


class Region(Base, UUIDMixin):
    """A node of the region tree.

    Attributes:
        name: Region name.
        kind: One of :class:`RegionKind`.
        parent_id: Enclosing region, if any.
        has_tic: Whether a territorial commission sits at this level.
    """

    __tablename__ = "regions"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    kind: Mapped[int] = mapped_column(Integer, nullable=False)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("regions.id"), nullable=True)
    has_tic: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
