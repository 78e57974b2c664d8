"""Election commissions: precinct (UIC) and territorial (TIC) level."""

import uuid
from enum import StrEnum

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from observer_api.models.base import Base, UUIDMixin


class UicKind(StrEnum):
    """Commission level."""

    UIC = "uic"
    TIC = "tic"


class Uic(Base, UUIDMixin):
    """An election commission.

    Precinct commissions are addressed by ``number``; territorial ones by
    ``name``.
    """

    __tablename__ = "uics"

    kind: Mapped[str] = mapped_column(String(3), nullable=False)
    number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    region_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("regions.id"), nullable=True)
    adm_region_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("regions.id"), nullable=True)

    __table_args__ = (
        CheckConstraint("kind IN ('uic', 'tic')", name="ck_uics_kind"),
        Index("ix_uics_number", "number"),
        Index("ix_uics_region_id", "region_id"),
    )

    @property
    def is_tic(self) -> bool:
        return self.kind == UicKind.TIC
