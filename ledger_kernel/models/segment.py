"""
Module: ledger_kernel.models.segment
Responsibility: ORM persistence for segments (the ``Segmento <code>`` rows of a
    ContPAQ export, one per business line).
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - code is unique (uq_segment_code).
    - A segment referenced by movements cannot be deleted
      (SegmentReferencedError, raised by SegmentService).
"""

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from ledger_kernel.models.movement import Movement


class Segment(TrackedBase):
    """Segment -- second level of the account / segment / movement hierarchy."""

    __tablename__ = "segments"

    __table_args__ = (
        UniqueConstraint("code", name="uq_segment_code"),
    )

    code: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    movements: Mapped[list["Movement"]] = relationship(
        back_populates="segment",
    )

    def __repr__(self) -> str:
        return f"<Segment {self.code}: {self.name}>"
