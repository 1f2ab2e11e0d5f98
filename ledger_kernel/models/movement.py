"""
Module: ledger_kernel.models.movement
Responsibility: ORM persistence for movements -- single dated ledger entries
    tied to one account and one segment.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - account_id and segment_id are required foreign keys.
    - kind is one of MovementKind (stored as its string value).
    - charge is nullable, two-decimal Numeric(10, 2).
    - number fits a 32-bit INTEGER column (1 .. MAX_MOVEMENT_NUMBER).
    - entry_order grows with every insert; it breaks ties between
      movements dated the same day.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import GUID, TrackedBase

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account
    from ledger_kernel.models.segment import Segment

# INTEGER on PostgreSQL is int4.
MAX_MOVEMENT_NUMBER = 2_147_483_647


class MovementKind(str, Enum):
    """Policy type of a movement as ContPAQ reports it."""

    EGRESOS = "Egresos"
    INGRESOS = "Ingresos"


class Movement(TrackedBase):
    """
    Movement -- a dated charge posted under an account and a segment.

    Guarantees:
        - number is the policy number printed in the export (positive).
        - concept defaults to the owning account's name on import and is
          corrected by hand afterwards.
    """

    __tablename__ = "movements"

    __table_args__ = (
        Index("idx_movement_account", "account_id"),
        Index("idx_movement_segment", "segment_id"),
        Index("idx_movement_date", "date"),
        Index("idx_movement_entry_order", "entry_order"),
    )

    account_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("accounting_accounts.id"),
        nullable=False,
    )

    segment_id: Mapped[UUID] = mapped_column(
        GUID(),
        ForeignKey("segments.id"),
        nullable=False,
    )

    date: Mapped[datetime.date] = mapped_column(
        Date,
        nullable=False,
    )

    kind: Mapped[MovementKind] = mapped_column(
        SAEnum(
            MovementKind,
            native_enum=False,
            length=20,
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
    )

    number: Mapped[int] = mapped_column(nullable=False)

    entry_order: Mapped[int] = mapped_column(nullable=False)

    supplier: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    concept: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    reference: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    charge: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2),
        nullable=True,
    )

    account: Mapped["Account"] = relationship(back_populates="movements")
    segment: Mapped["Segment"] = relationship(back_populates="movements")

    def __repr__(self) -> str:
        return f"<Movement {self.date} #{self.number} {self.charge}>"
