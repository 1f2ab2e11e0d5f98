"""
Module: ledger_kernel.models.concept
Responsibility: ORM persistence for the concept catalog, the names a
    movement's placeholder concept is corrected to after an import.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - name is non-blank and at most 255 characters (ConceptService).
    - Names are not unique; two catalog entries may share a name.
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase

CONCEPT_NAME_MAX_LENGTH = 255


class Concept(TrackedBase):
    """Catalog entry such as ``Gastos de Oficina``."""

    __tablename__ = "concepts"

    __table_args__ = (
        Index("idx_concept_name", "name"),
    )

    name: Mapped[str] = mapped_column(
        String(CONCEPT_NAME_MAX_LENGTH),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Concept {self.name}>"
