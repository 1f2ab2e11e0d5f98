"""
Module: ledger_kernel.models.company
Responsibility: ORM persistence for companies (the legal name printed in the
    report-title row of every export).
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase


class Company(TrackedBase):
    """Company owning an imported ledger."""

    __tablename__ = "companies"

    __table_args__ = (
        UniqueConstraint("name", name="uq_company_name"),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Company {self.name}>"
