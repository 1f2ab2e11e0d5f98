"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for accounting accounts -- the catalog entries
    ContPAQ prints as account headers (``101-001-001-001-01  Caja``).
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - code is unique (uq_accounting_account_code) and follows
      DDD-DDD-DDD-DDD-DD (checked by AccountService before any write).
    - An account referenced by movements cannot be deleted
      (AccountReferencedError, raised by AccountService).
"""

import re
from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from ledger_kernel.models.movement import Movement


ACCOUNT_CODE_PATTERN = re.compile(r"^\d{3}-\d{3}-\d{3}-\d{3}-\d{2}\Z", re.ASCII)


def is_valid_account_code(code: str) -> bool:
    """True iff code is exactly five hyphen-separated groups of 3/3/3/3/2 digits."""
    return bool(ACCOUNT_CODE_PATTERN.match(code))


class Account(TrackedBase):
    """
    Accounting account -- owner of the movements listed under its header.

    Guarantees:
        - code is unique and non-null.
        - name is the display name printed next to the code.
    """

    __tablename__ = "accounting_accounts"

    __table_args__ = (
        UniqueConstraint("code", name="uq_accounting_account_code"),
    )

    code: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    movements: Mapped[list["Movement"]] = relationship(
        back_populates="account",
    )

    def __repr__(self) -> str:
        return f"<Account {self.code}: {self.name}>"
