"""
Module: ledger_kernel.db.base
Responsibility: Declarative base for the ledger tables: UUID primary keys,
    the annotation -> column type map, and the audit columns every table
    carries.
Architecture position: Kernel > DB.  Imported by every model.  MUST NOT import
    from models/ or services/.

Invariants enforced:
    - Primary keys are uuid4 values, native ``uuid`` on PostgreSQL and
      ``CHAR(36)`` text elsewhere (SQLite in tests).
    - A bare ``Mapped[Decimal]`` is ``Numeric(10, 2)``, the precision of a
      ContPAQ charge.  Amounts are never floats.
    - created_by_id is NOT NULL: every row records who imported or created it.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import CHAR, Date, DateTime, Integer, Numeric, func
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class GUID(TypeDecorator):
    """
    UUID column portable across PostgreSQL and SQLite.

    Python side is always ``uuid.UUID``; on SQLite the value is stored as
    its 36-character text form.
    """

    impl = CHAR(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, PyUUID):
            return value
        return PyUUID(value)


class Base(DeclarativeBase):
    """Declarative base; every model gets a uuid4 ``id``."""

    type_annotation_map: ClassVar[dict] = {
        PyUUID: GUID(),
        Decimal: Numeric(10, 2),
        datetime: DateTime(timezone=True),
        date: Date,
        int: Integer,
    }

    id: Mapped[PyUUID] = mapped_column(GUID(), primary_key=True, default=uuid4)


class TrackedBase(Base):
    """
    Abstract base adding who/when audit columns.

    created_at is set by the database on INSERT; updated_at also moves on
    every UPDATE.  updated_by_id stays NULL until a store edits the row.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    created_by_id: Mapped[PyUUID] = mapped_column(nullable=False)
    updated_by_id: Mapped[PyUUID | None] = mapped_column(nullable=True)
