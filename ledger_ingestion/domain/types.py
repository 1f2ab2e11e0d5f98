"""
ledger_ingestion.domain.types -- Pure frozen dataclasses for the ledger importer.

ZERO I/O. Imports only from ledger_kernel.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union
from uuid import UUID


# =============================================================================
# Row classification
# =============================================================================


class RowKind(str, Enum):
    """What the first column of a ledger row says the row is."""

    ACCOUNT_HEADER = "account_header"
    SEGMENT_HEADER = "segment_header"
    MOVEMENT = "movement"


# =============================================================================
# Errors (abort vs continue is decided by kind, never by exception type)
# =============================================================================


class ErrorKind(str, Enum):
    """Classification of a failure seen during an import run."""

    MALFORMED_WORKBOOK = "malformed_workbook"  # File is not a readable xlsx
    NO_DATA = "no_data"  # Sheet has fewer than two rows
    MISSING_COMPANY = "missing_company"  # Title row has no company name
    HEADER_RESOLUTION = "header_resolution"  # Account/segment store failed
    MALFORMED_DATE = "malformed_date"
    INVALID_NUMBER = "invalid_number"
    MOVEMENT_BEFORE_HEADER = "movement_before_header"
    MOVEMENT_PERSISTENCE = "movement_persistence"
    CANCELLED = "cancelled"

    @property
    def aborts_run(self) -> bool:
        """True when no further rows may be processed after this error."""
        return self in _ABORTING_KINDS


_ABORTING_KINDS = frozenset({
    ErrorKind.MALFORMED_WORKBOOK,
    ErrorKind.NO_DATA,
    ErrorKind.MISSING_COMPANY,
    ErrorKind.HEADER_RESOLUTION,
    ErrorKind.CANCELLED,
})


@dataclass(frozen=True)
class RowError:
    """A structured failure tied to a 1-based sheet row (0 for whole-file errors)."""

    row_index: int
    reason: str
    kind: ErrorKind


# =============================================================================
# Row outcomes
# =============================================================================


@dataclass(frozen=True)
class Skipped:
    """Row matched no pattern."""


@dataclass(frozen=True)
class ContextUpdated:
    """Header row resolved; the context now points at this entity."""

    kind: RowKind
    entity_id: UUID
    code: str


@dataclass(frozen=True)
class MovementCreated:
    movement_id: UUID


@dataclass(frozen=True)
class RowFailed:
    error: RowError


RowOutcome = Union[Skipped, ContextUpdated, MovementCreated, RowFailed]


# =============================================================================
# Run result
# =============================================================================


class ImportStatus(str, Enum):
    """Run-level outcome."""

    COMPLETED = "completed"  # Every row visited
    ABORTED = "aborted"  # Unreadable or malformed input, or header resolution failure
    CANCELLED = "cancelled"  # should_cancel() returned True between rows


@dataclass(frozen=True)
class ImportResult:
    """Immutable summary of one import run."""

    status: ImportStatus
    movements_created: int = 0
    errors: tuple[RowError, ...] = ()
    company_id: UUID | None = None
    accounts_resolved: int = 0
    segments_resolved: int = 0
    rows_read: int = 0
    source_filename: str = ""
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def aborted(self) -> bool:
        return self.status == ImportStatus.ABORTED

    @property
    def error_count(self) -> int:
        return len(self.errors)
