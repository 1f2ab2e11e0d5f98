"""
Row classifier for ContPAQ ledger exports.

A ledger sheet has no header row.  Each row is recognized from the text of
its first column alone:

    101-001-001-001-01 | Caja                        -> account header
    Segmento SEG-1                                   -> segment header
    31/Jul/2025 | Egresos | 100 | ACME | REF-1 | 250 -> movement
    anything else (titles, totals, blank rows)       -> skipped

Patterns are checked in that order, so an account code always wins.
``decode_row`` turns a raw row into one of three typed shapes exactly once,
so nothing downstream indexes columns by number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Sequence, Union

from ledger_kernel.models.account import ACCOUNT_CODE_PATTERN as ACCOUNT_HEADER_PATTERN

from ledger_ingestion.domain.types import RowKind

MOVEMENT_DATE_PATTERN = re.compile(
    r"^([0-2]?\d|3[01])/(Ene|Feb|Mar|Abr|May|Jun|Jul|Ago|Sep|Oct|Nov|Dic)/\d{4}\s?\Z",
    re.ASCII,
)

SEGMENT_PREFIX = "segmento"

# 1-based sheet columns
COL_KEY = 1
COL_ACCOUNT_NAME = 2
COL_DATE = 1
COL_KIND = 2
COL_NUMBER = 3
COL_SUPPLIER = 4
COL_REFERENCE = 5
COL_CHARGE = 6


@dataclass(frozen=True)
class AccountHeaderRow:
    row_index: int
    code: str
    name: str


@dataclass(frozen=True)
class SegmentHeaderRow:
    row_index: int
    code: str


@dataclass(frozen=True)
class MovementRow:
    """Raw movement cells; coercion happens in the row step."""

    row_index: int
    date_text: str
    kind_text: str
    number_raw: Any
    supplier: str
    reference: str
    charge_raw: Any


DecodedRow = Union[AccountHeaderRow, SegmentHeaderRow, MovementRow]


def cell_text(value: Any) -> str:
    """Cell value as trimmed text; blank cells become ''."""
    if value is None:
        return ""
    return str(value).strip()


def classify(text: str) -> RowKind | None:
    """Classify the first-column text of a row, or None when nothing matches."""
    if ACCOUNT_HEADER_PATTERN.match(text):
        return RowKind.ACCOUNT_HEADER
    if text.lower().startswith(SEGMENT_PREFIX):
        return RowKind.SEGMENT_HEADER
    if MOVEMENT_DATE_PATTERN.match(text):
        return RowKind.MOVEMENT
    return None


def segment_code(text: str) -> str:
    """Drop the leading ``Segmento`` word: split on single spaces, rejoin, trim."""
    return " ".join(text.split(" ")[1:]).strip()


def _cell(row: Sequence[Any], column: int) -> Any:
    if column > len(row):
        return None
    return row[column - 1]


def decode_row(row: Sequence[Any], row_index: int) -> DecodedRow | None:
    """
    Decode one sheet row (values in column order, column 1 first).

    Returns None for rows that are neither headers nor movements.
    """
    key = cell_text(_cell(row, COL_KEY))
    kind = classify(key)

    if kind is RowKind.ACCOUNT_HEADER:
        return AccountHeaderRow(
            row_index=row_index,
            code=key,
            name=cell_text(_cell(row, COL_ACCOUNT_NAME)),
        )
    if kind is RowKind.SEGMENT_HEADER:
        return SegmentHeaderRow(row_index=row_index, code=segment_code(key))
    if kind is RowKind.MOVEMENT:
        return MovementRow(
            row_index=row_index,
            date_text=key,
            kind_text=cell_text(_cell(row, COL_KIND)),
            number_raw=_cell(row, COL_NUMBER),
            supplier=cell_text(_cell(row, COL_SUPPLIER)),
            reference=cell_text(_cell(row, COL_REFERENCE)),
            charge_raw=_cell(row, COL_CHARGE),
        )
    return None
