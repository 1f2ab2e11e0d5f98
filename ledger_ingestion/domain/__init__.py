"""Pure ledger-import domain: row classification, coercion, parse context."""

from ledger_ingestion.domain.amounts import (
    parse_charge,
    parse_movement_kind,
    parse_sequence_number,
)
from ledger_ingestion.domain.classifier import (
    AccountHeaderRow,
    DecodedRow,
    MovementRow,
    SegmentHeaderRow,
    classify,
    decode_row,
    segment_code,
)
from ledger_ingestion.domain.context import ParseContext, ParseState
from ledger_ingestion.domain.dates import normalize_date, parse_movement_date
from ledger_ingestion.domain.types import (
    ContextUpdated,
    ErrorKind,
    ImportResult,
    ImportStatus,
    MovementCreated,
    RowError,
    RowFailed,
    RowKind,
    RowOutcome,
    Skipped,
)

__all__ = [
    "AccountHeaderRow",
    "ContextUpdated",
    "DecodedRow",
    "ErrorKind",
    "ImportResult",
    "ImportStatus",
    "MovementCreated",
    "MovementRow",
    "ParseContext",
    "ParseState",
    "RowError",
    "RowFailed",
    "RowKind",
    "RowOutcome",
    "SegmentHeaderRow",
    "Skipped",
    "classify",
    "decode_row",
    "normalize_date",
    "parse_charge",
    "parse_movement_date",
    "parse_movement_kind",
    "parse_sequence_number",
    "segment_code",
]
