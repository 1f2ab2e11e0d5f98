"""
Parse context carried from row to row during one import run.

The context is a frozen value: header rows return a new context, movement
rows only read it.  It starts empty and is never reset mid-run, so a new
account header keeps the current segment and vice versa.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from uuid import UUID

from ledger_ingestion.domain.types import ErrorKind, RowError


class ParseState(str, Enum):
    IDLE = "idle"
    HAVE_ACCOUNT = "have_account"
    HAVE_SEGMENT = "have_segment"
    HAVE_ACCOUNT_AND_SEGMENT = "have_account_and_segment"


@dataclass(frozen=True)
class ParseContext:
    """Most recently seen account and segment."""

    account_id: UUID | None = None
    account_name: str = ""
    segment_id: UUID | None = None

    def with_account(self, account_id: UUID, account_name: str) -> ParseContext:
        return replace(self, account_id=account_id, account_name=account_name)

    def with_segment(self, segment_id: UUID) -> ParseContext:
        return replace(self, segment_id=segment_id)

    @property
    def state(self) -> ParseState:
        if self.account_id is not None and self.segment_id is not None:
            return ParseState.HAVE_ACCOUNT_AND_SEGMENT
        if self.account_id is not None:
            return ParseState.HAVE_ACCOUNT
        if self.segment_id is not None:
            return ParseState.HAVE_SEGMENT
        return ParseState.IDLE

    def movement_refs(self, row_index: int) -> tuple[UUID, UUID] | RowError:
        """
        The (account_id, segment_id) a movement on this row belongs to, or a
        MOVEMENT_BEFORE_HEADER error when either header has not been seen.
        """
        if self.account_id is None or self.segment_id is None:
            missing = [
                label
                for label, value in (("account", self.account_id), ("segment", self.segment_id))
                if value is None
            ]
            return RowError(
                row_index=row_index,
                reason=f"Movement before {' and '.join(missing)} header",
                kind=ErrorKind.MOVEMENT_BEFORE_HEADER,
            )
        return self.account_id, self.segment_id
