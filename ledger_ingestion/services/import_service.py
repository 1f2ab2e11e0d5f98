"""
Ledger import service: workbook -> accounts, segments, movements.

One pass over the first worksheet.  Each row goes through ``process_row``,
which takes the current ``ParseContext`` and returns the next one together
with a typed outcome.  The driver only decides whether to keep going,
from ``RowError.kind.aborts_run``.

Transaction shape: no transaction spans the run.  Every store call runs in
its own SAVEPOINT, so a failed header leaves earlier rows in place and a
failed movement does not poison the session.  The caller commits.

Uses structured logging (LogContext, get_logger("ingestion.*")).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.exceptions import (
    InvalidSequenceNumberError,
    LedgerError,
    MalformedDateError,
    MalformedWorkbookError,
)
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.services.account_service import AccountService
from ledger_kernel.services.company_service import CompanyService
from ledger_kernel.services.movement_service import MovementDraft, MovementService
from ledger_kernel.services.segment_service import SegmentService

from ledger_config.schema import WorkbookSettings
from ledger_ingestion.adapters.xlsx_adapter import SheetGrid, load_first_sheet
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
    cell_text,
    decode_row,
)
from ledger_ingestion.domain.context import ParseContext
from ledger_ingestion.domain.dates import parse_movement_date
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

logger = get_logger("ingestion.import_service")


@dataclass(frozen=True)
class LedgerStores:
    """The stores a row step writes through, bound to one session and actor."""

    session: Session
    accounts: AccountService
    segments: SegmentService
    movements: MovementService
    actor_id: UUID

    @classmethod
    def for_session(cls, session: Session, actor_id: UUID) -> LedgerStores:
        return cls(
            session=session,
            accounts=AccountService(session),
            segments=SegmentService(session),
            movements=MovementService(session),
            actor_id=actor_id,
        )


@dataclass(frozen=True)
class RowStep:
    """Context after a row, and what the row did."""

    context: ParseContext
    outcome: RowOutcome


def _failed(context: ParseContext, row_index: int, reason: str, kind: ErrorKind) -> RowStep:
    return RowStep(context, RowFailed(RowError(row_index=row_index, reason=reason, kind=kind)))


def _resolve_account(row: AccountHeaderRow, context: ParseContext, stores: LedgerStores) -> RowStep:
    try:
        with stores.session.begin_nested():
            account = stores.accounts.find_or_create(row.code, row.name, stores.actor_id)
    except (LedgerError, SQLAlchemyError) as exc:
        return _failed(context, row.row_index, f"Account {row.code}: {exc}", ErrorKind.HEADER_RESOLUTION)

    logger.debug(
        "account_resolved",
        extra={"source_row": row.row_index, "account_code": account.code, "account_id": str(account.id)},
    )
    return RowStep(
        context.with_account(account.id, row.name or account.name),
        ContextUpdated(kind=RowKind.ACCOUNT_HEADER, entity_id=account.id, code=account.code),
    )


def _resolve_segment(row: SegmentHeaderRow, context: ParseContext, stores: LedgerStores) -> RowStep:
    try:
        with stores.session.begin_nested():
            segment = stores.segments.find_or_create(row.code, stores.actor_id)
    except (LedgerError, SQLAlchemyError) as exc:
        return _failed(context, row.row_index, f"Segment {row.code!r}: {exc}", ErrorKind.HEADER_RESOLUTION)

    logger.debug(
        "segment_resolved",
        extra={"source_row": row.row_index, "segment_code": segment.code, "segment_id": str(segment.id)},
    )
    return RowStep(
        context.with_segment(segment.id),
        ContextUpdated(kind=RowKind.SEGMENT_HEADER, entity_id=segment.id, code=segment.code),
    )


def _create_movement(row: MovementRow, context: ParseContext, stores: LedgerStores) -> RowStep:
    refs = context.movement_refs(row.row_index)
    if isinstance(refs, RowError):
        return RowStep(context, RowFailed(refs))
    account_id, segment_id = refs

    try:
        movement_date = parse_movement_date(row.date_text)
    except MalformedDateError as exc:
        return _failed(context, row.row_index, str(exc), ErrorKind.MALFORMED_DATE)
    try:
        number = parse_sequence_number(row.number_raw)
    except InvalidSequenceNumberError as exc:
        return _failed(context, row.row_index, str(exc), ErrorKind.INVALID_NUMBER)

    draft = MovementDraft(
        account_id=account_id,
        segment_id=segment_id,
        date=movement_date,
        kind=parse_movement_kind(row.kind_text),
        number=number,
        supplier=row.supplier,
        # Placeholder until the concept is corrected by hand.
        concept=context.account_name,
        reference=row.reference,
        charge=parse_charge(row.charge_raw),
    )
    try:
        with stores.session.begin_nested():
            movement = stores.movements.create(draft, stores.actor_id)
    except (LedgerError, SQLAlchemyError) as exc:
        return _failed(context, row.row_index, str(exc), ErrorKind.MOVEMENT_PERSISTENCE)

    return RowStep(context, MovementCreated(movement_id=movement.id))


def process_row(row: DecodedRow | None, context: ParseContext, stores: LedgerStores) -> RowStep:
    """
    Apply one decoded row.

    Headers return a new context; movements and skipped rows return the
    same one.  Store failures come back as ``RowFailed``, never raised.
    """
    if row is None:
        return RowStep(context, Skipped())
    if isinstance(row, AccountHeaderRow):
        return _resolve_account(row, context, stores)
    if isinstance(row, SegmentHeaderRow):
        return _resolve_segment(row, context, stores)
    return _create_movement(row, context, stores)


class LedgerImportService:
    """
    Import a ContPAQ ledger workbook.

    Usage:
        service = LedgerImportService(session)
        result = service.import_workbook(Path("auxiliar.xlsx"), actor_id)
        session.commit()
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        settings: WorkbookSettings | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._settings = settings or WorkbookSettings()

    def import_workbook(
        self,
        source_path: Path,
        actor_id: UUID,
        should_cancel: Callable[[], bool] | None = None,
    ) -> ImportResult:
        """
        Read the first worksheet and persist its ledger.

        Malformed input (a file openpyxl cannot read, fewer than two rows,
        no company name) and header resolution failures end the run with
        status ABORTED; row defects are collected and the run continues.
        ``should_cancel`` is polled before each row.

        Raises:
            SourceFileNotFoundError: if the workbook does not exist.
        """
        source_path = Path(source_path)
        with self._run_context(actor_id, source_path.name):
            try:
                grid = load_first_sheet(source_path)
            except MalformedWorkbookError as exc:
                started_at = self._clock.now()
                logger.warning("workbook_unreadable", extra={"reason": exc.reason})
                error = RowError(0, str(exc), ErrorKind.MALFORMED_WORKBOOK)
                return self._finish(ImportStatus.ABORTED, source_path.name, started_at, errors=(error,))
            return self._run(grid, source_path.name, actor_id, should_cancel)

    def import_grid(
        self,
        grid: SheetGrid,
        actor_id: UUID,
        should_cancel: Callable[[], bool] | None = None,
    ) -> ImportResult:
        """Same as ``import_workbook`` for a grid already in memory."""
        with self._run_context(actor_id):
            return self._run(grid, grid.name, actor_id, should_cancel)

    @staticmethod
    def _run_context(actor_id: UUID, source_filename: str | None = None):
        """Log fields shared by every event of one run, under a fresh correlation id."""
        return LogContext.bind(
            correlation_id=str(uuid4()),
            producer="ingestion",
            actor_id=str(actor_id),
            source_filename=source_filename,
        )

    def _finish(
        self,
        status: ImportStatus,
        source_filename: str,
        started_at: datetime,
        **counts,
    ) -> ImportResult:
        result = ImportResult(
            status=status,
            source_filename=source_filename,
            started_at=started_at,
            completed_at=self._clock.now(),
            **counts,
        )
        log = logger.info if status == ImportStatus.COMPLETED else logger.warning
        log(
            "import_completed",
            extra={
                "status": status.value,
                "movements_created": result.movements_created,
                "error_count": result.error_count,
                "rows_read": result.rows_read,
            },
        )
        return result

    def _run(
        self,
        grid: SheetGrid,
        source_filename: str,
        actor_id: UUID,
        should_cancel: Callable[[], bool] | None,
    ) -> ImportResult:
        started_at = self._clock.now()
        logger.info("import_started", extra={"rows": grid.row_count, "sheet": grid.name})

        def finish(status: ImportStatus, **counts) -> ImportResult:
            return self._finish(status, source_filename, started_at, **counts)

        if grid.row_count < 2:
            error = RowError(0, "Workbook has no data rows", ErrorKind.NO_DATA)
            return finish(ImportStatus.ABORTED, errors=(error,))

        company_row = self._settings.company_row
        company_name = cell_text(grid.cell(company_row, self._settings.company_column))
        if not company_name:
            error = RowError(company_row, "No company name found in the title row", ErrorKind.MISSING_COMPANY)
            return finish(ImportStatus.ABORTED, errors=(error,))

        try:
            with self._session.begin_nested():
                company = CompanyService(self._session).find_or_create_by_name(company_name, actor_id)
        except (LedgerError, SQLAlchemyError) as exc:
            error = RowError(company_row, f"Company {company_name!r}: {exc}", ErrorKind.MISSING_COMPANY)
            return finish(ImportStatus.ABORTED, errors=(error,))

        stores = LedgerStores.for_session(self._session, actor_id)
        context = ParseContext()
        errors: list[RowError] = []
        movements_created = 0
        accounts: set[UUID] = set()
        segments: set[UUID] = set()
        rows_read = 0
        status = ImportStatus.COMPLETED

        for row_index in range(1, grid.row_count + 1):
            if should_cancel is not None and should_cancel():
                errors.append(RowError(row_index, "Import cancelled", ErrorKind.CANCELLED))
                status = ImportStatus.CANCELLED
                break

            rows_read += 1
            step = process_row(decode_row(grid.row(row_index), row_index), context, stores)
            context = step.context
            outcome = step.outcome

            if isinstance(outcome, MovementCreated):
                movements_created += 1
            elif isinstance(outcome, ContextUpdated):
                if outcome.kind == RowKind.ACCOUNT_HEADER:
                    accounts.add(outcome.entity_id)
                else:
                    segments.add(outcome.entity_id)
            elif isinstance(outcome, RowFailed):
                errors.append(outcome.error)
                logger.warning(
                    "row_failed",
                    extra={
                        "source_row": outcome.error.row_index,
                        "error_kind": outcome.error.kind.value,
                        "reason": outcome.error.reason,
                    },
                )
                if outcome.error.kind.aborts_run:
                    status = ImportStatus.ABORTED
                    break

        return finish(
            status,
            movements_created=movements_created,
            errors=tuple(errors),
            company_id=company.id,
            accounts_resolved=len(accounts),
            segments_resolved=len(segments),
            rows_read=rows_read,
        )
