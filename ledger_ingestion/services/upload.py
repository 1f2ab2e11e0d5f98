"""
Scope for uploaded workbooks.

An uploaded file is a temporary copy owned by the import: it is deleted
when the import finishes, fails, or is rejected for its type.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterator
from uuid import UUID

from ledger_kernel.exceptions import UnsupportedFileTypeError
from ledger_kernel.logging_config import get_logger

from ledger_config.schema import WorkbookSettings
from ledger_ingestion.domain.types import ImportResult

if TYPE_CHECKING:
    from ledger_ingestion.services.import_service import LedgerImportService

logger = get_logger("ingestion.upload")

DEFAULT_ALLOWED_SUFFIXES = WorkbookSettings().allowed_suffixes


@contextmanager
def staged_upload(
    path: Path,
    allowed_suffixes: tuple[str, ...] = DEFAULT_ALLOWED_SUFFIXES,
) -> Iterator[Path]:
    """
    Yield ``path`` and delete the file on every exit path.

    Raises:
        UnsupportedFileTypeError: suffix not in ``allowed_suffixes`` (the
            file is still deleted).
    """
    path = Path(path)
    try:
        if path.suffix.lower() not in allowed_suffixes:
            raise UnsupportedFileTypeError(str(path), allowed_suffixes)
        yield path
    finally:
        existed = path.exists()
        path.unlink(missing_ok=True)
        if existed:
            logger.debug("upload_deleted", extra={"upload_path": str(path)})


def import_uploaded_workbook(
    service: LedgerImportService,
    path: Path,
    actor_id: UUID,
    allowed_suffixes: tuple[str, ...] = DEFAULT_ALLOWED_SUFFIXES,
    should_cancel: Callable[[], bool] | None = None,
) -> ImportResult:
    """Import an uploaded workbook, then delete it whatever the outcome."""
    with staged_upload(path, allowed_suffixes) as workbook:
        return service.import_workbook(workbook, actor_id, should_cancel=should_cancel)
