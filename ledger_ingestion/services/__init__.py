"""Ledger import services."""

from ledger_ingestion.services.import_service import (
    LedgerImportService,
    LedgerStores,
    RowStep,
    process_row,
)
from ledger_ingestion.services.upload import import_uploaded_workbook, staged_upload

__all__ = [
    "LedgerImportService",
    "LedgerStores",
    "RowStep",
    "import_uploaded_workbook",
    "process_row",
    "staged_upload",
]
