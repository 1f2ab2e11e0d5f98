"""Workbook adapters: file I/O only, no DB access."""

from ledger_ingestion.adapters.xlsx_adapter import (
    SheetGrid,
    SheetProbe,
    WorkbookProbe,
    load_first_sheet,
    probe_workbook,
)

__all__ = [
    "SheetGrid",
    "SheetProbe",
    "WorkbookProbe",
    "load_first_sheet",
    "probe_workbook",
]
