"""
XLSX adapter for ContPAQ ledger exports.

ContPAQ sheets have no header row, so the adapter does not map rows to
dicts.  It hands the importer a ``SheetGrid``: the first worksheet's values,
addressed 1-based like the spreadsheet itself (row 1 is the report title).

Cell values are normalized once on load (strings stripped, blank -> '',
integral floats -> int).  Dates typed as text stay text.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from ledger_kernel.exceptions import MalformedWorkbookError, SourceFileNotFoundError


def _cell_value(v: Any) -> Any:
    """Normalize one openpyxl cell value."""
    if v is None:
        return ""
    if isinstance(v, float):
        if v.is_integer():
            return int(v)
        return v
    if isinstance(v, str):
        return v.strip()
    return v


def _is_blank_row(values: tuple[Any, ...]) -> bool:
    return not any(v != "" and v is not None for v in values)


def _open_workbook(source_path: Path) -> Any:
    try:
        import openpyxl
    except ImportError as e:
        raise ImportError("XLSX support requires openpyxl. Install with: pip install openpyxl") from e
    from openpyxl.utils.exceptions import InvalidFileException

    if not source_path.is_file():
        raise SourceFileNotFoundError(str(source_path))
    try:
        return openpyxl.load_workbook(source_path, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError) as e:
        # KeyError: a zip archive without the workbook parts.
        raise MalformedWorkbookError(str(source_path), str(e) or type(e).__name__) from e


def _sheet_rows(sheet: Any) -> tuple[tuple[Any, ...], ...]:
    return tuple(
        tuple(_cell_value(v) for v in row)
        for row in sheet.iter_rows(values_only=True)
    )


@dataclass(frozen=True)
class SheetGrid:
    """Values of one worksheet, addressed 1-based by row and column."""

    name: str
    rows: tuple[tuple[Any, ...], ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def row(self, row_index: int) -> tuple[Any, ...]:
        """Row values in column order (column 1 first)."""
        if row_index < 1 or row_index > len(self.rows):
            return ()
        return self.rows[row_index - 1]

    def cell(self, row_index: int, column: int) -> Any:
        """Cell value, or '' outside the used range."""
        values = self.row(row_index)
        if column < 1 or column > len(values):
            return ""
        return values[column - 1]


def load_first_sheet(source_path: Path) -> SheetGrid:
    """
    Read the first worksheet of an .xlsx workbook.

    Raises:
        SourceFileNotFoundError: if the path does not exist.
        MalformedWorkbookError: if openpyxl cannot open the file.
    """
    wb = _open_workbook(Path(source_path))
    try:
        sheet = wb.worksheets[0]
        return SheetGrid(name=sheet.title, rows=_sheet_rows(sheet))
    finally:
        wb.close()


@dataclass(frozen=True)
class SheetProbe:
    """Quick snapshot of one worksheet."""

    name: str
    total_rows: int
    non_empty_rows: int  # Title row excluded
    sample_rows: tuple[tuple[Any, ...], ...]  # First non-empty rows after the title


@dataclass(frozen=True)
class WorkbookProbe:
    source_filename: str
    sheets: tuple[SheetProbe, ...]

    @property
    def non_empty_rows(self) -> int:
        return sum(s.non_empty_rows for s in self.sheets)


def probe_workbook(source_path: Path, sample_rows: int = 5) -> WorkbookProbe:
    """
    Count rows on every sheet without touching the database.

    Raises:
        SourceFileNotFoundError: if the path does not exist.
        MalformedWorkbookError: if openpyxl cannot open the file.
    """
    source_path = Path(source_path)
    wb = _open_workbook(source_path)
    try:
        sheets = []
        for sheet in wb.worksheets:
            rows = _sheet_rows(sheet)
            data_rows = [r for r in rows[1:] if not _is_blank_row(r)]
            sheets.append(
                SheetProbe(
                    name=sheet.title,
                    total_rows=len(rows),
                    non_empty_rows=len(data_rows),
                    sample_rows=tuple(data_rows[:sample_rows]),
                )
            )
        return WorkbookProbe(source_filename=source_path.name, sheets=tuple(sheets))
    finally:
        wb.close()
