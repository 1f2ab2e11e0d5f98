"""Tests for the ContPAQ xlsx adapter (SheetGrid, first-sheet load, probe)."""

from pathlib import Path
from zipfile import ZipFile

import pytest

from ledger_kernel.exceptions import MalformedWorkbookError, SourceFileNotFoundError

from ledger_ingestion.adapters import SheetGrid, load_first_sheet, probe_workbook


class TestSheetGrid:
    def test_cells_are_one_based(self):
        grid = SheetGrid(name="s", rows=(("a", "b"), ("c",)))
        assert grid.cell(1, 1) == "a"
        assert grid.cell(1, 2) == "b"
        assert grid.cell(2, 1) == "c"

    def test_outside_used_range_is_blank(self):
        grid = SheetGrid(name="s", rows=(("a",),))
        assert grid.cell(1, 5) == ""
        assert grid.cell(9, 1) == ""
        assert grid.cell(0, 1) == ""
        assert grid.row(0) == ()

    def test_row_count(self):
        assert SheetGrid(name="s", rows=((), ())).row_count == 2


class TestLoadFirstSheet:
    def test_title_row_is_row_one(self, write_workbook):
        path = write_workbook([["101-001-001-001-01", "Caja"]])
        grid = load_first_sheet(path)
        assert grid.name == "Auxiliar"
        assert grid.cell(1, 4) == "Granja El Roble SA de CV"
        assert grid.cell(2, 1) == "101-001-001-001-01"
        assert grid.cell(2, 2) == "Caja"

    def test_values_are_normalized(self, write_workbook):
        path = write_workbook([["  31/Jul/2025 ", "Egresos", 100.0, " ACME ", None, 250.5]])
        grid = load_first_sheet(path)
        assert grid.cell(2, 1) == "31/Jul/2025"
        assert grid.cell(2, 3) == 100
        assert isinstance(grid.cell(2, 3), int)
        assert grid.cell(2, 4) == "ACME"
        assert grid.cell(2, 5) == ""
        assert grid.cell(2, 6) == 250.5

    def test_only_first_sheet_is_read(self, write_workbook):
        path = write_workbook([["a"]], extra_sheets={"Otra": [["b"], ["c"], ["d"]]})
        grid = load_first_sheet(path)
        assert grid.row_count == 2

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SourceFileNotFoundError) as exc_info:
            load_first_sheet(tmp_path / "nope.xlsx")
        assert exc_info.value.code == "SOURCE_FILE_NOT_FOUND"

    def test_not_a_zip_archive(self, tmp_path: Path):
        path = tmp_path / "bad.xlsx"
        path.write_text("not a zip")
        with pytest.raises(MalformedWorkbookError) as exc_info:
            load_first_sheet(path)
        assert exc_info.value.code == "MALFORMED_WORKBOOK"
        assert exc_info.value.source_path == str(path)

    def test_zip_without_workbook_parts(self, tmp_path: Path):
        path = tmp_path / "empty.xlsx"
        with ZipFile(path, "w") as archive:
            archive.writestr("notes.txt", "hola")
        with pytest.raises(MalformedWorkbookError):
            load_first_sheet(path)


class TestProbeWorkbook:
    def test_counts_non_empty_rows_per_sheet_excluding_title(self, write_workbook):
        path = write_workbook(
            [
                ["101-001-001-001-01", "Caja"],
                [None, None],
                ["Segmento SEG-1"],
                ["31/Jul/2025", "Egresos", 1, "ACME", "R", 10],
            ],
            extra_sheets={"Resumen": [["Titulo"], ["x"], ["y"]]},
        )
        probe = probe_workbook(path)

        assert probe.source_filename == path.name
        assert [s.name for s in probe.sheets] == ["Auxiliar", "Resumen"]
        auxiliar, resumen = probe.sheets
        assert auxiliar.total_rows == 5
        assert auxiliar.non_empty_rows == 3
        assert resumen.non_empty_rows == 2
        assert probe.non_empty_rows == 5

    def test_sample_rows_limit(self, write_workbook):
        path = write_workbook([[f"fila {i}"] for i in range(10)])
        probe = probe_workbook(path, sample_rows=3)
        sample = probe.sheets[0].sample_rows
        assert len(sample) == 3
        assert sample[0][0] == "fila 0"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SourceFileNotFoundError):
            probe_workbook(tmp_path / "nope.xlsx")

    def test_unreadable_file(self, tmp_path: Path):
        path = tmp_path / "bad.xlsx"
        path.write_bytes(b"\x00\x01")
        with pytest.raises(MalformedWorkbookError):
            probe_workbook(path)
