"""End-to-end tests for scripts/run_import.py against a SQLite file."""

import importlib.util
from pathlib import Path

import pytest
from sqlalchemy import create_engine, text

from ledger_kernel.db.engine import reset_engine

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "run_import.py"


@pytest.fixture(scope="module")
def run_import():
    spec = importlib.util.spec_from_file_location("run_import", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    monkeypatch.delenv("LEDGER_DATABASE_URL", raising=False)
    yield f"sqlite:///{tmp_path / 'ledger.db'}"
    reset_engine()


def _count(url: str, table: str) -> int:
    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            return conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()
    finally:
        engine.dispose()


class TestRunImportScript:
    def test_import_commits(self, run_import, write_workbook, db_url, capsys):
        path = write_workbook([
            ["101-001-001-001-01", "Caja"],
            ["Segmento SEG-1"],
            ["31/Jul/2025", "Egresos", 1, "ACME", "R", 10],
            ["1/Ago/2025", "Ingresos", 2, "ACME", "R", 20],
        ])

        code = run_import.main(["--file", str(path), "--db-url", db_url, "--create-tables"])

        assert code == 0
        assert "Status: completed" in capsys.readouterr().out
        assert _count(db_url, "movements") == 2
        assert _count(db_url, "accounting_accounts") == 1

    def test_aborted_run_exits_nonzero(self, run_import, write_workbook, db_url, capsys):
        path = write_workbook([["101-001-001-001-01", "Caja"]], company="")

        code = run_import.main(["--file", str(path), "--db-url", db_url, "--create-tables"])

        assert code == 1
        assert "missing_company" in capsys.readouterr().out

    def test_probe_only(self, run_import, write_workbook, capsys):
        path = write_workbook([["101-001-001-001-01", "Caja"], ["Segmento SEG-1"]])

        code = run_import.main(["--file", str(path), "--probe-only"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Sheet 'Auxiliar': 3 rows, 2 non-empty" in out

    def test_unreadable_file_aborts(self, run_import, tmp_path, db_url, capsys):
        path = tmp_path / "bad.xlsx"
        path.write_bytes(b"not a zip")

        code = run_import.main(["--file", str(path), "--db-url", db_url, "--create-tables"])

        assert code == 1
        assert "malformed_workbook" in capsys.readouterr().out

    def test_listing_only_unreadable_file(self, run_import, tmp_path, capsys):
        path = tmp_path / "bad.xlsx"
        path.write_bytes(b"not a zip")

        code = run_import.main(["--file", str(path), "--probe-only"])

        assert code == 1
        assert "Cannot read workbook" in capsys.readouterr().err

    def test_missing_file(self, run_import, tmp_path, capsys):
        code = run_import.main(["--file", str(tmp_path / "nope.xlsx")])

        assert code == 1
        assert "File not found" in capsys.readouterr().err

    def test_bad_config(self, run_import, write_workbook, tmp_path, capsys):
        path = write_workbook([["101-001-001-001-01", "Caja"]])

        code = run_import.main(["--file", str(path), "--config", str(tmp_path / "missing.yaml")])

        assert code == 1
        assert "Failed to load settings" in capsys.readouterr().err
