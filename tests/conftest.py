"""
Pytest fixtures for the ledger test suite.

Provides:
- In-memory SQLite sessions, rolled back after every test
- A deterministic clock and a fixed test actor
- Captured JSON logs
- A ContPAQ-style workbook writer (openpyxl, tmp_path)

No PostgreSQL required.
"""

import json
import logging
from io import StringIO
from pathlib import Path
from typing import Any, Generator, Sequence
from uuid import UUID, uuid4

import openpyxl
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

import ledger_kernel.models  # noqa: F401  (registers tables on Base.metadata)
from ledger_kernel.db.base import Base
from ledger_kernel.db.engine import enable_sqlite_savepoints
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# Test actor ID for all test operations
TEST_ACTOR_ID = uuid4()

COMPANY_NAME = "Granja El Roble SA de CV"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, import_service):
            import_service.import_workbook(path, actor_id)
            logs = captured_logs()
            assert any(r["message"] == "import_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture(scope="session")
def db_engine():
    """Single in-memory SQLite engine for the whole test session."""
    eng = create_engine("sqlite://")
    enable_sqlite_savepoints(eng)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    """
    Session inside an outer transaction that is rolled back after the test.

    Commits and SAVEPOINTs made by the code under test stay inside the
    outer transaction.
    """
    conn = db_engine.connect()
    trans = conn.begin()
    sess = Session(bind=conn, join_transaction_mode="create_savepoint", expire_on_commit=False)
    yield sess
    sess.close()
    if trans.is_active:
        trans.rollback()
    conn.close()


@pytest.fixture
def test_actor_id() -> UUID:
    """Provide a consistent test actor ID."""
    return TEST_ACTOR_ID


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing."""
    return DeterministicClock()


# =============================================================================
# Workbook fixtures
# =============================================================================


@pytest.fixture
def write_workbook(tmp_path: Path):
    """
    Write a ContPAQ-style .xlsx file and return its path.

    Row 1 is the report title with ``company`` in column D; pass
    ``company=None`` to write ``rows`` with no title row at all.

    Usage::

        path = write_workbook([["101-001-001-001-01", "Caja"]])
        path = write_workbook(rows, extra_sheets={"Resumen": [["x"]]})
    """
    counter = iter(range(1, 10_000))

    def _write(
        rows: Sequence[Sequence[Any]],
        company: str | None = COMPANY_NAME,
        name: str | None = None,
        extra_sheets: dict[str, Sequence[Sequence[Any]]] | None = None,
    ) -> Path:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Auxiliar"
        if company is not None:
            ws.append(["Auxiliar de cuentas", None, None, company])
        for row in rows:
            ws.append(list(row))
        for title, sheet_rows in (extra_sheets or {}).items():
            extra = wb.create_sheet(title)
            for row in sheet_rows:
                extra.append(list(row))
        path = tmp_path / (name or f"auxiliar_{next(counter)}.xlsx")
        wb.save(path)
        return path

    return _write
