#!/usr/bin/env python3
"""
Import a ContPAQ ledger workbook: accounts, segments and movements.

Settings come from ledger_config (defaults.yaml, --config, LEDGER_DATABASE_URL).

Usage:
    python3 scripts/run_import.py --file <path> [options]

Examples:
    # Full import, committing everything that was parsed
    python3 scripts/run_import.py --file auxiliar_julio.xlsx

    # Local SQLite database, creating the tables first
    python3 scripts/run_import.py --file auxiliar_julio.xlsx --db-url sqlite:///ledger.db --create-tables

    # Probe the workbook (rows per sheet, sample rows) without touching the DB
    python3 scripts/run_import.py --file auxiliar_julio.xlsx --probe-only
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from uuid import UUID, uuid4

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import a ContPAQ ledger workbook into the ledger database.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--file",
        required=True,
        type=Path,
        help="Path to the .xlsx workbook exported from ContPAQ.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML settings file merged over ledger_config/defaults.yaml.",
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Database URL (overrides settings and LEDGER_DATABASE_URL).",
    )
    parser.add_argument(
        "--actor-id",
        default=None,
        help="Actor UUID for audit (default: RUN_IMPORT_ACTOR_ID env or new UUID).",
    )
    parser.add_argument(
        "--probe-only",
        action="store_true",
        help="Print rows per sheet and sample rows, then exit. No DB access.",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before importing.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    actor_id = UUID(args.actor_id) if args.actor_id else UUID(os.environ.get("RUN_IMPORT_ACTOR_ID", str(uuid4())))
    source_path = args.file.resolve()
    if not source_path.is_file():
        print(f"ERROR: File not found: {source_path}", file=sys.stderr)
        return 1

    # Lazy imports so we fail fast on args first
    from ledger_config import get_settings
    from ledger_ingestion.adapters import probe_workbook
    from ledger_ingestion.services import LedgerImportService
    from ledger_kernel.db.engine import create_tables, get_session, init_engine_from_url
    from ledger_kernel.domain.clock import SystemClock
    from ledger_kernel.exceptions import MalformedWorkbookError
    from ledger_kernel.logging_config import configure_logging

    try:
        settings = get_settings(args.config)
    except (OSError, KeyError, ValueError) as e:
        print(f"ERROR: Failed to load settings: {e}", file=sys.stderr)
        return 1
    configure_logging(level=settings.log_level)

    if args.probe_only:
        try:
            probe = probe_workbook(source_path, sample_rows=settings.workbook.probe_sample_rows)
        except MalformedWorkbookError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        for sheet in probe.sheets:
            print(f"Sheet {sheet.name!r}: {sheet.total_rows} rows, {sheet.non_empty_rows} non-empty")
            for i, row in enumerate(sheet.sample_rows, 1):
                print(f"  {i}: {list(row)}")
        print(f"Total non-empty rows: {probe.non_empty_rows}")
        return 0

    try:
        init_engine_from_url(args.db_url or settings.database_url)
        if args.create_tables:
            create_tables()
    except Exception as e:
        print(f"ERROR: Database init failed: {e}", file=sys.stderr)
        return 1

    session = get_session()
    service = LedgerImportService(session, clock=SystemClock(), settings=settings.workbook)
    try:
        print(f"Importing {source_path}...")
        result = service.import_workbook(source_path, actor_id)
        # Partial writes are kept even when the run aborts.
        session.commit()
    except Exception as e:
        session.rollback()
        print(f"ERROR: {e}", file=sys.stderr)
        raise
    finally:
        session.close()

    print(f"  Status: {result.status.value}")
    print(
        f"  Movements: {result.movements_created}, Accounts: {result.accounts_resolved}, "
        f"Segments: {result.segments_resolved}, Rows read: {result.rows_read}"
    )
    if result.errors:
        for err in result.errors[:10]:
            print(f"  Row {err.row_index} [{err.kind.value}]: {err.reason}")
        if len(result.errors) > 10:
            print(f"  ... and {len(result.errors) - 10} more errors.")
    return 1 if result.aborted else 0


if __name__ == "__main__":
    sys.exit(main())
