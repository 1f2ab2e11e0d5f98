"""
Settings schema.

Frozen dataclasses parsed from YAML by ``ledger_config.loader``.  Nothing
outside this package builds them by hand except tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WorkbookSettings:
    """Where the importer looks inside a ContPAQ workbook."""

    company_row: int = 1
    company_column: int = 4
    allowed_suffixes: tuple[str, ...] = (".xlsx", ".xlsm")
    probe_sample_rows: int = 5


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings for the ledger backend."""

    database_url: str
    log_level: str = "INFO"
    workbook: WorkbookSettings = field(default_factory=WorkbookSettings)
