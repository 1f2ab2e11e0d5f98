"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads YAML settings files and parses them into the frozen dataclasses of
``ledger_config.schema``.  Callers use ``ledger_config.get_settings()``;
this module is the parsing half of that entry point.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``database_url``  -> ``KeyError``.
* Non-positive row/column or a suffix without a leading dot  -> ``ValueError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import LedgerSettings, WorkbookSettings


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def merge_settings(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def _positive_int(data: dict[str, Any], key: str, default: int) -> int:
    value = int(data.get(key, default))
    if value < 1:
        raise ValueError(f"workbook.{key} must be >= 1, got {value}")
    return value


def parse_workbook(data: dict[str, Any]) -> WorkbookSettings:
    """Parse the ``workbook`` section."""
    defaults = WorkbookSettings()
    suffixes = tuple(
        str(s).lower() for s in data.get("allowed_suffixes", defaults.allowed_suffixes)
    )
    for suffix in suffixes:
        if not suffix.startswith("."):
            raise ValueError(f"workbook.allowed_suffixes entry {suffix!r} must start with '.'")
    return WorkbookSettings(
        company_row=_positive_int(data, "company_row", defaults.company_row),
        company_column=_positive_int(data, "company_column", defaults.company_column),
        allowed_suffixes=suffixes,
        probe_sample_rows=_positive_int(data, "probe_sample_rows", defaults.probe_sample_rows),
    )


def parse_settings(data: dict[str, Any]) -> LedgerSettings:
    """
    Parse ``LedgerSettings`` from a dict.

    Raises:
        KeyError: if ``database_url`` is missing.
        ValueError: if a workbook setting is out of range.
    """
    return LedgerSettings(
        database_url=data["database_url"],
        log_level=str(data.get("log_level", "INFO")).upper(),
        workbook=parse_workbook(data.get("workbook") or {}),
    )
