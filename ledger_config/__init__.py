"""
ledger_config -- single public entrypoint for runtime settings.

Responsibility:
    ``get_settings()`` is the only way the importer and the scripts obtain
    settings.  It reads the packaged ``defaults.yaml``, merges an optional
    user YAML file over it, then applies the ``LEDGER_DATABASE_URL``
    environment override.

Failure modes:
    - ``FileNotFoundError`` -- the user YAML file does not exist.
    - ``KeyError`` / ``ValueError`` -- the merged settings are invalid.
"""

from __future__ import annotations

import os
from pathlib import Path

from ledger_kernel.logging_config import get_logger

from ledger_config.loader import load_yaml_file, merge_settings, parse_settings
from ledger_config.schema import LedgerSettings, WorkbookSettings

_logger = get_logger("config")

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"
DATABASE_URL_ENV = "LEDGER_DATABASE_URL"


def get_settings(config_path: Path | str | None = None) -> LedgerSettings:
    """
    Build the active settings.

    Args:
        config_path: Optional YAML file whose keys override the defaults.

    Returns:
        Frozen ``LedgerSettings``.
    """
    data = load_yaml_file(DEFAULTS_PATH)
    if config_path is not None:
        data = merge_settings(data, load_yaml_file(Path(config_path)))

    env_url = os.environ.get(DATABASE_URL_ENV)
    if env_url:
        data["database_url"] = env_url

    settings = parse_settings(data)

    _logger.debug(
        "settings_loaded",
        extra={
            "config_path": str(config_path) if config_path else None,
            "database_url_from_env": bool(env_url),
        },
    )
    return settings


__all__ = [
    "DATABASE_URL_ENV",
    "LedgerSettings",
    "WorkbookSettings",
    "get_settings",
]
