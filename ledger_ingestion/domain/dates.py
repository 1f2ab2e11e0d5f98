"""
Date normalizer for ContPAQ movement dates.

ContPAQ prints dates as ``<day>/<Spanish month abbreviation>/<year>``
(``31/Jul/2025``, ``1/Ene/2024``).  An unknown abbreviation is an error,
never month ``00``.
"""

from __future__ import annotations

from datetime import date

from ledger_kernel.exceptions import MalformedDateError

SPANISH_MONTHS: dict[str, int] = {
    "Ene": 1,
    "Feb": 2,
    "Mar": 3,
    "Abr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Ago": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dic": 12,
}


def _split(text: str) -> tuple[int, int, int]:
    parts = text.strip().split("/")
    if len(parts) != 3:
        raise MalformedDateError(text, "expected day/month/year")
    day_text, month_text, year_text = parts

    month = SPANISH_MONTHS.get(month_text)
    if month is None:
        raise MalformedDateError(text, f"unknown month abbreviation {month_text!r}")
    if not all(p.isascii() and p.isdigit() for p in (day_text, year_text)):
        raise MalformedDateError(text, "day and year must be digits")
    return int(year_text), month, int(day_text)


def normalize_date(text: str) -> str:
    """
    Convert ``31/Jul/2025`` to ISO ``2025-07-31``.

    Only the month is validated; ``31/Feb/2025`` normalizes to ``2025-02-31``.
    Use ``parse_movement_date`` when a real calendar date is needed.

    Raises:
        MalformedDateError: unknown month or not three ``/``-separated parts.
    """
    year, month, day = _split(text)
    return f"{year:04d}-{month:02d}-{day:02d}"


def parse_movement_date(text: str) -> date:
    """
    Convert a ContPAQ date to ``datetime.date``.

    Raises:
        MalformedDateError: unknown month, or the day does not exist in
            that month (``31/Feb/2025``, ``0/Ene/2024``).
    """
    year, month, day = _split(text)
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedDateError(text, str(exc)) from exc
