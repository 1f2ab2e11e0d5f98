"""
Number coercion for movement cells.

Cells arrive either as text or as numbers already typed by Excel.  Numbers
go through ``str`` before ``Decimal`` so a float cell like ``250.1`` stays
``Decimal("250.1")`` instead of its binary expansion.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ledger_kernel.exceptions import InvalidSequenceNumberError
from ledger_kernel.models.movement import MAX_MOVEMENT_NUMBER, MovementKind

CENTS = Decimal("0.01")

_DECIMAL_TEXT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)\Z", re.ASCII)


def parse_charge(raw: Any) -> Decimal | None:
    """
    Parse a charge cell.

    Blank or non-numeric cells give None (not zero, not an error).
    Thousands separators are dropped and the result is rounded half-up
    to cents, the precision the movement table stores.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, float) and not math.isfinite(raw):
        return None
    if isinstance(raw, (int, float, Decimal)):
        text = str(raw)
    else:
        text = str(raw).strip().replace(",", "")

    if not _DECIMAL_TEXT.match(text):
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_sequence_number(raw: Any) -> int:
    """
    Parse the policy number cell into a positive int that fits the
    movements table (at most ``MAX_MOVEMENT_NUMBER``).

    Integral floats (``100.0``) are accepted since Excel stores every number
    as a float.

    Raises:
        InvalidSequenceNumberError: blank, non-integral, not positive or
            too large.
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidSequenceNumberError(raw)

    if isinstance(raw, int):
        number = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidSequenceNumberError(raw)
        number = int(raw)
    else:
        text = str(raw).strip()
        if not _DECIMAL_TEXT.match(text):
            raise InvalidSequenceNumberError(raw)
        value = Decimal(text)
        if value != value.to_integral_value():
            raise InvalidSequenceNumberError(raw)
        number = int(value)

    if number < 1 or number > MAX_MOVEMENT_NUMBER:
        raise InvalidSequenceNumberError(raw)
    return number


def parse_movement_kind(text: str) -> MovementKind:
    """``Ingresos`` (any case) is income; every other policy type is an expense."""
    if text.strip().lower() == MovementKind.INGRESOS.value.lower():
        return MovementKind.INGRESOS
    return MovementKind.EGRESOS
