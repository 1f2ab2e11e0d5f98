"""SQLAlchemy ORM models for the ledger backend."""

from ledger_kernel.models.account import (
    ACCOUNT_CODE_PATTERN,
    Account,
    is_valid_account_code,
)
from ledger_kernel.models.company import Company
from ledger_kernel.models.concept import CONCEPT_NAME_MAX_LENGTH, Concept
from ledger_kernel.models.movement import MAX_MOVEMENT_NUMBER, Movement, MovementKind
from ledger_kernel.models.segment import Segment

__all__ = [
    "ACCOUNT_CODE_PATTERN",
    "Account",
    "CONCEPT_NAME_MAX_LENGTH",
    "Company",
    "Concept",
    "MAX_MOVEMENT_NUMBER",
    "Movement",
    "MovementKind",
    "Segment",
    "is_valid_account_code",
]
