"""
Service layer for movements.

The movement store is the last gate before a parsed ledger row becomes a
database row.  It rejects an unknown kind, a number that is not positive
or does not fit the INTEGER column, and any charge that does not fit
Numeric(10, 2).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import func, select

from ledger_kernel.exceptions import InvalidMovementError, MovementNotFoundError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.movement import MAX_MOVEMENT_NUMBER, Movement, MovementKind
from ledger_kernel.services.base import BaseService

logger = get_logger("services.movement")

# Numeric(10, 2): eight integer digits.
MAX_ABS_CHARGE = Decimal("99999999.99")

_UNSET: Any = object()


@dataclass(frozen=True)
class MovementDraft:
    """A movement ready to persist, as assembled from one ledger row."""

    account_id: UUID
    segment_id: UUID
    date: date
    kind: MovementKind
    number: int
    supplier: str = ""
    concept: str = ""
    reference: str = ""
    charge: Decimal | None = None


@dataclass(frozen=True)
class MovementInfo:
    """Immutable DTO for movement data."""

    id: UUID
    account_id: UUID
    segment_id: UUID
    date: date
    kind: MovementKind
    number: int
    supplier: str
    concept: str
    reference: str
    charge: Decimal | None


def _validate_kind(kind: Any) -> MovementKind:
    try:
        return MovementKind(kind)
    except ValueError:
        raise InvalidMovementError("kind", kind, "expected Egresos or Ingresos") from None


def _validate_number(number: Any) -> int:
    if isinstance(number, bool) or not isinstance(number, int):
        raise InvalidMovementError("number", number, "must be an integer")
    if number < 1:
        raise InvalidMovementError("number", number, "must be positive")
    if number > MAX_MOVEMENT_NUMBER:
        raise InvalidMovementError("number", number, f"exceeds {MAX_MOVEMENT_NUMBER}")
    return number


def _validate_charge(charge: Any) -> Decimal | None:
    if charge is None:
        return None
    if not isinstance(charge, Decimal) or not charge.is_finite():
        raise InvalidMovementError("charge", charge, "must be a finite Decimal")
    if charge.as_tuple().exponent < -2:
        raise InvalidMovementError("charge", charge, "more than two decimal places")
    if abs(charge) > MAX_ABS_CHARGE:
        raise InvalidMovementError("charge", charge, "exceeds Numeric(10, 2)")
    return charge


def _validate_date(value: Any) -> date:
    if not isinstance(value, date):
        raise InvalidMovementError("date", value, "must be a calendar date")
    return value


class MovementService(BaseService[Movement]):
    """Service for managing movements."""

    def _to_dto(self, movement: Movement) -> MovementInfo:
        return MovementInfo(
            id=movement.id,
            account_id=movement.account_id,
            segment_id=movement.segment_id,
            date=movement.date,
            kind=movement.kind,
            number=movement.number,
            supplier=movement.supplier,
            concept=movement.concept,
            reference=movement.reference,
            charge=movement.charge,
        )

    def _get_by_id(self, movement_id: UUID) -> Movement:
        movement = self.session.get(Movement, movement_id)
        if movement is None:
            raise MovementNotFoundError(str(movement_id))
        return movement

    def _next_entry_order(self) -> int:
        stmt = select(func.coalesce(func.max(Movement.entry_order), 0))
        return self.session.execute(stmt).scalar_one() + 1

    def create(self, draft: MovementDraft, actor_id: UUID) -> MovementInfo:
        """
        Persist a movement draft.

        Raises:
            InvalidMovementError: If kind, number, date or charge is rejected.
        """
        movement = Movement(
            account_id=draft.account_id,
            segment_id=draft.segment_id,
            date=_validate_date(draft.date),
            kind=_validate_kind(draft.kind),
            number=_validate_number(draft.number),
            supplier=draft.supplier,
            concept=draft.concept,
            reference=draft.reference,
            charge=_validate_charge(draft.charge),
            entry_order=self._next_entry_order(),
            created_by_id=actor_id,
        )
        self.session.add(movement)
        self.session.flush()

        logger.debug(
            "movement_persisted",
            extra={
                "movement_id": str(movement.id),
                "account_id": str(draft.account_id),
                "segment_id": str(draft.segment_id),
            },
        )
        return self._to_dto(movement)

    def find_all(self) -> list[MovementInfo]:
        """All movements, newest date first; same-day movements latest insert first."""
        stmt = select(Movement).order_by(Movement.date.desc(), Movement.entry_order.desc())
        return [self._to_dto(m) for m in self.session.execute(stmt).scalars()]

    def find_by_id(self, movement_id: UUID) -> MovementInfo:
        return self._to_dto(self._get_by_id(movement_id))

    def find_by_segment(self, segment_id: UUID) -> list[MovementInfo]:
        stmt = (
            select(Movement)
            .where(Movement.segment_id == segment_id)
            .order_by(Movement.date.desc())
        )
        return [self._to_dto(m) for m in self.session.execute(stmt).scalars()]

    def find_by_account(self, account_id: UUID) -> list[MovementInfo]:
        stmt = (
            select(Movement)
            .where(Movement.account_id == account_id)
            .order_by(Movement.date.desc())
        )
        return [self._to_dto(m) for m in self.session.execute(stmt).scalars()]

    def update(
        self,
        movement_id: UUID,
        actor_id: UUID,
        *,
        date: Any = _UNSET,
        kind: Any = _UNSET,
        number: Any = _UNSET,
        supplier: Any = _UNSET,
        concept: Any = _UNSET,
        reference: Any = _UNSET,
        charge: Any = _UNSET,
    ) -> MovementInfo:
        """
        Update the given movement fields.  Omitted fields are left alone;
        ``charge=None`` clears the amount.

        Raises:
            MovementNotFoundError: If the movement doesn't exist.
            InvalidMovementError: If a new value is rejected.
        """
        movement = self._get_by_id(movement_id)

        if date is not _UNSET:
            movement.date = _validate_date(date)
        if kind is not _UNSET:
            movement.kind = _validate_kind(kind)
        if number is not _UNSET:
            movement.number = _validate_number(number)
        if supplier is not _UNSET:
            movement.supplier = supplier
        if concept is not _UNSET:
            movement.concept = concept
        if reference is not _UNSET:
            movement.reference = reference
        if charge is not _UNSET:
            movement.charge = _validate_charge(charge)

        movement.updated_by_id = actor_id
        self.session.flush()
        return self._to_dto(movement)

    def remove(self, movement_id: UUID) -> MovementInfo:
        """
        Delete a movement.

        Raises:
            MovementNotFoundError: If the movement doesn't exist.
        """
        movement = self._get_by_id(movement_id)
        removed = self._to_dto(movement)
        self.session.delete(movement)
        self.session.flush()

        logger.info("movement_removed", extra={"movement_id": str(movement_id)})
        return removed
