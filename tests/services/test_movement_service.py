"""
Tests for MovementService.

The store rejects anything that would not fit the movements table, so an
import never writes a half-valid row.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from ledger_kernel.exceptions import InvalidMovementError, MovementNotFoundError
from ledger_kernel.models.movement import MAX_MOVEMENT_NUMBER, MovementKind
from ledger_kernel.services.account_service import AccountService
from ledger_kernel.services.movement_service import (
    MAX_ABS_CHARGE,
    MovementDraft,
    MovementService,
)
from ledger_kernel.services.segment_service import SegmentService


@pytest.fixture
def service(session):
    return MovementService(session)


@pytest.fixture
def draft(session, test_actor_id):
    account = AccountService(session).create("101-001-001-001-01", "Caja", test_actor_id)
    segment = SegmentService(session).create("SEG-1", None, test_actor_id)
    return MovementDraft(
        account_id=account.id,
        segment_id=segment.id,
        date=date(2025, 7, 31),
        kind=MovementKind.EGRESOS,
        number=100,
        supplier="ACME",
        concept="Caja",
        reference="REF-1",
        charge=Decimal("250.50"),
    )


class TestMovementCreate:
    def test_create(self, service, draft, test_actor_id):
        info = service.create(draft, test_actor_id)

        assert info.id is not None
        assert info.kind == MovementKind.EGRESOS
        assert info.charge == Decimal("250.50")
        assert service.find_by_id(info.id).reference == "REF-1"

    def test_kind_from_text_value(self, service, draft, test_actor_id):
        info = service.create(replace(draft, kind="Ingresos"), test_actor_id)
        assert info.kind == MovementKind.INGRESOS

    def test_charge_may_be_absent(self, service, draft, test_actor_id):
        info = service.create(replace(draft, charge=None), test_actor_id)
        assert info.charge is None

    def test_charge_at_column_limit(self, service, draft, test_actor_id):
        info = service.create(replace(draft, charge=-MAX_ABS_CHARGE), test_actor_id)
        assert info.charge == Decimal("-99999999.99")

    def test_number_at_column_limit(self, service, draft, test_actor_id):
        info = service.create(replace(draft, number=MAX_MOVEMENT_NUMBER), test_actor_id)
        assert service.find_by_id(info.id).number == 2_147_483_647

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("kind", "Diario"),
            ("number", 0),
            ("number", -1),
            ("number", True),
            ("number", "12"),
            ("number", MAX_MOVEMENT_NUMBER + 1),
            ("number", 99999999999999999999),
            ("charge", Decimal("100000000.00")),
            ("charge", Decimal("1.005")),
            ("charge", Decimal("NaN")),
            ("charge", 10.5),
            ("date", "2025-07-31"),
        ],
    )
    def test_rejected_fields(self, service, draft, test_actor_id, field, value):
        with pytest.raises(InvalidMovementError) as exc_info:
            service.create(replace(draft, **{field: value}), test_actor_id)
        assert exc_info.value.code == "INVALID_MOVEMENT"
        assert exc_info.value.field == field


class TestMovementQueries:
    def test_find_all_newest_first(self, service, draft, test_actor_id):
        service.create(replace(draft, date=date(2025, 1, 5), number=1), test_actor_id)
        service.create(replace(draft, date=date(2025, 3, 1), number=2), test_actor_id)
        service.create(replace(draft, date=date(2025, 3, 1), number=3), test_actor_id)

        assert [m.number for m in service.find_all()] == [3, 2, 1]

    def test_same_day_latest_insert_first(self, service, draft, test_actor_id):
        for number in (9, 2, 5):
            service.create(replace(draft, number=number), test_actor_id)

        assert [m.number for m in service.find_all()] == [5, 2, 9]

    def test_find_by_account_and_segment(self, service, session, draft, test_actor_id):
        other_segment = SegmentService(session).create("SEG-2", None, test_actor_id)
        service.create(draft, test_actor_id)
        service.create(replace(draft, segment_id=other_segment.id, number=2), test_actor_id)

        assert len(service.find_by_account(draft.account_id)) == 2
        assert [m.number for m in service.find_by_segment(other_segment.id)] == [2]
        assert service.find_by_account(uuid4()) == []

    def test_find_by_id_missing(self, service):
        with pytest.raises(MovementNotFoundError):
            service.find_by_id(uuid4())


class TestMovementUpdateRemove:
    def test_update_only_given_fields(self, service, draft, test_actor_id):
        info = service.create(draft, test_actor_id)

        updated = service.update(info.id, test_actor_id, concept="Compra de alimento")

        assert updated.concept == "Compra de alimento"
        assert updated.charge == Decimal("250.50")
        assert updated.supplier == "ACME"

    def test_update_clears_charge(self, service, draft, test_actor_id):
        info = service.create(draft, test_actor_id)
        assert service.update(info.id, test_actor_id, charge=None).charge is None

    def test_update_validates(self, service, draft, test_actor_id):
        info = service.create(draft, test_actor_id)
        with pytest.raises(InvalidMovementError):
            service.update(info.id, test_actor_id, number=0)

    def test_remove(self, service, draft, test_actor_id):
        info = service.create(draft, test_actor_id)
        service.remove(info.id)
        with pytest.raises(MovementNotFoundError):
            service.find_by_id(info.id)

    def test_remove_missing(self, service):
        with pytest.raises(MovementNotFoundError):
            service.remove(uuid4())
