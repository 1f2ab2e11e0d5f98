"""Tests for ConceptService."""

from uuid import uuid4

import pytest

from ledger_kernel.exceptions import ConceptNotFoundError, InvalidConceptNameError
from ledger_kernel.models.concept import CONCEPT_NAME_MAX_LENGTH
from ledger_kernel.services.concept_service import ConceptService


@pytest.fixture
def service(session):
    return ConceptService(session)


class TestConceptService:
    def test_create(self, service, test_actor_id):
        info = service.create("  Gastos de Oficina ", test_actor_id)
        assert info.name == "Gastos de Oficina"
        assert service.find_by_id(info.id) == info

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, service, test_actor_id, name):
        with pytest.raises(InvalidConceptNameError) as exc_info:
            service.create(name, test_actor_id)
        assert exc_info.value.code == "INVALID_CONCEPT_NAME"

    def test_name_length_limit(self, service, test_actor_id):
        longest = "x" * CONCEPT_NAME_MAX_LENGTH
        assert service.create(longest, test_actor_id).name == longest
        with pytest.raises(InvalidConceptNameError):
            service.create(longest + "x", test_actor_id)

    def test_names_may_repeat(self, service, test_actor_id):
        first = service.create("Alimento", test_actor_id)
        second = service.create("Alimento", test_actor_id)
        assert first.id != second.id

    def test_find_all_sorted_by_name(self, service, test_actor_id):
        for name in ("Sueldos", "Alimento", "Medicinas"):
            service.create(name, test_actor_id)

        assert [c.name for c in service.find_all()] == ["Alimento", "Medicinas", "Sueldos"]

    def test_find_by_id_missing(self, service):
        with pytest.raises(ConceptNotFoundError) as exc_info:
            service.find_by_id(uuid4())
        assert exc_info.value.code == "CONCEPT_NOT_FOUND"

    def test_update(self, service, test_actor_id):
        info = service.create("Alimento", test_actor_id)

        updated = service.update(info.id, test_actor_id, "Alimento balanceado")

        assert updated.id == info.id
        assert service.find_by_id(info.id).name == "Alimento balanceado"

    def test_update_validates(self, service, test_actor_id):
        info = service.create("Alimento", test_actor_id)
        with pytest.raises(InvalidConceptNameError):
            service.update(info.id, test_actor_id, " ")
        assert service.find_by_id(info.id).name == "Alimento"

    def test_update_missing(self, service, test_actor_id):
        with pytest.raises(ConceptNotFoundError):
            service.update(uuid4(), test_actor_id, "Alimento")

    def test_remove(self, service, test_actor_id):
        info = service.create("Alimento", test_actor_id)

        removed = service.remove(info.id)

        assert removed == info
        assert service.find_all() == []
        with pytest.raises(ConceptNotFoundError):
            service.remove(info.id)

    def test_create_is_logged(self, service, test_actor_id, captured_logs):
        info = service.create("Alimento", test_actor_id)

        created = next(r for r in captured_logs() if r["message"] == "concept_created")
        assert created["concept_id"] == str(info.id)
        assert created["concept_name"] == "Alimento"
