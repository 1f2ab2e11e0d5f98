"""
Service layer for the concept catalog.

Concepts are maintained by hand; the importer never writes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select

from ledger_kernel.exceptions import ConceptNotFoundError, InvalidConceptNameError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.concept import CONCEPT_NAME_MAX_LENGTH, Concept
from ledger_kernel.services.base import BaseService

logger = get_logger("services.concept")


@dataclass(frozen=True)
class ConceptInfo:
    """Immutable DTO for concept data."""

    id: UUID
    name: str


class ConceptService(BaseService[Concept]):
    """Service for managing the concept catalog."""

    def _to_dto(self, concept: Concept) -> ConceptInfo:
        return ConceptInfo(id=concept.id, name=concept.name)

    def _get_by_id(self, concept_id: UUID) -> Concept:
        concept = self.session.get(Concept, concept_id)
        if concept is None:
            raise ConceptNotFoundError(str(concept_id))
        return concept

    @staticmethod
    def _validate_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidConceptNameError(name or "", "name is required")
        if len(cleaned) > CONCEPT_NAME_MAX_LENGTH:
            raise InvalidConceptNameError(
                cleaned, f"longer than {CONCEPT_NAME_MAX_LENGTH} characters"
            )
        return cleaned

    def create(self, name: str, actor_id: UUID) -> ConceptInfo:
        """
        Add a concept to the catalog.

        Raises:
            InvalidConceptNameError: If name is blank or too long.
        """
        concept = Concept(name=self._validate_name(name), created_by_id=actor_id)
        self.session.add(concept)
        self.session.flush()

        logger.info(
            "concept_created",
            extra={"concept_id": str(concept.id), "concept_name": concept.name},
        )
        return self._to_dto(concept)

    def find_all(self) -> list[ConceptInfo]:
        """Whole catalog, alphabetical by name."""
        stmt = select(Concept).order_by(Concept.name)
        return [self._to_dto(c) for c in self.session.execute(stmt).scalars()]

    def find_by_id(self, concept_id: UUID) -> ConceptInfo:
        return self._to_dto(self._get_by_id(concept_id))

    def update(self, concept_id: UUID, actor_id: UUID, name: str) -> ConceptInfo:
        """
        Rename a concept.

        Raises:
            ConceptNotFoundError: If the concept doesn't exist.
            InvalidConceptNameError: If the new name is blank or too long.
        """
        concept = self._get_by_id(concept_id)
        concept.name = self._validate_name(name)
        concept.updated_by_id = actor_id
        self.session.flush()
        return self._to_dto(concept)

    def remove(self, concept_id: UUID) -> ConceptInfo:
        """
        Delete a concept.  Movements keep their concept text.

        Raises:
            ConceptNotFoundError: If the concept doesn't exist.
        """
        concept = self._get_by_id(concept_id)
        removed = self._to_dto(concept)
        self.session.delete(concept)
        self.session.flush()

        logger.info(
            "concept_removed",
            extra={"concept_id": str(concept_id), "concept_name": removed.name},
        )
        return removed
