"""
Service layer for segments.

Returns SegmentInfo DTOs instead of ORM entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select

from ledger_kernel.exceptions import (
    DuplicateSegmentCodeError,
    InvalidSegmentCodeError,
    SegmentNotFoundError,
    SegmentReferencedError,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.movement import Movement
from ledger_kernel.models.segment import Segment
from ledger_kernel.services.base import BaseService

logger = get_logger("services.segment")


def default_segment_name(code: str) -> str:
    """Display name given to a segment created without one."""
    return f"Segmento {code}"


@dataclass(frozen=True)
class SegmentInfo:
    """Immutable DTO for segment data."""

    id: UUID
    code: str
    name: str


class SegmentService(BaseService[Segment]):
    """Service for managing segments."""

    def _to_dto(self, segment: Segment) -> SegmentInfo:
        return SegmentInfo(id=segment.id, code=segment.code, name=segment.name)

    def _get_by_id(self, segment_id: UUID) -> Segment:
        segment = self.session.get(Segment, segment_id)
        if segment is None:
            raise SegmentNotFoundError(str(segment_id))
        return segment

    def _find_by_code(self, code: str) -> Segment | None:
        stmt = select(Segment).where(Segment.code == code)
        return self.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _validate_code(code: str) -> str:
        code = (code or "").strip()
        if not code:
            raise InvalidSegmentCodeError(code)
        return code

    def create(self, code: str, name: str | None, actor_id: UUID) -> SegmentInfo:
        """
        Create a new segment.

        Raises:
            InvalidSegmentCodeError: If code is blank.
            DuplicateSegmentCodeError: If another segment uses the code.
        """
        code = self._validate_code(code)
        if self._find_by_code(code) is not None:
            raise DuplicateSegmentCodeError(code)

        segment = Segment(
            code=code,
            name=(name or "").strip() or default_segment_name(code),
            created_by_id=actor_id,
        )
        self.session.add(segment)
        self.session.flush()

        logger.info(
            "segment_created",
            extra={"segment_id": str(segment.id), "segment_code": code},
        )
        return self._to_dto(segment)

    def find_or_create(
        self,
        code: str,
        actor_id: UUID,
        name: str | None = None,
    ) -> SegmentInfo:
        """
        Return the segment with this code, creating it when absent.

        New segments are named ``Segmento <code>`` unless a name is given.

        Raises:
            InvalidSegmentCodeError: If code is blank.
        """
        code = self._validate_code(code)
        existing = self._find_by_code(code)
        if existing is not None:
            return self._to_dto(existing)
        return self.create(code, name, actor_id)

    def find_all(self) -> list[SegmentInfo]:
        stmt = select(Segment).order_by(Segment.code)
        return [self._to_dto(s) for s in self.session.execute(stmt).scalars()]

    def find_by_id(self, segment_id: UUID) -> SegmentInfo:
        return self._to_dto(self._get_by_id(segment_id))

    def find_by_code(self, code: str) -> SegmentInfo | None:
        segment = self._find_by_code(code.strip())
        return self._to_dto(segment) if segment else None

    def update(
        self,
        segment_id: UUID,
        actor_id: UUID,
        code: str | None = None,
        name: str | None = None,
    ) -> SegmentInfo:
        """
        Update segment code and/or name.

        Raises:
            SegmentNotFoundError: If the segment doesn't exist.
            DuplicateSegmentCodeError: If the new code is already taken.
        """
        segment = self._get_by_id(segment_id)

        if code is not None:
            code = self._validate_code(code)
            if code != segment.code:
                if self._find_by_code(code) is not None:
                    raise DuplicateSegmentCodeError(code)
                segment.code = code
        if name is not None:
            segment.name = name.strip()

        segment.updated_by_id = actor_id
        self.session.flush()
        return self._to_dto(segment)

    def remove(self, segment_id: UUID) -> SegmentInfo:
        """
        Delete a segment that no movement references.

        Raises:
            SegmentNotFoundError: If the segment doesn't exist.
            SegmentReferencedError: If movements still reference it.
        """
        segment = self._get_by_id(segment_id)
        movement_count = self.session.execute(
            select(func.count(Movement.id)).where(Movement.segment_id == segment.id)
        ).scalar_one()
        if movement_count:
            raise SegmentReferencedError(str(segment_id), movement_count)

        removed = self._to_dto(segment)
        self.session.delete(segment)
        self.session.flush()

        logger.info(
            "segment_removed",
            extra={"segment_id": str(segment_id), "segment_code": removed.code},
        )
        return removed
