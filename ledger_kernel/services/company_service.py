"""Service layer for companies (the legal name on each export's title row)."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select

from ledger_kernel.exceptions import InvalidCompanyNameError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.company import Company
from ledger_kernel.services.base import BaseService

logger = get_logger("services.company")


@dataclass(frozen=True)
class CompanyInfo:
    """Immutable DTO for company data."""

    id: UUID
    name: str


class CompanyService(BaseService[Company]):
    """Service for resolving companies by name."""

    def _to_dto(self, company: Company) -> CompanyInfo:
        return CompanyInfo(id=company.id, name=company.name)

    def find_by_name(self, name: str) -> CompanyInfo | None:
        stmt = select(Company).where(Company.name == name.strip())
        company = self.session.execute(stmt).scalar_one_or_none()
        return self._to_dto(company) if company else None

    def find_or_create_by_name(self, name: str, actor_id: UUID) -> CompanyInfo:
        """
        Return the company with this name, creating it when absent.

        Raises:
            InvalidCompanyNameError: If name is blank.
        """
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidCompanyNameError(name or "")

        existing = self.find_by_name(cleaned)
        if existing is not None:
            return existing

        company = Company(name=cleaned, created_by_id=actor_id)
        self.session.add(company)
        self.session.flush()

        logger.info(
            "company_created",
            extra={"company_id": str(company.id), "company_name": cleaned},
        )
        return self._to_dto(company)
