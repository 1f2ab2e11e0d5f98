"""Stores for the ledger kernel (write side)."""

from ledger_kernel.services.account_service import (
    AccountInfo,
    AccountService,
    default_account_name,
)
from ledger_kernel.services.company_service import CompanyInfo, CompanyService
from ledger_kernel.services.concept_service import ConceptInfo, ConceptService
from ledger_kernel.services.movement_service import (
    MovementDraft,
    MovementInfo,
    MovementService,
)
from ledger_kernel.services.segment_service import (
    SegmentInfo,
    SegmentService,
    default_segment_name,
)

__all__ = [
    "AccountInfo",
    "AccountService",
    "CompanyInfo",
    "CompanyService",
    "ConceptInfo",
    "ConceptService",
    "MovementDraft",
    "MovementInfo",
    "MovementService",
    "SegmentInfo",
    "SegmentService",
    "default_account_name",
    "default_segment_name",
]
