"""
Typed exception hierarchy for the ledger backend.

Every error has a typed class (catch by type, not by message), a ``code``
class attribute (machine-readable, API-safe) and structured attributes
carrying the offending values.

    LedgerError (base)
    |
    +-- AccountError
    |   +-- InvalidAccountCodeError
    |   +-- AccountNotFoundError
    |   +-- DuplicateAccountCodeError
    |   +-- AccountReferencedError
    |
    +-- SegmentError
    |   +-- InvalidSegmentCodeError
    |   +-- SegmentNotFoundError
    |   +-- DuplicateSegmentCodeError
    |   +-- SegmentReferencedError
    |
    +-- MovementError
    |   +-- InvalidMovementError
    |   +-- MovementNotFoundError
    |
    +-- CompanyError
    |   +-- InvalidCompanyNameError
    |
    +-- ConceptError
    |   +-- InvalidConceptNameError
    |   +-- ConceptNotFoundError
    |
    +-- IngestionError
        +-- SourceFileNotFoundError
        +-- UnsupportedFileTypeError
        +-- MalformedDateError
        +-- InvalidSequenceNumberError
        +-- MalformedWorkbookError

Category   | Code                      | When Raised
-----------|---------------------------|------------------------------------------
Account    | INVALID_ACCOUNT_CODE      | Code is not DDD-DDD-DDD-DDD-DD
           | ACCOUNT_NOT_FOUND         | Account ID doesn't exist
           | DUPLICATE_ACCOUNT_CODE    | Another account already uses the code
           | ACCOUNT_REFERENCED        | Delete blocked, movements reference it
-----------|---------------------------|------------------------------------------
Segment    | INVALID_SEGMENT_CODE      | Segment code is blank
           | SEGMENT_NOT_FOUND         | Segment ID doesn't exist
           | DUPLICATE_SEGMENT_CODE    | Another segment already uses the code
           | SEGMENT_REFERENCED        | Delete blocked, movements reference it
-----------|---------------------------|------------------------------------------
Movement   | INVALID_MOVEMENT          | Kind, number or amount rejected
           | MOVEMENT_NOT_FOUND        | Movement ID doesn't exist
-----------|---------------------------|------------------------------------------
Company    | INVALID_COMPANY_NAME      | Company name is blank
-----------|---------------------------|------------------------------------------
Concept    | INVALID_CONCEPT_NAME      | Concept name is blank or over 255 chars
           | CONCEPT_NOT_FOUND         | Concept ID doesn't exist
-----------|---------------------------|------------------------------------------
Ingestion  | SOURCE_FILE_NOT_FOUND     | Workbook path does not exist
           | UNSUPPORTED_FILE_TYPE     | Upload is not an .xlsx/.xlsm workbook
           | MALFORMED_DATE            | Unknown month or impossible date
           | INVALID_SEQUENCE_NUMBER   | Movement number is not a positive int
           | MALFORMED_WORKBOOK        | File cannot be read as an xlsx workbook
"""


class LedgerError(Exception):
    """
    Base exception for all ledger errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_ERROR"


# Account-related exceptions


class AccountError(LedgerError):
    """Base exception for accounting-account errors."""

    code: str = "ACCOUNT_ERROR"


class InvalidAccountCodeError(AccountError):
    """Account code does not follow the DDD-DDD-DDD-DDD-DD format."""

    code: str = "INVALID_ACCOUNT_CODE"

    def __init__(self, account_code: str):
        self.account_code = account_code
        super().__init__(
            f"Invalid account code {account_code!r}: expected DDD-DDD-DDD-DDD-DD"
        )


class AccountNotFoundError(AccountError):
    """Account with given ID was not found."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class DuplicateAccountCodeError(AccountError):
    """Another account already uses this code."""

    code: str = "DUPLICATE_ACCOUNT_CODE"

    def __init__(self, account_code: str):
        self.account_code = account_code
        super().__init__(f"Account code already exists: {account_code}")


class AccountReferencedError(AccountError):
    """Account cannot be deleted while movements reference it."""

    code: str = "ACCOUNT_REFERENCED"

    def __init__(self, account_id: str, movement_count: int):
        self.account_id = account_id
        self.movement_count = movement_count
        super().__init__(
            f"Account {account_id} is referenced by {movement_count} movement(s)"
        )


# Segment-related exceptions


class SegmentError(LedgerError):
    """Base exception for segment errors."""

    code: str = "SEGMENT_ERROR"


class InvalidSegmentCodeError(SegmentError):
    """Segment code is blank."""

    code: str = "INVALID_SEGMENT_CODE"

    def __init__(self, segment_code: str):
        self.segment_code = segment_code
        super().__init__(f"Invalid segment code {segment_code!r}")


class SegmentNotFoundError(SegmentError):
    """Segment with given ID was not found."""

    code: str = "SEGMENT_NOT_FOUND"

    def __init__(self, segment_id: str):
        self.segment_id = segment_id
        super().__init__(f"Segment not found: {segment_id}")


class DuplicateSegmentCodeError(SegmentError):
    """Another segment already uses this code."""

    code: str = "DUPLICATE_SEGMENT_CODE"

    def __init__(self, segment_code: str):
        self.segment_code = segment_code
        super().__init__(f"Segment code already exists: {segment_code}")


class SegmentReferencedError(SegmentError):
    """Segment cannot be deleted while movements reference it."""

    code: str = "SEGMENT_REFERENCED"

    def __init__(self, segment_id: str, movement_count: int):
        self.segment_id = segment_id
        self.movement_count = movement_count
        super().__init__(
            f"Segment {segment_id} is referenced by {movement_count} movement(s)"
        )


# Movement-related exceptions


class MovementError(LedgerError):
    """Base exception for movement errors."""

    code: str = "MOVEMENT_ERROR"


class InvalidMovementError(MovementError):
    """Movement field rejected by the movement store."""

    code: str = "INVALID_MOVEMENT"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid movement {field}={value!r}: {reason}")


class MovementNotFoundError(MovementError):
    """Movement with given ID was not found."""

    code: str = "MOVEMENT_NOT_FOUND"

    def __init__(self, movement_id: str):
        self.movement_id = movement_id
        super().__init__(f"Movement not found: {movement_id}")


# Company-related exceptions


class CompanyError(LedgerError):
    """Base exception for company errors."""

    code: str = "COMPANY_ERROR"


class InvalidCompanyNameError(CompanyError):
    """Company name is blank."""

    code: str = "INVALID_COMPANY_NAME"

    def __init__(self, company_name: str):
        self.company_name = company_name
        super().__init__(f"Invalid company name {company_name!r}")


# Concept-related exceptions


class ConceptError(LedgerError):
    """Base exception for concept catalog errors."""

    code: str = "CONCEPT_ERROR"


class InvalidConceptNameError(ConceptError):
    """Concept name is blank or longer than the column allows."""

    code: str = "INVALID_CONCEPT_NAME"

    def __init__(self, concept_name: str, reason: str):
        self.concept_name = concept_name
        self.reason = reason
        super().__init__(f"Invalid concept name {concept_name!r}: {reason}")


class ConceptNotFoundError(ConceptError):
    """Concept with given ID was not found."""

    code: str = "CONCEPT_NOT_FOUND"

    def __init__(self, concept_id: str):
        self.concept_id = concept_id
        super().__init__(f"Concept not found: {concept_id}")


# Ingestion-related exceptions


class IngestionError(LedgerError):
    """Base exception for workbook ingestion errors."""

    code: str = "INGESTION_ERROR"


class SourceFileNotFoundError(IngestionError):
    """Workbook path does not exist."""

    code: str = "SOURCE_FILE_NOT_FOUND"

    def __init__(self, source_path: str):
        self.source_path = source_path
        super().__init__(f"Source file not found: {source_path}")


class UnsupportedFileTypeError(IngestionError):
    """Uploaded file is not a supported workbook type."""

    code: str = "UNSUPPORTED_FILE_TYPE"

    def __init__(self, source_path: str, allowed_suffixes: tuple[str, ...]):
        self.source_path = source_path
        self.allowed_suffixes = allowed_suffixes
        super().__init__(
            f"Unsupported file type for {source_path}: "
            f"expected one of {', '.join(allowed_suffixes)}"
        )


class MalformedDateError(IngestionError):
    """Movement date cannot be normalized."""

    code: str = "MALFORMED_DATE"

    def __init__(self, raw_value: str, reason: str):
        self.raw_value = raw_value
        self.reason = reason
        super().__init__(f"Malformed date {raw_value!r}: {reason}")


class InvalidSequenceNumberError(IngestionError):
    """Movement number cell is not a positive integer."""

    code: str = "INVALID_SEQUENCE_NUMBER"

    def __init__(self, raw_value: object):
        self.raw_value = raw_value
        super().__init__(f"Invalid movement number {raw_value!r}")


class MalformedWorkbookError(IngestionError):
    """File exists but openpyxl cannot read it as a workbook."""

    code: str = "MALFORMED_WORKBOOK"

    def __init__(self, source_path: str, reason: str):
        self.source_path = source_path
        self.reason = reason
        super().__init__(f"Cannot read workbook {source_path}: {reason}")
