"""
Service layer for accounting accounts.

Resolves the account headers of a ContPAQ export into catalog rows and
offers the plain create / find / update / remove contract for everything
else.  Returns AccountInfo DTOs instead of ORM entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select

from ledger_kernel.exceptions import (
    AccountNotFoundError,
    AccountReferencedError,
    DuplicateAccountCodeError,
    InvalidAccountCodeError,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import Account, is_valid_account_code
from ledger_kernel.models.movement import Movement
from ledger_kernel.services.base import BaseService

logger = get_logger("services.account")


def default_account_name(code: str) -> str:
    """Display name given to an account created without one."""
    return f"Cuenta {code}"


@dataclass(frozen=True)
class AccountInfo:
    """Immutable DTO for account data."""

    id: UUID
    code: str
    name: str


class AccountService(BaseService[Account]):
    """
    Service for managing accounting accounts.

    Every write validates the DDD-DDD-DDD-DDD-DD code format first, so a
    malformed code never reaches the database.
    """

    def _to_dto(self, account: Account) -> AccountInfo:
        return AccountInfo(id=account.id, code=account.code, name=account.name)

    def _get_by_id(self, account_id: UUID) -> Account:
        account = self.session.get(Account, account_id)
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account

    def _find_by_code(self, code: str) -> Account | None:
        stmt = select(Account).where(Account.code == code)
        return self.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _validate_code(code: str) -> str:
        code = (code or "").strip()
        if not is_valid_account_code(code):
            raise InvalidAccountCodeError(code)
        return code

    def create(self, code: str, name: str, actor_id: UUID) -> AccountInfo:
        """
        Create a new account.

        Raises:
            InvalidAccountCodeError: If code is not DDD-DDD-DDD-DDD-DD.
            DuplicateAccountCodeError: If another account uses the code.
        """
        code = self._validate_code(code)
        if self._find_by_code(code) is not None:
            raise DuplicateAccountCodeError(code)

        account = Account(
            code=code,
            name=(name or "").strip() or default_account_name(code),
            created_by_id=actor_id,
        )
        self.session.add(account)
        self.session.flush()

        logger.info(
            "account_created",
            extra={"account_id": str(account.id), "account_code": code},
        )
        return self._to_dto(account)

    def find_or_create(
        self,
        code: str,
        name: str | None,
        actor_id: UUID,
    ) -> AccountInfo:
        """
        Return the account with this code, creating it when absent.

        An existing account keeps its stored name; the given name (or
        ``Cuenta <code>`` when blank) is only used on creation.

        Raises:
            InvalidAccountCodeError: If code is not DDD-DDD-DDD-DDD-DD.
        """
        code = self._validate_code(code)
        existing = self._find_by_code(code)
        if existing is not None:
            return self._to_dto(existing)
        return self.create(code, name or default_account_name(code), actor_id)

    def find_all(self) -> list[AccountInfo]:
        stmt = select(Account).order_by(Account.code)
        return [self._to_dto(a) for a in self.session.execute(stmt).scalars()]

    def find_by_id(self, account_id: UUID) -> AccountInfo:
        return self._to_dto(self._get_by_id(account_id))

    def find_by_code(self, code: str) -> AccountInfo | None:
        account = self._find_by_code(code.strip())
        return self._to_dto(account) if account else None

    def find_by_code_pattern(self, pattern: str) -> list[AccountInfo]:
        """Accounts whose code contains ``pattern``, ordered by code."""
        stmt = (
            select(Account)
            .where(Account.code.contains(pattern, autoescape=True))
            .order_by(Account.code)
        )
        return [self._to_dto(a) for a in self.session.execute(stmt).scalars()]

    def update(
        self,
        account_id: UUID,
        actor_id: UUID,
        code: str | None = None,
        name: str | None = None,
    ) -> AccountInfo:
        """
        Update account code and/or name.

        Raises:
            AccountNotFoundError: If the account doesn't exist.
            InvalidAccountCodeError: If the new code is malformed.
            DuplicateAccountCodeError: If the new code is already taken.
        """
        account = self._get_by_id(account_id)

        if code is not None:
            code = self._validate_code(code)
            if code != account.code:
                if self._find_by_code(code) is not None:
                    raise DuplicateAccountCodeError(code)
                account.code = code
        if name is not None:
            account.name = name.strip()

        account.updated_by_id = actor_id
        self.session.flush()
        return self._to_dto(account)

    def remove(self, account_id: UUID) -> AccountInfo:
        """
        Delete an account that no movement references.

        Raises:
            AccountNotFoundError: If the account doesn't exist.
            AccountReferencedError: If movements still reference it.
        """
        account = self._get_by_id(account_id)
        movement_count = self.session.execute(
            select(func.count(Movement.id)).where(Movement.account_id == account.id)
        ).scalar_one()
        if movement_count:
            raise AccountReferencedError(str(account_id), movement_count)

        removed = self._to_dto(account)
        self.session.delete(account)
        self.session.flush()

        logger.info(
            "account_removed",
            extra={"account_id": str(account_id), "account_code": removed.code},
        )
        return removed
