"""Account domain service (chart of accounts)."""

from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain import errors
from ledgerkit.domain.chart import DEFAULT_CHART
from ledgerkit.domain.entities import (
    Account as AccountEntity,
    AccountSpec,
    AccountType,
    AccountUpdate,
)
from ledgerkit.logging_config import get_logger

logger = get_logger(__name__)


class AccountService:
    """Service for managing a company's chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, spec: AccountSpec) -> int:
        """Create a new account.

        Args:
            spec: Account fields

        Returns:
            Account ID

        Raises:
            ConflictError: If the code already exists for the company
            ValidationError: If the account is a header with a balance, or its
                category does not belong to its type
            NotFoundError: If the parent account does not exist
        """
        if self.db.get_account_by_code(spec.company_id, spec.code) is not None:
            raise errors.ConflictError(errors.duplicate_account_code(spec.company_id, spec.code))

        violations = []
        if spec.is_header and spec.balance != 0:
            violations.append("header account cannot have balance")
        if spec.category.account_type != spec.account_type:
            violations.append(
                f"category '{spec.category.value}' does not belong to "
                f"account type '{spec.account_type.value}'"
            )
        if spec.parent_id is not None:
            parent = self.db.get_account(spec.parent_id)
            if parent is None:
                raise errors.NotFoundError(errors.account_not_found(spec.parent_id))
            if parent.company_id != spec.company_id:
                violations.append("parent account belongs to another company")
        if violations:
            raise errors.ValidationError(violations)

        return self.db.create_account(spec)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise errors.NotFoundError(errors.account_not_found(account_id))
        return account

    def get_account_by_code(self, company_id: int, code: str) -> Optional[AccountEntity]:
        """Get account by company and code."""
        return self.db.get_account_by_code(company_id, code)

    def list_accounts(self, company_id: int) -> list[AccountEntity]:
        """List all of a company's accounts, including headers and inactive ones."""
        return self.db.list_accounts(company_id)

    def list_accounts_by_type(self, company_id: int, account_type: AccountType) -> list[AccountEntity]:
        return self.db.list_accounts(company_id, account_type=account_type)

    def list_active_accounts(self, company_id: int) -> list[AccountEntity]:
        """List accounts that can be posted to (active, non-header)."""
        return self.db.list_accounts(company_id, postable_only=True)

    def update_account(self, account_id: int, update: AccountUpdate) -> AccountEntity:
        """Update an account's name, description or active flag.

        Code, type, category and parent cannot change after creation.

        Returns:
            The updated account

        Raises:
            NotFoundError: If the account does not exist
        """
        self.require_account(account_id)
        if not update.is_empty:
            self.db.update_account(account_id, update)
        return self.require_account(account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account that nothing references.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If journal entries, ledger rows or child accounts
                reference the account
        """
        self.require_account(account_id)
        entry_count, ledger_count, child_count = self.db.get_account_dependency_counts(account_id)
        if entry_count or ledger_count or child_count:
            raise errors.DependencyError(
                errors.account_delete_blocked(account_id, entry_count, ledger_count, child_count)
            )
        self.db.delete_account(account_id)

    def seed_default_chart(self, company_id: int) -> list[int]:
        """Create the default chart of accounts for a new company.

        Returns:
            IDs of the created accounts, in template order

        Raises:
            ConflictError: If the company already has accounts
        """
        if self.db.list_accounts(company_id):
            raise errors.ConflictError(errors.chart_already_seeded(company_id))

        ids_by_code: dict[str, int] = {}
        with self.db.transaction():
            for template in DEFAULT_CHART:
                parent_id = ids_by_code[template.parent_code] if template.parent_code else None
                ids_by_code[template.code] = self.db.create_account(
                    AccountSpec(
                        company_id=company_id,
                        code=template.code,
                        name=template.name,
                        account_type=template.account_type,
                        category=template.category,
                        parent_id=parent_id,
                        level=template.level,
                        is_header=template.is_header,
                    )
                )

        logger.info(
            "Seeded default chart of accounts",
            extra={"company_id": company_id, "account_count": len(ids_by_code)},
        )
        return list(ids_by_code.values())
