"""Ledger domain service (read side of the append-only ledger)."""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ledgerkit.database.base import Database
from ledgerkit.domain import errors
from ledgerkit.domain.entities import AccountTotals, LedgerRow


class LedgerService:
    """Service for querying posted ledger rows.

    Two balance representations exist and are kept apart: the raw ledger
    balance returned by ``account_balance`` (debit minus credit, regardless of
    account type) and ``Account.balance``, the cached normal-balance signed
    value maintained by posting.
    """

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_account_ledger(
        self,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerRow]:
        """List an account's posted ledger rows within a date range.

        Raises:
            NotFoundError: If the account does not exist
        """
        if self.db.get_account(account_id) is None:
            raise errors.NotFoundError(errors.account_not_found(account_id))
        return self.db.list_ledger_rows(
            account_id=account_id, start_date=start_date, end_date=end_date
        )

    def list_company_ledger(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[LedgerRow]:
        """List a company's posted ledger rows within a date range."""
        return self.db.list_ledger_rows(
            company_id=company_id, start_date=start_date, end_date=end_date
        )

    def count_rows(self, company_id: int) -> int:
        """Count every ledger row of a company, whatever its journal's status."""
        return self.db.count_ledger_rows(company_id)

    def account_balance(self, account_id: int, as_of: date) -> Decimal:
        """Raw ledger balance of an account as of a date.

        Returns:
            Sum of debit minus credit over posted rows dated on or before ``as_of``
        """
        return self.db.get_account_ledger_balance(account_id, as_of)

    def account_totals(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_ids: Optional[Sequence[int]] = None,
    ) -> dict[int, AccountTotals]:
        """Raw debit/credit sums of posted rows per account.

        Accounts without rows in the range are absent from the result.
        """
        return self.db.sum_ledger_by_account(
            company_id, start_date=start_date, end_date=end_date, account_ids=account_ids
        )
