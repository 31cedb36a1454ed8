"""Trial balance domain service."""

from datetime import date

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import (
    AccountTotals,
    TrialBalanceLine,
    TrialBalanceReport,
    ZERO,
)
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.domain.normal_balance import is_debit_normal


class TrialBalanceService:
    """Service for building trial balance reports."""

    def __init__(self, db: Database):
        """Initialize trial balance service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def build(self, company_id: int, as_of: date) -> TrialBalanceReport:
        """Build a trial balance as of a cutoff date.

        Every active, non-header account gets a line, even without activity.
        Debit-normal accounts report their net balance in the debit balance
        column, credit-normal accounts in the credit balance column.

        Args:
            company_id: Company ID
            as_of: Cutoff date (inclusive)

        Returns:
            TrialBalanceReport with per-account lines and totals
        """
        accounts = self.db.list_accounts(company_id, postable_only=True)
        totals = self.ledger.account_totals(company_id, end_date=as_of)

        lines = []
        for account in accounts:
            account_totals = totals.get(account.id, AccountTotals())
            if is_debit_normal(account.account_type):
                debit_balance = account_totals.net_debit
                credit_balance = ZERO
            else:
                debit_balance = ZERO
                credit_balance = account_totals.net_credit
            lines.append(
                TrialBalanceLine(
                    account_id=account.id,
                    account_code=account.code,
                    account_name=account.name,
                    account_type=account.account_type,
                    debit=account_totals.debit,
                    credit=account_totals.credit,
                    debit_balance=debit_balance,
                    credit_balance=credit_balance,
                )
            )

        total_debit_balance = sum((line.debit_balance for line in lines), ZERO)
        total_credit_balance = sum((line.credit_balance for line in lines), ZERO)
        return TrialBalanceReport(
            company_id=company_id,
            as_of_date=as_of,
            lines=tuple(lines),
            total_debit=sum((line.debit for line in lines), ZERO),
            total_credit=sum((line.credit for line in lines), ZERO),
            total_debit_balance=total_debit_balance,
            total_credit_balance=total_credit_balance,
            is_balanced=total_debit_balance == total_credit_balance,
        )
