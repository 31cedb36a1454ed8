"""Financial statement domain service.

All statements are derived from the same primitive as the trial balance:
raw per-account debit/credit sums of posted ledger rows in a date range.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.chart import CASH_ACCOUNT_CODES
from ledgerkit.domain.entities import (
    Account,
    AccountCategory,
    AccountTotals,
    AccountType,
    BalanceSheet,
    CashFlowLine,
    CashFlowStatement,
    IncomeStatement,
    StatementLine,
    ZERO,
)
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.domain.normal_balance import signed_change

NET_CASH_FROM_OPERATIONS = "Net cash from operations"


def _period_label(start_date: date, end_date: date) -> str:
    return f"{start_date:%Y-%m} to {end_date:%Y-%m}"


def _total(lines: Iterable[StatementLine]) -> Decimal:
    return sum((line.amount for line in lines), ZERO)


class FinancialStatementService:
    """Service for income statement, balance sheet and cash flow reports."""

    def __init__(self, db: Database):
        """Initialize financial statement service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def _lines(
        self,
        accounts: Iterable[Account],
        totals: dict[int, AccountTotals],
        omit_zero: bool = False,
    ) -> tuple[StatementLine, ...]:
        """Build statement lines with amounts signed by each account's normal balance."""
        lines = []
        for account in accounts:
            account_totals = totals.get(account.id, AccountTotals())
            amount = signed_change(account.account_type, account_totals.debit, account_totals.credit)
            if omit_zero and amount == 0:
                continue
            lines.append(
                StatementLine(account_code=account.code, account_name=account.name, amount=amount)
            )
        return tuple(lines)

    def _postable(self, company_id: int, account_type: AccountType) -> list[Account]:
        return self.db.list_accounts(company_id, account_type=account_type, postable_only=True)

    def income_statement(self, company_id: int, start_date: date, end_date: date) -> IncomeStatement:
        """Build an income statement for posted journals dated within [start, end].

        Revenue lines are credit minus debit, expense lines debit minus
        credit; accounts with a zero amount are omitted.
        """
        totals = self.ledger.account_totals(company_id, start_date=start_date, end_date=end_date)
        revenues = self._lines(self._postable(company_id, AccountType.REVENUE), totals, omit_zero=True)
        expenses = self._lines(self._postable(company_id, AccountType.EXPENSE), totals, omit_zero=True)

        total_revenue = _total(revenues)
        total_expense = _total(expenses)
        net_income = total_revenue - total_expense
        return IncomeStatement(
            company_id=company_id,
            period=_period_label(start_date, end_date),
            start_date=start_date,
            end_date=end_date,
            revenues=revenues,
            total_revenue=total_revenue,
            expenses=expenses,
            total_expense=total_expense,
            net_income=net_income,
            is_profit=net_income > 0,
        )

    def balance_sheet(self, company_id: int, as_of: date) -> BalanceSheet:
        """Build a balance sheet from inception through ``as_of``.

        Current period income is not closed into equity, so the sheet only
        balances once revenue and expense have been moved to an equity account.
        """
        totals = self.ledger.account_totals(company_id, end_date=as_of)
        assets = self._postable(company_id, AccountType.ASSET)
        liabilities = self._postable(company_id, AccountType.LIABILITY)

        current_assets = self._lines(
            (a for a in assets if a.category == AccountCategory.CURRENT_ASSET), totals
        )
        fixed_assets = self._lines(
            (a for a in assets if a.category == AccountCategory.FIXED_ASSET), totals
        )
        current_liabilities = self._lines(
            (a for a in liabilities if a.category == AccountCategory.CURRENT_LIABILITY), totals
        )
        long_term_liabilities = self._lines(
            (a for a in liabilities if a.category == AccountCategory.LONG_TERM_LIABILITY), totals
        )
        equity = self._lines(self._postable(company_id, AccountType.EQUITY), totals)

        total_current_assets = _total(current_assets)
        total_fixed_assets = _total(fixed_assets)
        total_current_liabilities = _total(current_liabilities)
        total_long_term_liabilities = _total(long_term_liabilities)
        total_equity = _total(equity)

        total_assets = total_current_assets + total_fixed_assets
        total_liabilities = total_current_liabilities + total_long_term_liabilities
        total_liabilities_and_equity = total_liabilities + total_equity

        return BalanceSheet(
            company_id=company_id,
            as_of_date=as_of,
            current_assets=current_assets,
            total_current_assets=total_current_assets,
            fixed_assets=fixed_assets,
            total_fixed_assets=total_fixed_assets,
            total_assets=total_assets,
            current_liabilities=current_liabilities,
            total_current_liabilities=total_current_liabilities,
            long_term_liabilities=long_term_liabilities,
            total_long_term_liabilities=total_long_term_liabilities,
            total_liabilities=total_liabilities,
            equity=equity,
            total_equity=total_equity,
            total_liabilities_and_equity=total_liabilities_and_equity,
            is_balanced=total_assets == total_liabilities_and_equity,
        )

    def cash_flow(
        self, company_id: int, start_date: date, end_date: date
    ) -> Optional[CashFlowStatement]:
        """Build the simplified cash flow statement.

        The net movement of the cash and bank accounts over the period is
        reported as a single operating line. Investing and financing
        sections stay empty.

        Returns:
            CashFlowStatement, or None if the company has no active cash accounts
        """
        cash_accounts = [
            account
            for account in self.db.list_accounts(company_id, codes=CASH_ACCOUNT_CODES)
            if account.is_active
        ]
        if not cash_accounts:
            return None
        account_ids = [account.id for account in cash_accounts]

        before_start = self.ledger.account_totals(
            company_id, end_date=start_date - timedelta(days=1), account_ids=account_ids
        )
        through_end = self.ledger.account_totals(
            company_id, end_date=end_date, account_ids=account_ids
        )
        cash_at_beginning = sum((t.net_debit for t in before_start.values()), ZERO)
        cash_at_end = sum((t.net_debit for t in through_end.values()), ZERO)
        net_increase = cash_at_end - cash_at_beginning

        return CashFlowStatement(
            company_id=company_id,
            period=_period_label(start_date, end_date),
            start_date=start_date,
            end_date=end_date,
            operating_activities=(CashFlowLine(NET_CASH_FROM_OPERATIONS, net_increase),),
            net_cash_from_operating=net_increase,
            net_increase_in_cash=net_increase,
            cash_at_beginning=cash_at_beginning,
            cash_at_end=cash_at_end,
        )
