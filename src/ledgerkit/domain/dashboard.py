"""Dashboard analytics derived from posted ledger rows."""

from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import (
    Account,
    AccountCategory,
    AccountTotals,
    AccountType,
    CategoryAmount,
    DashboardSummary,
    FinancialRatios,
    MonthlyAmount,
    ZERO,
)
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.domain.normal_balance import signed_change

CASH_ACCOUNT_CODE = "1-1100"
BANK_ACCOUNT_CODE = "1-1200"
INVENTORY_ACCOUNT_CODE = "1-1400"

RATIO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")


def _ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator <= 0:
        return ZERO
    return (numerator / denominator).quantize(RATIO_PLACES, rounding=ROUND_HALF_UP)


def _percentage(numerator: Decimal, denominator: Decimal) -> Decimal:
    return _ratio(numerator * HUNDRED, denominator)


class DashboardService:
    """Service for headline figures, monthly trends and financial ratios.

    Amounts follow each account's normal balance: revenue, liabilities and
    equity are credit minus debit, assets and expenses debit minus credit.
    """

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def _accounts(self, company_id: int) -> dict[int, Account]:
        return {account.id: account for account in self.db.list_accounts(company_id)}

    def _total(
        self,
        accounts: dict[int, Account],
        totals: dict[int, AccountTotals],
        account_type: AccountType,
        category: Optional[AccountCategory] = None,
    ) -> Decimal:
        """Sum the signed amounts of one account type, optionally one category."""
        amount = ZERO
        for account_id, account_totals in totals.items():
            account = accounts[account_id]
            if account.account_type != account_type:
                continue
            if category is not None and account.category != category:
                continue
            amount += signed_change(account_type, account_totals.debit, account_totals.credit)
        return amount

    def _code_balance(
        self, accounts: dict[int, Account], totals: dict[int, AccountTotals], code: str
    ) -> Decimal:
        for account_id, account_totals in totals.items():
            if accounts[account_id].code == code:
                return account_totals.net_debit
        return ZERO

    def summary(self, company_id: int, as_of: date) -> DashboardSummary:
        """Year-to-date revenue and expense, cumulative balances through ``as_of``.

        The year runs from 1 January of ``as_of``'s year through ``as_of``.
        """
        accounts = self._accounts(company_id)
        year_to_date = self.ledger.account_totals(
            company_id, start_date=date(as_of.year, 1, 1), end_date=as_of
        )
        cumulative = self.ledger.account_totals(company_id, end_date=as_of)

        total_revenue = self._total(accounts, year_to_date, AccountType.REVENUE)
        total_expense = self._total(accounts, year_to_date, AccountType.EXPENSE)
        return DashboardSummary(
            company_id=company_id,
            as_of_date=as_of,
            total_revenue=total_revenue,
            total_expense=total_expense,
            net_income=total_revenue - total_expense,
            total_assets=self._total(accounts, cumulative, AccountType.ASSET),
            total_liabilities=self._total(accounts, cumulative, AccountType.LIABILITY),
            total_equity=self._total(accounts, cumulative, AccountType.EQUITY),
            cash_balance=self._code_balance(accounts, cumulative, CASH_ACCOUNT_CODE),
            bank_balance=self._code_balance(accounts, cumulative, BANK_ACCOUNT_CODE),
        )

    def _monthly(
        self, company_id: int, year: int, account_type: AccountType
    ) -> tuple[MonthlyAmount, ...]:
        accounts = self._accounts(company_id)
        rows = self.ledger.list_company_ledger(
            company_id, start_date=date(year, 1, 1), end_date=date(year, 12, 31)
        )
        months: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for row in rows:
            if accounts[row.account_id].account_type != account_type:
                continue
            months[f"{row.transaction_date:%Y-%m}"] += signed_change(
                account_type, row.debit, row.credit
            )
        return tuple(MonthlyAmount(month, months[month]) for month in sorted(months))

    def monthly_revenue(self, company_id: int, year: int) -> tuple[MonthlyAmount, ...]:
        """Revenue per month of ``year``; months without revenue rows are absent."""
        return self._monthly(company_id, year, AccountType.REVENUE)

    def monthly_expense(self, company_id: int, year: int) -> tuple[MonthlyAmount, ...]:
        """Expense per month of ``year``; months without expense rows are absent."""
        return self._monthly(company_id, year, AccountType.EXPENSE)

    def _by_category(
        self, company_id: int, start_date: date, end_date: date, account_type: AccountType
    ) -> tuple[CategoryAmount, ...]:
        accounts = self._accounts(company_id)
        totals = self.ledger.account_totals(company_id, start_date=start_date, end_date=end_date)
        categories: dict[AccountCategory, Decimal] = defaultdict(lambda: ZERO)
        for account_id, account_totals in totals.items():
            account = accounts[account_id]
            if account.account_type != account_type:
                continue
            categories[account.category] += signed_change(
                account_type, account_totals.debit, account_totals.credit
            )
        ordered = sorted(categories.items(), key=lambda item: (-item[1], item[0].value))
        return tuple(CategoryAmount(category, amount) for category, amount in ordered)

    def revenue_by_category(
        self, company_id: int, start_date: date, end_date: date
    ) -> tuple[CategoryAmount, ...]:
        """Revenue per account category in [start, end], largest first."""
        return self._by_category(company_id, start_date, end_date, AccountType.REVENUE)

    def expense_by_category(
        self, company_id: int, start_date: date, end_date: date
    ) -> tuple[CategoryAmount, ...]:
        """Expense per account category in [start, end], largest first."""
        return self._by_category(company_id, start_date, end_date, AccountType.EXPENSE)

    def financial_ratios(
        self, company_id: int, as_of: date, start_date: date, end_date: date
    ) -> FinancialRatios:
        """Compute ratios from balances through ``as_of`` and income in [start, end].

        Inventory for the quick ratio is the balance of account ``1-1400``.
        Ratios are rounded half up to two places.
        """
        accounts = self._accounts(company_id)
        cumulative = self.ledger.account_totals(company_id, end_date=as_of)
        period = self.ledger.account_totals(company_id, start_date=start_date, end_date=end_date)

        current_assets = self._total(
            accounts, cumulative, AccountType.ASSET, AccountCategory.CURRENT_ASSET
        )
        current_liabilities = self._total(
            accounts, cumulative, AccountType.LIABILITY, AccountCategory.CURRENT_LIABILITY
        )
        inventory = self._code_balance(accounts, cumulative, INVENTORY_ACCOUNT_CODE)
        total_assets = self._total(accounts, cumulative, AccountType.ASSET)
        total_liabilities = self._total(accounts, cumulative, AccountType.LIABILITY)
        total_equity = self._total(accounts, cumulative, AccountType.EQUITY)

        revenue = self._total(accounts, period, AccountType.REVENUE)
        net_income = revenue - self._total(accounts, period, AccountType.EXPENSE)

        return FinancialRatios(
            company_id=company_id,
            as_of_date=as_of,
            start_date=start_date,
            end_date=end_date,
            current_ratio=_ratio(current_assets, current_liabilities),
            quick_ratio=_ratio(current_assets - inventory, current_liabilities),
            debt_to_equity_ratio=_ratio(total_liabilities, total_equity),
            debt_to_asset_ratio=_ratio(total_liabilities, total_assets),
            profit_margin=_percentage(net_income, revenue),
            return_on_assets=_percentage(net_income, total_assets),
            return_on_equity=_percentage(net_income, total_equity),
        )
