"""Tests for dashboard service."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain.entities import AccountCategory, CategoryAmount, MonthlyAmount

COMPANY_ID = 1
JANUARY = (date(2024, 1, 1), date(2024, 1, 31))
END_OF_JANUARY = date(2024, 1, 31)


@pytest.fixture
def small_business(make_journal):
    """Capital, a payable, one sale, one expense and a stock purchase in January."""
    make_journal([("1-1100", "1000.00", "0"), ("3-1000", "0", "1000.00")], post=True)
    make_journal([("1-1200", "500.00", "0"), ("2-1100", "0", "500.00")], post=True)
    make_journal([("1-1100", "300.00", "0"), ("4-1000", "0", "300.00")], post=True)
    make_journal([("5-1100", "100.00", "0"), ("1-1100", "0", "100.00")], post=True)
    make_journal([("1-1400", "200.00", "0"), ("1-1200", "0", "200.00")], post=True)


class TestSummary:
    def test_headline_figures(self, small_business, dashboard_service):
        summary = dashboard_service.summary(COMPANY_ID, END_OF_JANUARY)

        assert summary.total_revenue == Decimal("300.00")
        assert summary.total_expense == Decimal("100.00")
        assert summary.net_income == Decimal("200.00")
        assert summary.total_assets == Decimal("1700.00")
        assert summary.total_liabilities == Decimal("500.00")
        assert summary.total_equity == Decimal("1000.00")
        assert summary.cash_balance == Decimal("1200.00")
        assert summary.bank_balance == Decimal("300.00")

    def test_income_is_year_to_date(self, make_journal, dashboard_service, seeded_chart):
        """Test last year's sale counts toward assets but not this year's revenue."""
        make_journal(
            [("1-1100", "400.00", "0"), ("4-1000", "0", "400.00")],
            transaction_date=date(2023, 12, 20),
            post=True,
        )
        make_journal([("1-1100", "50.00", "0"), ("4-1000", "0", "50.00")], post=True)

        summary = dashboard_service.summary(COMPANY_ID, END_OF_JANUARY)

        assert summary.total_revenue == Decimal("50.00")
        assert summary.cash_balance == Decimal("450.00")
        assert summary.total_assets == Decimal("450.00")

    def test_drafts_are_ignored(self, make_journal, dashboard_service):
        make_journal([("1-1100", "75.00", "0"), ("4-1000", "0", "75.00")])

        summary = dashboard_service.summary(COMPANY_ID, END_OF_JANUARY)

        assert summary.total_revenue == Decimal("0")
        assert summary.cash_balance == Decimal("0")


class TestMonthly:
    def test_months_with_rows_only(self, make_journal, dashboard_service):
        make_journal([("1-1100", "100.00", "0"), ("4-1000", "0", "100.00")], post=True)
        make_journal(
            [("1-1100", "40.00", "0"), ("4-2000", "0", "40.00")],
            transaction_date=date(2024, 1, 28),
            post=True,
        )
        make_journal(
            [("1-1100", "60.00", "0"), ("4-1000", "0", "60.00")],
            transaction_date=date(2024, 3, 2),
            post=True,
        )
        make_journal(
            [("5-1200", "25.00", "0"), ("1-1100", "0", "25.00")],
            transaction_date=date(2024, 3, 5),
            post=True,
        )

        assert dashboard_service.monthly_revenue(COMPANY_ID, 2024) == (
            MonthlyAmount("2024-01", Decimal("140.00")),
            MonthlyAmount("2024-03", Decimal("60.00")),
        )
        assert dashboard_service.monthly_expense(COMPANY_ID, 2024) == (
            MonthlyAmount("2024-03", Decimal("25.00")),
        )

    def test_other_years_are_excluded(self, make_journal, dashboard_service):
        make_journal([("1-1100", "100.00", "0"), ("4-1000", "0", "100.00")], post=True)

        assert dashboard_service.monthly_revenue(COMPANY_ID, 2023) == ()


class TestByCategory:
    def test_largest_category_first(self, make_journal, dashboard_service):
        make_journal([("1-1100", "50.00", "0"), ("4-2000", "0", "50.00")], post=True)
        make_journal([("1-1100", "300.00", "0"), ("4-1000", "0", "300.00")], post=True)
        make_journal([("5-2000", "30.00", "0"), ("1-1100", "0", "30.00")], post=True)
        make_journal([("5-1100", "10.00", "0"), ("1-1100", "0", "10.00")], post=True)
        make_journal([("5-1200", "15.00", "0"), ("1-1100", "0", "15.00")], post=True)

        assert dashboard_service.revenue_by_category(COMPANY_ID, *JANUARY) == (
            CategoryAmount(AccountCategory.OPERATING_REVENUE, Decimal("300.00")),
            CategoryAmount(AccountCategory.OTHER_REVENUE, Decimal("50.00")),
        )
        assert dashboard_service.expense_by_category(COMPANY_ID, *JANUARY) == (
            CategoryAmount(AccountCategory.OTHER_EXPENSE, Decimal("30.00")),
            CategoryAmount(AccountCategory.OPERATING_EXPENSE, Decimal("25.00")),
        )

    def test_period_outside_rows_is_empty(self, small_business, dashboard_service):
        assert dashboard_service.revenue_by_category(
            COMPANY_ID, date(2024, 2, 1), date(2024, 2, 29)
        ) == ()


class TestFinancialRatios:
    def test_ratios(self, small_business, dashboard_service):
        ratios = dashboard_service.financial_ratios(COMPANY_ID, END_OF_JANUARY, *JANUARY)

        assert ratios.current_ratio == Decimal("3.40")
        assert ratios.quick_ratio == Decimal("3.00")
        assert ratios.debt_to_equity_ratio == Decimal("0.50")
        assert ratios.debt_to_asset_ratio == Decimal("0.29")
        assert ratios.profit_margin == Decimal("66.67")
        assert ratios.return_on_assets == Decimal("11.76")
        assert ratios.return_on_equity == Decimal("20.00")

    def test_ratios_without_data_are_zero(self, seeded_chart, dashboard_service):
        ratios = dashboard_service.financial_ratios(COMPANY_ID, END_OF_JANUARY, *JANUARY)

        assert ratios.current_ratio == Decimal("0")
        assert ratios.quick_ratio == Decimal("0")
        assert ratios.debt_to_equity_ratio == Decimal("0")
        assert ratios.debt_to_asset_ratio == Decimal("0")
        assert ratios.profit_margin == Decimal("0")
        assert ratios.return_on_assets == Decimal("0")
        assert ratios.return_on_equity == Decimal("0")
