"""Tests for ledger service."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain import errors

COMPANY_ID = 1
CASH_SALE = [("1-1100", "100.00", "0"), ("4-1000", "0", "100.00")]
RENT = [("5-1200", "30.00", "0"), ("1-1100", "0", "30.00")]


def test_account_ledger_ordered_by_transaction_date(make_journal, journal_service, ledger_service, seeded_chart):
    """Test rows follow journal dates, not posting order."""
    later = make_journal(RENT, transaction_date=date(2024, 2, 1))
    earlier = make_journal(CASH_SALE, transaction_date=date(2024, 1, 15))
    journal_service.post_journal(later.id, actor_id=1)
    journal_service.post_journal(earlier.id, actor_id=1)

    rows = ledger_service.list_account_ledger(seeded_chart["1-1100"].id)

    assert [row.journal_id for row in rows] == [earlier.id, later.id]


def test_account_ledger_date_range(make_journal, ledger_service, seeded_chart):
    make_journal(CASH_SALE, transaction_date=date(2024, 1, 15), post=True)
    make_journal(RENT, transaction_date=date(2024, 2, 1), post=True)

    rows = ledger_service.list_account_ledger(
        seeded_chart["1-1100"].id, start_date=date(2024, 2, 1), end_date=date(2024, 2, 29)
    )

    assert len(rows) == 1
    assert rows[0].credit == Decimal("30.00")


def test_account_ledger_unknown_account(ledger_service):
    with pytest.raises(errors.NotFoundError):
        ledger_service.list_account_ledger(999)


def test_drafts_are_not_in_the_ledger(make_journal, ledger_service):
    make_journal(CASH_SALE)
    assert ledger_service.list_company_ledger(COMPANY_ID) == []


def test_company_ledger_is_scoped_to_company(make_journal, ledger_service):
    make_journal(CASH_SALE, post=True)
    assert len(ledger_service.list_company_ledger(COMPANY_ID)) == 2
    assert ledger_service.list_company_ledger(2) == []


def test_account_balance_is_raw(make_journal, ledger_service, seeded_chart):
    """Test the ledger balance is debit minus credit whatever the type."""
    make_journal(CASH_SALE, post=True)

    assert ledger_service.account_balance(seeded_chart["1-1100"].id, date(2024, 12, 31)) == Decimal("100.00")
    assert ledger_service.account_balance(seeded_chart["4-1000"].id, date(2024, 12, 31)) == Decimal("-100.00")


def test_account_balance_as_of(make_journal, ledger_service, seeded_chart):
    make_journal(CASH_SALE, transaction_date=date(2024, 1, 15), post=True)
    make_journal(RENT, transaction_date=date(2024, 2, 1), post=True)
    cash_id = seeded_chart["1-1100"].id

    assert ledger_service.account_balance(cash_id, date(2024, 1, 14)) == 0
    assert ledger_service.account_balance(cash_id, date(2024, 1, 31)) == Decimal("100.00")
    assert ledger_service.account_balance(cash_id, date(2024, 2, 1)) == Decimal("70.00")


def test_voided_rows_are_excluded_but_kept(make_journal, journal_service, ledger_service, seeded_chart):
    journal = make_journal(CASH_SALE, post=True)
    journal_service.void_journal(journal.id)

    assert ledger_service.account_balance(seeded_chart["1-1100"].id, date(2024, 12, 31)) == 0
    assert ledger_service.count_rows(COMPANY_ID) == 2


def test_account_totals(make_journal, ledger_service, seeded_chart):
    make_journal(CASH_SALE, transaction_date=date(2024, 1, 15), post=True)
    make_journal(RENT, transaction_date=date(2024, 2, 1), post=True)

    totals = ledger_service.account_totals(COMPANY_ID, end_date=date(2024, 12, 31))

    cash = totals[seeded_chart["1-1100"].id]
    assert cash.debit == Decimal("100.00")
    assert cash.credit == Decimal("30.00")
    assert seeded_chart["1-1200"].id not in totals

    january = ledger_service.account_totals(
        COMPANY_ID, start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)
    )
    assert seeded_chart["5-1200"].id not in january
