"""Tests for journal number generation."""

from datetime import date
from decimal import Decimal

from ledgerkit.domain.entities import CashTransactionInput
from ledgerkit.domain.numbering import CashTransactionNumberGenerator, JournalNumberGenerator


def test_month_prefix(temp_db):
    generator = JournalNumberGenerator(temp_db)
    assert generator.month_prefix(date(2024, 3, 9)) == "JRN/202403/"


def test_first_number_of_month(temp_db):
    generator = JournalNumberGenerator(temp_db)
    assert generator.next_number(1, date(2024, 1, 15)) == "JRN/202401/0001"


def test_numbers_are_sequential(make_journal):
    """Test journals in the same month get consecutive numbers."""
    lines = [("1-1100", "10.00", "0"), ("4-1000", "0", "10.00")]
    first = make_journal(lines)
    second = make_journal(lines, transaction_date=date(2024, 1, 31))

    assert first.journal_number == "JRN/202401/0001"
    assert second.journal_number == "JRN/202401/0002"


def test_sequence_restarts_each_month(make_journal):
    lines = [("1-1100", "10.00", "0"), ("4-1000", "0", "10.00")]
    make_journal(lines, transaction_date=date(2024, 1, 15))
    february = make_journal(lines, transaction_date=date(2024, 2, 1))
    assert february.journal_number == "JRN/202402/0001"


def test_deleted_draft_does_not_cause_collision(make_journal, journal_service):
    """Test the next number follows the highest one in use, not the count."""
    lines = [("1-1100", "10.00", "0"), ("4-1000", "0", "10.00")]
    first = make_journal(lines)
    make_journal(lines)
    journal_service.delete_journal(first.id)

    third = make_journal(lines)

    assert third.journal_number == "JRN/202401/0003"


def test_sequence_is_per_company(temp_db, make_journal):
    make_journal([("1-1100", "10.00", "0"), ("4-1000", "0", "10.00")])
    generator = JournalNumberGenerator(temp_db)
    assert generator.next_number(2, date(2024, 1, 15)) == "JRN/202401/0001"


def test_custom_prefix_and_width(temp_db):
    generator = JournalNumberGenerator(temp_db, prefix="ADJ", width=3)
    assert generator.next_number(1, date(2024, 1, 15)) == "ADJ/202401/001"


def test_cash_transaction_numbers_follow_highest_in_use(temp_db, cash_bank_service, seeded_chart):
    generator = CashTransactionNumberGenerator(temp_db, "CI")
    assert generator.next_number(1, date(2024, 1, 15)) == "CI/202401/0001"

    cash_bank_service.cash_in(
        CashTransactionInput(
            company_id=1,
            account_id=seeded_chart["1-1100"].id,
            contra_account_id=seeded_chart["4-1000"].id,
            transaction_date=date(2024, 1, 15),
            amount=Decimal("10.00"),
            description="Counter sales",
            created_by=7,
        )
    )

    assert generator.next_number(1, date(2024, 1, 20)) == "CI/202401/0002"
    assert CashTransactionNumberGenerator(temp_db, "CO").next_number(1, date(2024, 1, 20)) == "CO/202401/0001"
