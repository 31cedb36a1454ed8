"""Tests for cash and bank service."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain import errors
from ledgerkit.domain.entities import (
    AuditAction,
    CashTransactionCategory,
    CashTransactionInput,
    CashTransactionType,
    JournalStatus,
)

COMPANY_ID = 1
USER_ID = 7


@pytest.fixture
def cash_input(seeded_chart):
    """Return a helper building a cash transaction input from account codes."""

    def _input(
        amount="250.00",
        account="1-1100",
        contra="4-1000",
        transaction_date=date(2024, 1, 15),
        category=CashTransactionCategory.CASH_SALES,
    ):
        return CashTransactionInput(
            company_id=COMPANY_ID,
            account_id=seeded_chart[account].id,
            contra_account_id=seeded_chart[contra].id,
            transaction_date=transaction_date,
            amount=Decimal(amount),
            description="Counter sales",
            created_by=USER_ID,
            category=category,
            reference="R-17",
        )

    return _input


class TestCashIn:
    """Tests for recording receipts."""

    def test_cash_in_creates_draft_journal(
        self, cash_bank_service, journal_service, cash_input, seeded_chart
    ):
        transaction = cash_bank_service.cash_in(cash_input())

        assert transaction.transaction_number == "CI/202401/0001"
        assert transaction.transaction_type is CashTransactionType.IN
        assert transaction.category is CashTransactionCategory.CASH_SALES
        assert transaction.amount == Decimal("250.00")
        assert transaction.reference == "R-17"

        journal = journal_service.require_journal(transaction.journal_id)
        assert journal.status is JournalStatus.DRAFT
        assert journal.transaction_date == date(2024, 1, 15)
        assert journal.description == "Counter sales"
        assert [(e.account_id, e.debit, e.credit) for e in journal.entries] == [
            (seeded_chart["1-1100"].id, Decimal("250.00"), Decimal("0")),
            (seeded_chart["4-1000"].id, Decimal("0"), Decimal("250.00")),
        ]

    def test_cash_in_writes_audit_events(self, cash_bank_service, cash_input, temp_db):
        transaction = cash_bank_service.cash_in(cash_input())

        events = temp_db.list_audit_events()
        assert [(e.action, e.record_type) for e in events] == [
            (AuditAction.CREATE, "journal"),
            (AuditAction.CREATE, "cash_transaction"),
        ]
        assert events[1].record_id == transaction.id

    def test_numbers_are_sequential_per_type(self, cash_bank_service, cash_input):
        first = cash_bank_service.cash_in(cash_input())
        second = cash_bank_service.cash_in(cash_input(amount="10.00"))
        payment = cash_bank_service.cash_out(cash_input(contra="5-1200"))

        assert first.transaction_number == "CI/202401/0001"
        assert second.transaction_number == "CI/202401/0002"
        assert payment.transaction_number == "CO/202401/0001"


class TestCashOut:
    def test_cash_out_credits_cash(self, cash_bank_service, journal_service, cash_input, seeded_chart):
        transaction = cash_bank_service.cash_out(
            cash_input(amount="1200.00", account="1-1200", contra="5-1200")
        )

        assert transaction.transaction_type is CashTransactionType.OUT
        journal = journal_service.require_journal(transaction.journal_id)
        assert [(e.account_id, e.debit, e.credit) for e in journal.entries] == [
            (seeded_chart["5-1200"].id, Decimal("1200.00"), Decimal("0")),
            (seeded_chart["1-1200"].id, Decimal("0"), Decimal("1200.00")),
        ]


class TestRejectedTransactions:
    """Rejected transactions leave neither a journal nor a cash record."""

    def test_non_cash_account_is_rejected(self, cash_bank_service, journal_service, cash_input):
        with pytest.raises(errors.ValidationError, match="not a cash or bank account"):
            cash_bank_service.cash_in(cash_input(account="1-1300"))

        assert journal_service.list_journals(COMPANY_ID) == []
        assert cash_bank_service.list_transactions(COMPANY_ID) == []

    @pytest.mark.parametrize("amount", ["0", "-5.00"])
    def test_non_positive_amount_is_rejected(self, cash_bank_service, cash_input, amount):
        with pytest.raises(errors.ValidationError) as exc_info:
            cash_bank_service.cash_out(cash_input(amount=amount))
        assert exc_info.value.violations == [errors.CASH_AMOUNT_NOT_POSITIVE]

    def test_sub_cent_amount_is_rejected(self, cash_bank_service, journal_service, cash_input):
        with pytest.raises(errors.ValidationError, match="whole cents"):
            cash_bank_service.cash_in(cash_input(amount="10.005"))

        assert journal_service.list_journals(COMPANY_ID) == []
        assert cash_bank_service.list_transactions(COMPANY_ID) == []

    def test_header_contra_account_is_rejected(self, cash_bank_service, journal_service, cash_input):
        with pytest.raises(errors.ValidationError, match="header account"):
            cash_bank_service.cash_in(cash_input(contra="4-0000"))

        assert journal_service.list_journals(COMPANY_ID) == []
        assert cash_bank_service.list_transactions(COMPANY_ID) == []

    def test_unknown_cash_account(self, cash_bank_service, cash_input):
        data = cash_input()
        with pytest.raises(errors.NotFoundError):
            cash_bank_service.cash_in(
                CashTransactionInput(
                    company_id=COMPANY_ID,
                    account_id=999,
                    contra_account_id=data.contra_account_id,
                    transaction_date=data.transaction_date,
                    amount=data.amount,
                    description=data.description,
                    created_by=USER_ID,
                )
            )


class TestQueries:
    def test_require_missing_transaction(self, cash_bank_service):
        with pytest.raises(errors.NotFoundError, match="Cash transaction 5 not found"):
            cash_bank_service.require_transaction(5)

    def test_list_newest_first_with_filters(self, cash_bank_service, cash_input, seeded_chart):
        january = cash_bank_service.cash_in(cash_input())
        february = cash_bank_service.cash_in(cash_input(transaction_date=date(2024, 2, 3)))
        bank = cash_bank_service.cash_in(
            cash_input(account="1-1200", transaction_date=date(2024, 2, 10))
        )

        listed = cash_bank_service.list_transactions(COMPANY_ID)
        assert [t.id for t in listed] == [bank.id, february.id, january.id]

        in_january = cash_bank_service.list_transactions(
            COMPANY_ID, start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)
        )
        assert [t.id for t in in_january] == [january.id]

        cash_only = cash_bank_service.list_transactions(
            COMPANY_ID, account_id=seeded_chart["1-1100"].id
        )
        assert [t.id for t in cash_only] == [february.id, january.id]


class TestCashPosition:
    def test_position_counts_posted_journals_only(
        self, cash_bank_service, journal_service, cash_input
    ):
        receipt = cash_bank_service.cash_in(cash_input())
        payment = cash_bank_service.cash_out(
            cash_input(amount="100.00", contra="5-1200", transaction_date=date(2024, 1, 20))
        )
        cash_bank_service.cash_in(cash_input(account="1-1200", amount="75.00"))
        for transaction in (receipt, payment):
            journal_service.post_journal(transaction.journal_id, actor_id=USER_ID)

        position = cash_bank_service.cash_position(COMPANY_ID, date(2024, 1, 31))

        assert [(line.account_code, line.balance) for line in position.lines] == [
            ("1-1100", Decimal("150.00")),
            ("1-1200", Decimal("0")),
        ]
        assert position.total == Decimal("150.00")

    def test_position_respects_cutoff(self, cash_bank_service, journal_service, cash_input):
        receipt = cash_bank_service.cash_in(cash_input())
        journal_service.post_journal(receipt.journal_id, actor_id=USER_ID)

        position = cash_bank_service.cash_position(COMPANY_ID, date(2024, 1, 14))

        assert position.total == Decimal("0")

    def test_position_without_chart(self, cash_bank_service):
        position = cash_bank_service.cash_position(COMPANY_ID, date(2024, 1, 31))
        assert position.lines == ()
        assert position.total == Decimal("0")


def test_journal_of_cash_transaction_cannot_be_deleted(cash_bank_service, journal_service, cash_input):
    transaction = cash_bank_service.cash_in(cash_input())

    with pytest.raises(errors.DependencyError, match="cash transaction"):
        journal_service.delete_journal(transaction.journal_id)

    assert journal_service.get_journal(transaction.journal_id) is not None
