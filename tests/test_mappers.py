"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerkit.database.models import (
    Account as ORMAccount,
    AuditEvent as ORMAuditEvent,
    CashTransaction as ORMCashTransaction,
    Journal as ORMJournal,
    JournalEntry as ORMJournalEntry,
    LedgerRow as ORMLedgerRow,
)
from ledgerkit.database.mappers import (
    account_to_domain,
    audit_event_to_domain,
    cash_transaction_to_domain,
    journal_to_domain,
    ledger_row_to_domain,
)
from ledgerkit.domain.entities import (
    Account,
    AccountCategory,
    AccountType,
    AuditAction,
    CashTransactionCategory,
    CashTransactionType,
    Journal,
    JournalStatus,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=3,
            company_id=1,
            code="1-1100",
            name="Cash",
            account_type="asset",
            category="current_asset",
            parent_id=2,
            level=3,
            is_header=False,
            is_active=True,
            balance=Decimal("12.50"),
            description=None,
            created_at=datetime.now(UTC),
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.code == "1-1100"
        assert domain_account.account_type is AccountType.ASSET
        assert domain_account.category is AccountCategory.CURRENT_ASSET
        assert domain_account.parent_id == 2
        assert domain_account.balance == Decimal("12.50")


class TestJournalMapper:
    """Tests for Journal mapper."""

    def test_journal_to_domain_includes_entries(self):
        """Test converting ORM Journal with entries to domain Journal."""
        orm_journal = ORMJournal(
            id=5,
            company_id=1,
            journal_number="JRN/202401/0001",
            transaction_date=date(2024, 1, 15),
            description="Cash sale",
            status="posted",
            total_debit=Decimal("100.00"),
            total_credit=Decimal("100.00"),
            created_by=7,
            created_at=datetime.now(UTC),
            posted_by=7,
        )
        orm_journal.entries = [
            ORMJournalEntry(id=10, journal_id=5, account_id=3, debit=Decimal("100.00"), credit=Decimal("0"), position=0),
            ORMJournalEntry(id=11, journal_id=5, account_id=21, debit=Decimal("0"), credit=Decimal("100.00"), position=1),
        ]
        domain_journal = journal_to_domain(orm_journal)

        assert isinstance(domain_journal, Journal)
        assert domain_journal.status is JournalStatus.POSTED
        assert domain_journal.posted_by == 7
        assert [e.id for e in domain_journal.entries] == [10, 11]
        assert domain_journal.entries[1].credit == Decimal("100.00")


class TestLedgerRowMapper:
    """Tests for LedgerRow mapper."""

    def test_ledger_row_carries_journal_number_and_date(self):
        orm_journal = ORMJournal(
            id=5, journal_number="JRN/202401/0001", transaction_date=date(2024, 1, 15)
        )
        orm_row = ORMLedgerRow(
            id=1,
            company_id=1,
            account_id=3,
            journal_id=5,
            entry_id=10,
            debit=Decimal("100.00"),
            credit=Decimal("0"),
            balance=Decimal("100.00"),
            created_at=datetime.now(UTC),
        )
        orm_row.journal = orm_journal

        row = ledger_row_to_domain(orm_row)

        assert row.journal_number == "JRN/202401/0001"
        assert row.transaction_date == date(2024, 1, 15)
        assert row.balance == Decimal("100.00")


def test_audit_event_to_domain():
    """Test converting ORM AuditEvent to domain AuditEvent."""
    orm_event = ORMAuditEvent(
        id=1,
        company_id=1,
        actor_id=7,
        action="post",
        record_type="journal",
        record_id=5,
        description="Posted journal JRN/202401/0001",
        occurred_at=datetime.now(UTC),
        dispatched_at=None,
    )
    event = audit_event_to_domain(orm_event)

    assert event.action is AuditAction.POST
    assert event.record_id == 5
    assert event.dispatched_at is None


def test_cash_transaction_to_domain():
    created_at = datetime(2024, 1, 15, 9, 30, tzinfo=UTC)
    orm_transaction = ORMCashTransaction(
        id=4,
        company_id=1,
        account_id=3,
        transaction_number="CO/202401/0002",
        transaction_date=date(2024, 1, 15),
        transaction_type="out",
        category="expense",
        amount=Decimal("45.10"),
        description="Stationery",
        reference=None,
        journal_id=12,
        created_by=7,
        created_at=created_at,
    )

    transaction = cash_transaction_to_domain(orm_transaction)

    assert transaction.transaction_type is CashTransactionType.OUT
    assert transaction.category is CashTransactionCategory.EXPENSE
    assert transaction.amount == Decimal("45.10")
    assert transaction.journal_id == 12
    assert transaction.reference is None
    assert transaction.created_at == created_at
