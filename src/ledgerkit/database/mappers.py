"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: enum values are stored as plain
strings and rebuilt into the closed domain enums here.
"""

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Account as ORMAccount,
    Journal as ORMJournal,
    JournalEntry as ORMJournalEntry,
    LedgerRow as ORMLedgerRow,
    AuditEvent as ORMAuditEvent,
    CashTransaction as ORMCashTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        company_id=orm_account.company_id,
        code=orm_account.code,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        category=domain.AccountCategory(orm_account.category),
        parent_id=orm_account.parent_id,
        level=orm_account.level,
        is_header=orm_account.is_header,
        is_active=orm_account.is_active,
        balance=orm_account.balance,
        description=orm_account.description,
        created_at=orm_account.created_at,
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        journal_id=orm_entry.journal_id,
        account_id=orm_entry.account_id,
        debit=orm_entry.debit,
        credit=orm_entry.credit,
        position=orm_entry.position,
        description=orm_entry.description,
    )


def journal_to_domain(orm_journal: ORMJournal) -> domain.Journal:
    """Convert SQLAlchemy Journal model, with its entries, to a domain Journal."""
    return domain.Journal(
        id=orm_journal.id,
        company_id=orm_journal.company_id,
        journal_number=orm_journal.journal_number,
        transaction_date=orm_journal.transaction_date,
        description=orm_journal.description,
        status=domain.JournalStatus(orm_journal.status),
        total_debit=orm_journal.total_debit,
        total_credit=orm_journal.total_credit,
        created_by=orm_journal.created_by,
        created_at=orm_journal.created_at,
        posted_at=orm_journal.posted_at,
        posted_by=orm_journal.posted_by,
        entries=tuple(journal_entry_to_domain(e) for e in orm_journal.entries),
    )


def ledger_row_to_domain(orm_row: ORMLedgerRow) -> domain.LedgerRow:
    """Convert SQLAlchemy LedgerRow model to domain LedgerRow entity."""
    journal = orm_row.journal
    return domain.LedgerRow(
        id=orm_row.id,
        company_id=orm_row.company_id,
        account_id=orm_row.account_id,
        journal_id=orm_row.journal_id,
        entry_id=orm_row.entry_id,
        debit=orm_row.debit,
        credit=orm_row.credit,
        balance=orm_row.balance,
        description=orm_row.description,
        created_at=orm_row.created_at,
        journal_number=journal.journal_number if journal is not None else None,
        transaction_date=journal.transaction_date if journal is not None else None,
    )


def audit_event_to_domain(orm_event: ORMAuditEvent) -> domain.AuditEvent:
    """Convert SQLAlchemy AuditEvent model to domain AuditEvent entity."""
    return domain.AuditEvent(
        id=orm_event.id,
        company_id=orm_event.company_id,
        actor_id=orm_event.actor_id,
        action=domain.AuditAction(orm_event.action),
        record_type=orm_event.record_type,
        record_id=orm_event.record_id,
        description=orm_event.description,
        occurred_at=orm_event.occurred_at,
        dispatched_at=orm_event.dispatched_at,
    )


def cash_transaction_to_domain(orm_transaction: ORMCashTransaction) -> domain.CashTransaction:
    """Convert SQLAlchemy CashTransaction model to domain CashTransaction entity."""
    return domain.CashTransaction(
        id=orm_transaction.id,
        company_id=orm_transaction.company_id,
        account_id=orm_transaction.account_id,
        transaction_number=orm_transaction.transaction_number,
        transaction_date=orm_transaction.transaction_date,
        transaction_type=domain.CashTransactionType(orm_transaction.transaction_type),
        category=domain.CashTransactionCategory(orm_transaction.category),
        amount=orm_transaction.amount,
        description=orm_transaction.description,
        reference=orm_transaction.reference,
        journal_id=orm_transaction.journal_id,
        created_by=orm_transaction.created_by,
        created_at=orm_transaction.created_at,
    )
