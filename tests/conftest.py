"""Shared pytest fixtures for ledgerkit tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.audit import AuditService
from ledgerkit.domain.cash_bank import CashBankService
from ledgerkit.domain.dashboard import DashboardService
from ledgerkit.domain.entities import EntryInput, JournalDraft
from ledgerkit.domain.journal import JournalService
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.domain.statements import FinancialStatementService
from ledgerkit.domain.trial_balance import TrialBalanceService
from ledgerkit.logging_config import reset_logging

COMPANY_ID = 1
USER_ID = 7
FIXED_NOW = datetime(2024, 12, 31, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Fixed clock used for posting."""
    return lambda: FIXED_NOW


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def journal_service(temp_db, clock):
    """Create a JournalService with a temporary database and a fixed clock."""
    return JournalService(temp_db, clock=clock)


@pytest.fixture
def ledger_service(temp_db):
    return LedgerService(temp_db)


@pytest.fixture
def trial_balance_service(temp_db):
    return TrialBalanceService(temp_db)


@pytest.fixture
def statement_service(temp_db):
    return FinancialStatementService(temp_db)


@pytest.fixture
def audit_service(temp_db):
    return AuditService(temp_db)


@pytest.fixture
def cash_bank_service(temp_db, journal_service):
    return CashBankService(temp_db, journal_service=journal_service)


@pytest.fixture
def dashboard_service(temp_db):
    return DashboardService(temp_db)


@pytest.fixture
def seeded_chart(account_service):
    """Seed the default chart for company 1 and return accounts by code."""
    account_service.seed_default_chart(COMPANY_ID)
    return {acc.code: acc for acc in account_service.list_accounts(COMPANY_ID)}


@pytest.fixture
def make_journal(journal_service, seeded_chart):
    """Return a helper creating (and optionally posting) a journal.

    Lines are ``(account_code, debit, credit)`` tuples with string amounts.
    """

    def _make(lines, transaction_date=date(2024, 1, 15), description="Test journal", post=False):
        entries = tuple(
            EntryInput(
                account_id=seeded_chart[code].id,
                debit=Decimal(debit),
                credit=Decimal(credit),
                position=position,
            )
            for position, (code, debit, credit) in enumerate(lines)
        )
        journal = journal_service.create_journal(
            JournalDraft(
                company_id=COMPANY_ID,
                transaction_date=transaction_date,
                description=description,
                created_by=USER_ID,
                entries=entries,
            )
        )
        if post:
            journal = journal_service.post_journal(journal.id, actor_id=USER_ID)
        return journal

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
