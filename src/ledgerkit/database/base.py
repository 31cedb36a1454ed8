"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Sequence
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import (
    Account,
    AccountSpec,
    AccountTotals,
    AccountType,
    AccountUpdate,
    AuditAction,
    AuditEvent,
    CashTransaction,
    CashTransactionCategory,
    CashTransactionType,
    EntryInput,
    Journal,
    JournalStatus,
    LedgerRow,
)


class Database(ABC):
    """Abstract database interface for ledgerkit.

    Write methods commit immediately unless called inside ``transaction()``,
    in which case they are flushed and committed (or rolled back) together
    when the outermost block exits.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Group writes into one atomic unit.

        Nested blocks join the outermost one. Any exception rolls back every
        write made inside the outermost block and propagates unchanged.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, spec: AccountSpec) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int, for_update: bool = False) -> Optional[Account]:
        """Get account by ID, optionally locking its row until commit."""
        pass

    @abstractmethod
    def get_account_by_code(self, company_id: int, code: str) -> Optional[Account]:
        """Get account by company and code."""
        pass

    @abstractmethod
    def list_accounts(
        self,
        company_id: int,
        account_type: Optional[AccountType] = None,
        postable_only: bool = False,
        codes: Optional[Sequence[str]] = None,
    ) -> list[Account]:
        """List a company's accounts ordered by code.

        Args:
            company_id: Company ID
            account_type: Optional account type filter
            postable_only: If True, exclude inactive and header accounts
            codes: Optional whitelist of account codes
        """
        pass

    @abstractmethod
    def lock_accounts(self, account_ids: Sequence[int]) -> None:
        """Lock account rows for the rest of the current transaction."""
        pass

    @abstractmethod
    def update_account(self, account_id: int, update: AccountUpdate) -> None:
        """Apply the mutable account fields that are set in ``update``."""
        pass

    @abstractmethod
    def set_account_balance(self, account_id: int, balance: Decimal) -> None:
        """Store an account's cached, normal-balance signed balance."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_dependency_counts(self, account_id: int) -> tuple[int, int, int]:
        """Return (journal entry count, ledger row count, child account count)."""
        pass

    # Journal operations
    @abstractmethod
    def create_journal(
        self,
        company_id: int,
        journal_number: str,
        transaction_date: date,
        description: str,
        created_by: int,
        total_debit: Decimal,
        total_credit: Decimal,
        entries: Sequence[EntryInput],
    ) -> int:
        """Create a draft journal with its entries. Returns journal ID."""
        pass

    @abstractmethod
    def get_journal(self, journal_id: int, for_update: bool = False) -> Optional[Journal]:
        """Get journal with entries by ID, optionally locking its row."""
        pass

    @abstractmethod
    def list_journals(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[JournalStatus] = None,
    ) -> list[Journal]:
        """List journals, newest transaction date first."""
        pass

    @abstractmethod
    def list_journal_numbers(self, company_id: int, prefix: str) -> list[str]:
        """List a company's journal numbers starting with ``prefix``."""
        pass

    @abstractmethod
    def replace_journal_content(
        self,
        journal_id: int,
        transaction_date: date,
        description: str,
        total_debit: Decimal,
        total_credit: Decimal,
        entries: Sequence[EntryInput],
    ) -> None:
        """Replace a journal's date, description, totals and entries."""
        pass

    @abstractmethod
    def transition_journal_status(
        self,
        journal_id: int,
        from_status: JournalStatus,
        to_status: JournalStatus,
        posted_at: Optional[datetime] = None,
        posted_by: Optional[int] = None,
    ) -> bool:
        """Move a journal from one status to another in a single statement.

        Posting metadata is set when given. Returns False, changing nothing,
        if the journal is not in ``from_status`` at the time of the update.
        """
        pass

    @abstractmethod
    def delete_journal(self, journal_id: int) -> None:
        """Delete a journal and its entries."""
        pass

    # Ledger operations
    @abstractmethod
    def append_ledger_row(
        self,
        company_id: int,
        account_id: int,
        journal_id: int,
        entry_id: int,
        debit: Decimal,
        credit: Decimal,
        balance: Decimal,
        description: Optional[str] = None,
    ) -> int:
        """Append a ledger row. Returns ledger row ID."""
        pass

    @abstractmethod
    def list_ledger_rows(
        self,
        company_id: Optional[int] = None,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        posted_only: bool = True,
    ) -> list[LedgerRow]:
        """List ledger rows by journal transaction date, then row ID."""
        pass

    @abstractmethod
    def count_ledger_rows(self, company_id: int) -> int:
        """Count a company's ledger rows whatever their journal's status."""
        pass

    @abstractmethod
    def get_account_ledger_balance(self, account_id: int, as_of: date) -> Decimal:
        """Raw balance: sum of debit minus credit over posted rows dated <= as_of."""
        pass

    @abstractmethod
    def sum_ledger_by_account(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_ids: Optional[Sequence[int]] = None,
    ) -> dict[int, AccountTotals]:
        """Raw debit/credit sums of posted rows per account within a date range."""
        pass

    # Audit outbox operations
    @abstractmethod
    def record_audit_event(
        self,
        company_id: int,
        actor_id: Optional[int],
        action: AuditAction,
        record_type: str,
        record_id: Optional[int],
        description: str,
    ) -> int:
        """Add an event to the audit outbox. Returns event ID."""
        pass

    @abstractmethod
    def list_audit_events(
        self, company_id: Optional[int] = None, pending_only: bool = False
    ) -> list[AuditEvent]:
        """List audit events, oldest first."""
        pass

    @abstractmethod
    def mark_audit_event_dispatched(self, event_id: int, dispatched_at: datetime) -> None:
        """Mark an outbox event as delivered."""
        pass

    # Cash transaction operations
    @abstractmethod
    def create_cash_transaction(
        self,
        company_id: int,
        account_id: int,
        transaction_number: str,
        transaction_date: date,
        transaction_type: CashTransactionType,
        category: CashTransactionCategory,
        amount: Decimal,
        description: str,
        reference: Optional[str],
        journal_id: int,
        created_by: int,
    ) -> int:
        """Create a cash transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_cash_transaction(self, transaction_id: int) -> Optional[CashTransaction]:
        """Get cash transaction by ID."""
        pass

    @abstractmethod
    def list_cash_transactions(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> list[CashTransaction]:
        """List cash transactions, newest transaction date first."""
        pass

    @abstractmethod
    def list_cash_transaction_numbers(self, company_id: int, prefix: str) -> list[str]:
        """List a company's cash transaction numbers starting with ``prefix``."""
        pass

    @abstractmethod
    def count_cash_transactions_for_journal(self, journal_id: int) -> int:
        """Count cash transactions recorded through a journal."""
        pass
