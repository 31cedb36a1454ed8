"""Domain model entities for ledgerkit.

These are pure data classes representing bookkeeping concepts, independent of
database schema. Services and the database interface exchange these objects;
the SQLAlchemy models never leave the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


ZERO = Decimal("0")
CENT = Decimal("0.01")


class AccountType(str, Enum):
    """Top-level classification of an account."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class AccountCategory(str, Enum):
    """Sub-classification of an account, owned by exactly one account type."""

    CURRENT_ASSET = "current_asset"
    FIXED_ASSET = "fixed_asset"
    CURRENT_LIABILITY = "current_liability"
    LONG_TERM_LIABILITY = "long_term_liability"
    EQUITY = "equity"
    OPERATING_REVENUE = "operating_revenue"
    OTHER_REVENUE = "other_revenue"
    OPERATING_EXPENSE = "operating_expense"
    OTHER_EXPENSE = "other_expense"

    @property
    def account_type(self) -> AccountType:
        """Account type this category belongs to."""
        return _CATEGORY_TYPES[self]


_CATEGORY_TYPES = {
    AccountCategory.CURRENT_ASSET: AccountType.ASSET,
    AccountCategory.FIXED_ASSET: AccountType.ASSET,
    AccountCategory.CURRENT_LIABILITY: AccountType.LIABILITY,
    AccountCategory.LONG_TERM_LIABILITY: AccountType.LIABILITY,
    AccountCategory.EQUITY: AccountType.EQUITY,
    AccountCategory.OPERATING_REVENUE: AccountType.REVENUE,
    AccountCategory.OTHER_REVENUE: AccountType.REVENUE,
    AccountCategory.OPERATING_EXPENSE: AccountType.EXPENSE,
    AccountCategory.OTHER_EXPENSE: AccountType.EXPENSE,
}


class JournalStatus(str, Enum):
    """Journal lifecycle state."""

    DRAFT = "draft"
    POSTED = "posted"
    VOIDED = "voided"


class AuditAction(str, Enum):
    """Kind of state change recorded in the audit outbox."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    POST = "post"
    VOID = "void"


class CashTransactionType(str, Enum):
    """Direction of money through a cash or bank account."""

    IN = "in"
    OUT = "out"


class CashTransactionCategory(str, Enum):
    CASH_SALES = "cash_sales"
    CASH_PURCHASE = "cash_purchase"
    EXPENSE = "expense"
    WITHDRAWAL = "withdrawal"
    DEPOSIT = "deposit"
    TRANSFER = "transfer"
    OTHER = "other"


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry.

    ``balance`` is the cached, normal-balance signed running total maintained
    by posting. It is not the raw ledger balance (see ``LedgerService``).
    """

    id: int
    company_id: int
    code: str
    name: str
    account_type: AccountType
    category: AccountCategory
    parent_id: Optional[int]
    level: int
    is_header: bool
    is_active: bool
    balance: Decimal
    description: Optional[str]
    created_at: datetime

    @property
    def is_postable(self) -> bool:
        """True if journal entries may reference this account."""
        return self.is_active and not self.is_header


@dataclass(frozen=True)
class JournalEntry:
    """One debit or credit line of a journal."""

    id: int
    journal_id: int
    account_id: int
    debit: Decimal
    credit: Decimal
    position: int
    description: Optional[str]


@dataclass(frozen=True)
class Journal:
    """Dated group of balanced entries describing one business event."""

    id: int
    company_id: int
    journal_number: str
    transaction_date: date
    description: str
    status: JournalStatus
    total_debit: Decimal
    total_credit: Decimal
    created_by: int
    created_at: datetime
    posted_at: Optional[datetime] = None
    posted_by: Optional[int] = None
    entries: tuple[JournalEntry, ...] = ()


@dataclass(frozen=True)
class LedgerRow:
    """Immutable posted record derived from one journal entry.

    ``balance`` is the normal-balance signed snapshot of the account taken
    when the row was written. ``journal_number`` and ``transaction_date`` are
    read from the owning journal.
    """

    id: int
    company_id: int
    account_id: int
    journal_id: int
    entry_id: int
    debit: Decimal
    credit: Decimal
    balance: Decimal
    description: Optional[str]
    created_at: datetime
    journal_number: Optional[str] = None
    transaction_date: Optional[date] = None


@dataclass(frozen=True)
class AccountTotals:
    """Raw debit and credit sums of posted ledger rows for one account."""

    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @property
    def net_debit(self) -> Decimal:
        """Raw balance, debit minus credit."""
        return self.debit - self.credit

    @property
    def net_credit(self) -> Decimal:
        return self.credit - self.debit


@dataclass(frozen=True)
class AuditEvent:
    """Outbox record describing a completed state change."""

    id: int
    company_id: int
    actor_id: Optional[int]
    action: AuditAction
    record_type: str
    record_id: Optional[int]
    description: str
    occurred_at: datetime
    dispatched_at: Optional[datetime] = None


@dataclass(frozen=True)
class CashTransaction:
    """Receipt into or payment from a cash or bank account.

    Every transaction is recorded through its own journal, which pairs the
    cash account with a contra account.
    """

    id: int
    company_id: int
    account_id: int
    transaction_number: str
    transaction_date: date
    transaction_type: CashTransactionType
    category: CashTransactionCategory
    amount: Decimal
    description: str
    reference: Optional[str]
    journal_id: int
    created_by: int
    created_at: datetime


# Commands


@dataclass(frozen=True)
class AccountSpec:
    """Fields required to create an account."""

    company_id: int
    code: str
    name: str
    account_type: AccountType
    category: AccountCategory
    parent_id: Optional[int] = None
    level: int = 1
    is_header: bool = False
    is_active: bool = True
    balance: Decimal = ZERO
    description: Optional[str] = None


@dataclass(frozen=True)
class AccountUpdate:
    """Mutable account fields. ``None`` leaves a field unchanged."""

    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.description is None and self.is_active is None


@dataclass(frozen=True)
class EntryInput:
    """One line of a journal being created or replaced."""

    account_id: int
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    position: int = 0
    description: Optional[str] = None


@dataclass(frozen=True)
class JournalDraft:
    """A journal to be created in draft state."""

    company_id: int
    transaction_date: date
    description: str
    created_by: int
    entries: tuple[EntryInput, ...] = ()


@dataclass(frozen=True)
class JournalUpdate:
    """Full replacement of a draft journal's editable content."""

    transaction_date: date
    description: str
    entries: tuple[EntryInput, ...] = ()


@dataclass(frozen=True)
class CashTransactionInput:
    """A cash receipt or payment to record.

    ``account_id`` is the cash or bank account; ``contra_account_id`` takes
    the other side of the journal.
    """

    company_id: int
    account_id: int
    contra_account_id: int
    transaction_date: date
    amount: Decimal
    description: str
    created_by: int
    category: CashTransactionCategory = CashTransactionCategory.OTHER
    reference: Optional[str] = None


# Reports


@dataclass(frozen=True)
class TrialBalanceLine:
    """Per-account row of a trial balance."""

    account_id: int
    account_code: str
    account_name: str
    account_type: AccountType
    debit: Decimal
    credit: Decimal
    debit_balance: Decimal
    credit_balance: Decimal


@dataclass(frozen=True)
class TrialBalanceReport:
    """Point-in-time listing of account balances."""

    company_id: int
    as_of_date: date
    lines: tuple[TrialBalanceLine, ...]
    total_debit: Decimal
    total_credit: Decimal
    total_debit_balance: Decimal
    total_credit_balance: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class StatementLine:
    """Account line of an income statement or balance sheet."""

    account_code: str
    account_name: str
    amount: Decimal


@dataclass(frozen=True)
class IncomeStatement:
    company_id: int
    period: str
    start_date: date
    end_date: date
    revenues: tuple[StatementLine, ...]
    total_revenue: Decimal
    expenses: tuple[StatementLine, ...]
    total_expense: Decimal
    net_income: Decimal
    is_profit: bool


@dataclass(frozen=True)
class BalanceSheet:
    company_id: int
    as_of_date: date
    current_assets: tuple[StatementLine, ...]
    total_current_assets: Decimal
    fixed_assets: tuple[StatementLine, ...]
    total_fixed_assets: Decimal
    total_assets: Decimal
    current_liabilities: tuple[StatementLine, ...]
    total_current_liabilities: Decimal
    long_term_liabilities: tuple[StatementLine, ...]
    total_long_term_liabilities: Decimal
    total_liabilities: Decimal
    equity: tuple[StatementLine, ...]
    total_equity: Decimal
    total_liabilities_and_equity: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class CashFlowLine:
    description: str
    amount: Decimal


@dataclass(frozen=True)
class CashFlowStatement:
    """Net movement of cash and bank accounts over a period.

    Investing and financing sections are always empty; the whole movement is
    reported as operating cash.
    """

    company_id: int
    period: str
    start_date: date
    end_date: date
    operating_activities: tuple[CashFlowLine, ...]
    net_cash_from_operating: Decimal
    net_increase_in_cash: Decimal
    cash_at_beginning: Decimal
    cash_at_end: Decimal
    investing_activities: tuple[CashFlowLine, ...] = field(default_factory=tuple)
    net_cash_from_investing: Decimal = ZERO
    financing_activities: tuple[CashFlowLine, ...] = field(default_factory=tuple)
    net_cash_from_financing: Decimal = ZERO


@dataclass(frozen=True)
class CashPositionLine:
    account_code: str
    account_name: str
    balance: Decimal


@dataclass(frozen=True)
class CashPosition:
    """Raw ledger balances of the cash and bank accounts at a date."""

    company_id: int
    as_of_date: date
    lines: tuple[CashPositionLine, ...]
    total: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures: year-to-date income and cumulative balances."""

    company_id: int
    as_of_date: date
    total_revenue: Decimal
    total_expense: Decimal
    net_income: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    cash_balance: Decimal
    bank_balance: Decimal


@dataclass(frozen=True)
class MonthlyAmount:
    month: str
    amount: Decimal


@dataclass(frozen=True)
class CategoryAmount:
    category: AccountCategory
    amount: Decimal


@dataclass(frozen=True)
class FinancialRatios:
    """Liquidity, leverage and return ratios.

    Return ratios and the profit margin are percentages. A ratio whose
    denominator is not positive is reported as zero.
    """

    company_id: int
    as_of_date: date
    start_date: date
    end_date: date
    current_ratio: Decimal
    quick_ratio: Decimal
    debt_to_equity_ratio: Decimal
    debt_to_asset_ratio: Decimal
    profit_margin: Decimal
    return_on_assets: Decimal
    return_on_equity: Decimal
