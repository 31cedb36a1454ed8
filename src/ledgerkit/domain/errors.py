"""Shared domain error messages and error types."""

from typing import Optional, Sequence

from ledgerkit.domain.entities import JournalStatus


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    ``violations`` lists every rule that failed; the message joins them.
    """

    def __init__(self, violations: Sequence[str] | str):
        if isinstance(violations, str):
            violations = [violations]
        self.violations = list(violations)
        super().__init__("; ".join(self.violations))


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StateConflictError(ConflictError):
    """Journal is not in the state an operation requires."""

    def __init__(
        self,
        message: str,
        required_status: JournalStatus,
        actual_status: Optional[JournalStatus] = None,
    ):
        super().__init__(message)
        self.required_status = required_status
        self.actual_status = actual_status


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


# Validation messages
TOO_FEW_ENTRIES = "journal must have at least 2 entries"
UNBALANCED_JOURNAL = "total debit must equal total credit"


def entry_has_both_sides(position: int) -> str:
    return f"entry {position} cannot have both debit and credit"


def entry_has_no_amount(position: int) -> str:
    return f"entry {position} must have either debit or credit"


def entry_has_negative_amount(position: int) -> str:
    return f"entry {position} cannot have a negative amount"


def entry_has_fractional_cents(position: int) -> str:
    return f"entry {position} amount must be in whole cents"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_code_not_found(company_id: int, code: str) -> str:
    return f"Account '{code}' not found for company {company_id}"


def duplicate_account_code(company_id: int, code: str) -> str:
    return f"Account code '{code}' already exists for company {company_id}"


def account_not_postable(code: str, reason: str) -> str:
    """Return message for an entry referencing a header or inactive account."""
    return f"Account '{code}' cannot be posted to: {reason}"


def account_delete_blocked(
    account_id: int, entry_count: int, ledger_count: int, child_count: int
) -> str:
    """Return message when an account still has dependent records."""
    parts = []
    if entry_count > 0:
        parts.append(f"{entry_count} journal entr{'ies' if entry_count != 1 else 'y'}")
    if ledger_count > 0:
        parts.append(f"{ledger_count} ledger row{'s' if ledger_count != 1 else ''}")
    if child_count > 0:
        parts.append(f"{child_count} child account{'s' if child_count != 1 else ''}")
    return (
        f"Cannot delete account {account_id}: it has {', '.join(parts)}. "
        "Deactivate it instead."
    )


def journal_not_found(journal_id: int) -> str:
    """Return message for missing journal."""
    return f"Journal {journal_id} not found"


def journal_state_conflict(action: str, required_status: JournalStatus) -> str:
    """Return message for an illegal journal transition.

    e.g. ``journal_state_conflict("posted", JournalStatus.DRAFT)`` gives
    "only draft journals can be posted".
    """
    return f"only {required_status.value} journals can be {action}"


def chart_already_seeded(company_id: int) -> str:
    return f"Company {company_id} already has a chart of accounts"


def journal_delete_blocked(journal_number: str) -> str:
    return f"Cannot delete journal {journal_number}: a cash transaction was recorded through it"


CASH_AMOUNT_NOT_POSITIVE = "cash transaction amount must be positive"


def not_a_cash_account(code: str) -> str:
    """Return message for a cash transaction on a non-cash account."""
    return f"Account '{code}' is not a cash or bank account"


def cash_transaction_not_found(transaction_id: int) -> str:
    return f"Cash transaction {transaction_id} not found"
