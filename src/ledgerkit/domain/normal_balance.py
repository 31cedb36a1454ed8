"""Normal-balance sign rule.

Asset and expense accounts increase with debits; liability, equity and
revenue accounts increase with credits. Every signed balance in the system is
computed through this module.
"""

from decimal import Decimal

from ledgerkit.domain.entities import AccountType


def is_debit_normal(account_type: AccountType) -> bool:
    """Return True if debits increase accounts of this type.

    Raises:
        ValueError: If the account type is not handled here
    """
    if account_type in (AccountType.ASSET, AccountType.EXPENSE):
        return True
    if account_type in (AccountType.LIABILITY, AccountType.EQUITY, AccountType.REVENUE):
        return False
    raise ValueError(f"No normal-balance rule for account type {account_type!r}")


def signed_change(account_type: AccountType, debit: Decimal, credit: Decimal) -> Decimal:
    """Effect of a debit/credit pair on a signed account balance."""
    if is_debit_normal(account_type):
        return debit - credit
    return credit - debit


def signed_balance(account_type: AccountType, raw_balance: Decimal) -> Decimal:
    """Convert a raw ``debit - credit`` ledger balance to the signed form."""
    if is_debit_normal(account_type):
        return raw_balance
    return -raw_balance
