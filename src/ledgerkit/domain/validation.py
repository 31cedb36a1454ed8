"""Structural and arithmetic validation of journal entries.

These checks are pure: they look only at the entry amounts, never at the
database. Account existence and postability are checked by JournalService.
"""

from decimal import Decimal
from typing import Sequence

from ledgerkit.domain.entities import CENT, EntryInput, ZERO
from ledgerkit.domain import errors


def entry_totals(entries: Sequence[EntryInput]) -> tuple[Decimal, Decimal]:
    """Return (total debit, total credit) of the entries."""
    total_debit = sum((entry.debit for entry in entries), ZERO)
    total_credit = sum((entry.credit for entry in entries), ZERO)
    return total_debit, total_credit


def validate_entries(entries: Sequence[EntryInput]) -> list[str]:
    """Validate journal entries.

    Each rule is reported independently, so a journal can fail several at
    once. Entries are identified by their 1-based order in ``entries``.

    Args:
        entries: Entries of the journal

    Returns:
        List of violation messages; empty if the entries are valid
    """
    violations = []
    if len(entries) < 2:
        violations.append(errors.TOO_FEW_ENTRIES)

    for index, entry in enumerate(entries, start=1):
        if entry.debit < 0 or entry.credit < 0:
            violations.append(errors.entry_has_negative_amount(index))
        elif entry.debit != entry.debit.quantize(CENT) or entry.credit != entry.credit.quantize(CENT):
            violations.append(errors.entry_has_fractional_cents(index))
        if entry.debit > 0 and entry.credit > 0:
            violations.append(errors.entry_has_both_sides(index))
        if entry.debit == 0 and entry.credit == 0:
            violations.append(errors.entry_has_no_amount(index))

    total_debit, total_credit = entry_totals(entries)
    if total_debit != total_credit:
        violations.append(errors.UNBALANCED_JOURNAL)

    return violations


def check_entries(entries: Sequence[EntryInput]) -> tuple[Decimal, Decimal]:
    """Validate entries and return their totals.

    Raises:
        ValidationError: If any rule fails
    """
    violations = validate_entries(entries)
    if violations:
        raise errors.ValidationError(violations)
    return entry_totals(entries)
