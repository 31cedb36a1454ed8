"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

from ledgerkit.domain.entities import CENT


def parse_amount(amount_str: str) -> Decimal:
    """Parse a debit or credit amount into a Decimal with two places.

    Handles "123.45", "1,234.56" and a leading currency symbol such as
    "$123.45". Entry amounts are never negative; the side of the entry
    carries the direction.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount quantized to cents

    Raises:
        ValueError: If the string is empty, not a number, negative, or has
            more than two decimal places
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥,\s]", "", amount_str)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: '{amount_str}'")
    if amount != amount.quantize(CENT):
        raise ValueError(f"Amount has more than two decimal places: '{amount_str}'")
    return amount.quantize(CENT)
