"""Amount parsing utilities."""

import re


def parse_amount(amount_str: str) -> int:
    """Parse an amount string into a whole number of currency units.

    Handles various formats:
    - "1000"
    - "1,000"
    - "¥1,000"
    - "1000円"

    Amounts are never fractional and never negative.

    Args:
        amount_str: Amount string

    Returns:
        Integer amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Remove currency symbols and suffixes
    amount_str = re.sub(r"[$€£¥円]", "", amount_str)

    # Remove thousands separators
    amount_str = amount_str.replace(",", "").replace("_", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    if not re.fullmatch(r"-?\d+", amount_str):
        raise ValueError(f"Could not parse amount '{amount_str}': expected a whole number")

    amount = int(amount_str)
    if amount < 0:
        raise ValueError(f"Amount must not be negative: {amount}")
    return amount
