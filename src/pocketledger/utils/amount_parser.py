"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

from pocketledger.config import AMOUNT_QUANTUM, MAX_AMOUNT


def to_amount(value: Decimal | int | str) -> Decimal:
    """Convert a value to a two-place Decimal.

    Floats are rejected so binary rounding error never enters the ledger.
    Magnitudes above ``MAX_AMOUNT`` are rejected because the store cannot
    hold them exactly.

    Raises:
        ValueError: If the value is a float, not a finite number, or too large
    """
    if isinstance(value, float):
        raise ValueError(f"Amount {value!r} must be a Decimal, int or string, not float")
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Could not parse amount '{value}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Amount '{value}' is not a finite number")
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount '{value}' exceeds the largest storable amount {MAX_AMOUNT}")
    try:
        amount = amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Could not round amount '{value}': {e}")
    # 999999999999.995 rounds up past the limit
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount '{value}' exceeds the largest storable amount {MAX_AMOUNT}")
    return amount


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "€123.45"
    - "-123.45"
    - "-€123.45"
    - "1,234.56"
    - "1.234,56" (comma as decimal separator)
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount with two fractional digits

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str).strip()

    # A trailing ",dd" group means comma is the decimal separator
    if re.search(r",\d{1,2}$", amount_str):
        amount_str = amount_str.replace(".", "").replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    amount = to_amount(amount_str.strip())
    return -amount if is_negative else amount
