"""Amount parsing and minor-unit conversion utilities.

Monetary values are stored as integer cents. Every conversion from user
input rounds with ROUND_HALF_UP so the same text always yields the same
number of cents, wherever it is entered.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext
import re
from typing import Optional

from storefront.domain.errors import InvalidAmountError

CENTS = Decimal(100)

# Amounts with more integer digits than this are rejected before any arithmetic
MAX_AMOUNT_DIGITS = 4300

# Largest value a 64-bit INTEGER column holds
MAX_STORED_CENTS = 2**63 - 1


def _digit_count(value: Decimal) -> int:
    _, digits, exponent = value.as_tuple()
    return len(digits) + max(exponent, 0)


def exact_context(*values: Decimal):
    """Return a decimal context precise enough to multiply ``values`` without rounding."""
    needed = sum(_digit_count(Decimal(v)) for v in values) + 4
    return localcontext(prec=max(getcontext().prec, needed))


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # "-$12.00" keeps its sign once the symbol is gone
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")

    if is_negative:
        amount = -amount
    return amount


def round_cents(value: Decimal) -> int:
    """Round a Decimal number of cents to a whole number of cents."""
    with exact_context(value):
        return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_minor_units(value: Optional[str | int | float | Decimal]) -> int:
    """Convert a decimal currency value to integer cents.

    None and blank strings mean "no value" and convert to 0.

    Raises:
        InvalidAmountError: If the value is not a finite number
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise InvalidAmountError(f"Could not parse amount '{value}'")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # str() first: Decimal(0.285) is 0.28499999...
        amount = Decimal(str(value))
    else:
        if not value.strip():
            return 0
        try:
            amount = parse_amount(value)
        except ValueError as e:
            raise InvalidAmountError(str(e)) from e

    if not amount.is_finite():
        raise InvalidAmountError(f"Amount '{value}' is not a finite number")
    if amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidAmountError(f"Amount '{value}' is too large")

    with exact_context(amount, CENTS):
        return round_cents(amount * CENTS)


def to_stored_cents(value: Optional[str | int | float | Decimal]) -> int:
    """Convert a value to cents that fit in a database column.

    Raises:
        InvalidAmountError: If the value is not a number or is too large to store
    """
    cents = to_minor_units(value)
    if abs(cents) > MAX_STORED_CENTS:
        raise InvalidAmountError(f"Amount '{value}' is too large")
    return cents


def to_decimal_string(minor_units: int) -> str:
    """Format integer cents as a decimal string with exactly two places."""
    cents = Decimal(minor_units)
    with exact_context(cents):
        return str((cents / CENTS).quantize(Decimal("0.01")))


def format_currency(minor_units: int, symbol: str = "$") -> str:
    """Format integer cents for display, e.g. 123456 -> "$1,234.56"."""
    cents = Decimal(minor_units)
    with exact_context(cents):
        amount = cents / CENTS
        sign = "-" if amount < 0 else ""
        return f"{sign}{symbol}{abs(amount):,.2f}"
