"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Numeric = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value: Union[Numeric, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return ZERO

    if isinstance(value, Decimal):
        return value

    try:
        # Floats go through str to keep the shortest repr (0.1 -> Decimal("0.1"))
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def parse_decimal(value: Numeric) -> Decimal:
    """
    Strict conversion for values read from the catalogs.

    Unlike to_decimal, a malformed value is an error rather than zero.

    Raises:
        ValueError: value is not numeric, is a bool, or is NaN/Infinity
    """
    if isinstance(value, bool):
        raise ValueError(f"not a decimal amount: {value!r}")
    try:
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"not a decimal amount: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"not a finite amount: {value!r}")
    return result


def round_money(value: Numeric) -> Decimal:
    """Round monetary value to cents (ROUND_HALF_UP)."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def subtract(a: Numeric, b: Numeric) -> Decimal:
    """Safe subtraction of monetary values."""
    return to_decimal(a) - to_decimal(b)


def multiply(value: Numeric, factor: Numeric) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def discount_multiplier(discount_pct: Numeric) -> Decimal:
    """
    Price multiplier for a fractional discount.

    ``discount_pct`` is a fraction in [0, 1]: 0.1 means 10% off, so the
    multiplier is 0.9.
    """
    return subtract(ONE, discount_pct)


def line_total(quantity: int, unit_price: Numeric, discount_pct: Numeric = ZERO) -> Decimal:
    """quantity * unit_price * (1 - discount_pct), unrounded."""
    return multiply(multiply(unit_price, quantity), discount_multiplier(discount_pct))
