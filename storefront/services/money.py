"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout. Prices are always
major units of a single currency (USD).
"""
from decimal import Decimal, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Any, Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Finite Decimal representation of the value, or Decimal("0") if
        None, unparseable, NaN or infinite
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ZERO

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            # Go through str to preserve the printed precision
            result = Decimal(str(value))
        elif isinstance(value, str):
            result = Decimal(value.strip())
        else:
            result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO

    if not result.is_finite():
        return ZERO
    return result


def to_positive_int(value: Any, fallback: int = 1) -> int:
    """
    Coerce a value to a floored positive integer.

    Non-numeric, non-finite or non-positive values yield ``fallback``.
    """
    decimal_value = to_decimal(value)
    floored = int(decimal_value.to_integral_value(rounding=ROUND_FLOOR))
    return floored if floored > 0 else fallback


def to_int(value: Any) -> int:
    """Truncate a value to an int; non-numeric or non-finite values yield 0."""
    return int(to_decimal(value).to_integral_value(rounding=ROUND_DOWN))


def to_cents(value: Number) -> int:
    """
    Convert decimal amount to minor units (cents).

    Used for payment APIs that expect integer minor units.

    Args:
        value: Amount in major units (e.g., 20.50)

    Returns:
        Amount in minor units (e.g., 2050)
    """
    decimal_value = to_decimal(value)
    return int((decimal_value * 100).to_integral_value(rounding=ROUND_HALF_UP))


def round_money(value: Number) -> Decimal:
    """Round monetary value to two decimal places (half-up), whatever its magnitude."""
    decimal_value = to_decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the two cents digits
        ctx.prec = max(ctx.prec, decimal_value.adjusted() + 4)
        return decimal_value.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_amount(value: Number) -> str:
    """Two-decimal fixed string, e.g. ``"55.00"``."""
    return f"{round_money(value):.2f}"


def format_money(value: Number) -> str:
    """Format monetary value for display, e.g. ``"$1,234.50"``."""
    amount = round_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization or external APIs.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def plain(value: Number) -> str:
    """Render a Decimal without exponent or trailing zeros (``20.0`` -> ``"20"``)."""
    decimal_value = to_decimal(value)
    if decimal_value == decimal_value.to_integral_value():
        return str(int(decimal_value))
    return format(decimal_value.normalize(), "f")
