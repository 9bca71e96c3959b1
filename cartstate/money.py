"""
Money Utilities - tolerant numeric coercion for cart values.

Prices may arrive as strings, floats or garbage. Every helper here degrades
to zero instead of raising, so one malformed item never breaks a total.
Strings are read like a browser reads them: the leading number counts and
trailing text is ignored ("10 USD" -> 10, "2 pcs" -> 2).
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")

# Values whose magnitude needs more digits than this are treated as garbage
MAX_DIGITS = 18

_DECIMAL_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _in_range(value: Decimal) -> bool:
    if not value.is_finite():
        return False
    if value.is_zero():
        return True
    return -MAX_DIGITS <= value.adjusted() <= MAX_DIGITS


def to_decimal(value: Any) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid/
        non-finite/out of range
    """
    if value is None or isinstance(value, bool):
        return ZERO

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            # Via str to avoid binary float artifacts
            result = Decimal(str(value))
        elif isinstance(value, str):
            match = _DECIMAL_PREFIX.match(value)
            if match is None:
                return ZERO
            result = Decimal(match.group(1))
        elif isinstance(value, int):
            if abs(value) >= 10 ** (MAX_DIGITS + 1):
                return ZERO
            result = Decimal(value)
        else:
            result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO

    return result if _in_range(result) else ZERO


def to_quantity(value: Any) -> int:
    """
    Convert any value to an integer quantity safely.

    Only leading digits of a string count ("2.7" -> 2, "1e9" -> 1).
    Numbers are truncated toward zero. Unparsable or huge values become 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        match = _INTEGER_PREFIX.match(value)
        if match is None or len(match.group(1).lstrip("+-")) > MAX_DIGITS:
            return 0
        return int(match.group(1))
    if isinstance(value, int):
        return value if abs(value) < 10 ** MAX_DIGITS else 0
    return int(to_decimal(value))


def to_float(value: Any) -> float:
    """
    Convert a monetary value to float for JSON serialization.

    Use only at UI/API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))
