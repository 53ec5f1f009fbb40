"""
Numeric coercion and currency rounding helpers.

Form input arrives as a mix of numbers, numeric strings and blanks. These
helpers read whatever numeric value is present and never raise.
"""

import math
import re
from typing import Any, Optional

# Leading numeric prefix, e.g. "40000", " 12.5", "3e2", "250 GBP"
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a numeric value from form input.

    Numbers are returned as floats. Strings are read up to the end of their
    leading numeric prefix ("250 GBP" -> 250.0). Anything else, including
    booleans, NaN and infinities, returns None.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            return None
        try:
            number = float(match.group(1))
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def number_or_default(value: Any, default: float) -> float:
    """Parse a value, falling back to ``default`` when unparsable or zero."""
    number = parse_number(value)
    return number if number else default


def coerce_number(value: Any, default: float = 0.0) -> float:
    """
    Parse a value, using ``default`` only when the value is absent.

    A value that is present but unparsable coerces to 0.
    """
    if value is None:
        return default
    number = parse_number(value)
    return number if number is not None else 0.0


def round_currency(value: float) -> float:
    """Round half-up to 2 decimal places (whole cents)."""
    scaled = value * 100
    # Values too large to scale already have no fractional pennies
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / 100


def sum_currency(values) -> float:
    """Sum monetary values and round the result."""
    return round_currency(sum(values, 0.0))
