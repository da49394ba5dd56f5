"""
Numeric validation helpers shared by the input value objects.

Implements the clamping policy: finite numbers are pulled into range, while
non-numeric types raise TypeError and non-finite numbers raise
ValidationError.
"""

import math
from typing import Optional

from .exceptions import ValidationError


def require_number(field: str, value: object) -> float:
    """
    Checks that a value is a finite real number and returns it as a float.

    Booleans are rejected even though they are ints in Python, since a flag
    passed where a measurement is expected is a caller bug.

    Raises:
        TypeError: If value is not an int or float
        ValidationError: If value is NaN or infinite
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{field} must be a number, not {type(value).__name__}")
    if not math.isfinite(value):
        raise ValidationError(field, value)
    return float(value)


def clamp(value: float, lower: float, upper: float) -> float:
    """Constrains value to the closed range [lower, upper]."""
    return max(lower, min(upper, value))


def clamp_field(
    field: str,
    value: object,
    lower: float,
    upper: float,
    clamped: list[str],
) -> float:
    """
    Validates and clamps a single numeric field.

    Appends the field name to clamped when the value had to be moved onto a
    bound, so callers can report non-fatal diagnostics.
    """
    number = require_number(field, value)
    bounded = clamp(number, lower, upper)
    if bounded != number:
        clamped.append(field)
    return bounded


def clamp_optional_field(
    field: str,
    value: Optional[object],
    lower: float,
    upper: float,
    clamped: list[str],
) -> Optional[float]:
    """Same as clamp_field, but passes None through untouched."""
    if value is None:
        return None
    return clamp_field(field, value, lower, upper, clamped)


def round_half_up(value: float, decimals: int = 0) -> float:
    """
    Rounds with halves going up, as the mobile client does.

    Python's round() uses banker's rounding, which would make 72.5 round
    to 72 and disagree with scores stored by the client.
    """
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor
