"""
Exceptions module for the PHRI System.

Defines the error taxonomy raised by the risk engine. Numeric fields that are
merely out of range are clamped and never raise; only values that cannot be
clamped (NaN, infinity) or categorical values outside their declared set are
surfaced to the caller.
"""

from typing import Iterable


class PHRIError(ValueError):
    """Base class for all PHRI engine errors."""


class ValidationError(PHRIError):
    """
    Raised when a numeric field cannot be brought into its domain.

    Clamping is undefined for NaN and infinite values, so these are rejected
    rather than coerced into a misleading risk score.

    Attributes:
        field: Name of the offending input field
        value: The rejected value
    """

    def __init__(self, field: str, value: object, reason: str = "must be a finite number"):
        self.field = field
        self.value = value
        super().__init__(f"{field} {reason} (got {value!r})")


class InvalidEnumError(PHRIError):
    """
    Raised when a categorical field is not one of its allowed values.

    Attributes:
        field: Name of the offending input field
        value: The rejected value
        allowed: The values that would have been accepted
    """

    def __init__(self, field: str, value: object, allowed: Iterable[str]):
        self.field = field
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"{field} must be one of {', '.join(self.allowed)} (got {value!r})"
        )
