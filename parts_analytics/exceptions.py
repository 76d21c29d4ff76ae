"""
Analytics Errors
================
Exception types raised by the analytics engine and the error code table
used to name structurally invalid input.

Sparse data (no history, zero consumption) is never an error. Only input
that breaks the caller contract is rejected.
"""

from typing import Any


# Error code definitions
ERROR_CODES = {
    # Part fields (INP)
    "INP001": "Negative current stock",
    "INP002": "Negative minimum stock",
    "INP005": "Missing part id",
    "INP006": "Stock or quantity is not an integer",

    # Usage events (INP)
    "INP003": "Usage quantity must be positive",
    "INP004": "Missing usage timestamp",
    "INP007": "Usage timestamp is not a date",
}


def get_error_description(code: str) -> str:
    """Get description for an error code."""
    return ERROR_CODES.get(code, "Unknown error code")


class AnalyticsError(Exception):
    """Base class for analytics engine errors."""


class ConfigurationError(AnalyticsError):
    """Analytics settings are incoherent."""


class InvalidInputError(AnalyticsError):
    """A part or usage event violates the input contract."""

    def __init__(self, part_id: Any, field: str, value: Any = None, code: str = ""):
        self.part_id = part_id
        self.field = field
        self.value = value
        self.code = code
        detail = f"{code}: {get_error_description(code)}" if code else "invalid value"
        super().__init__(
            f"Invalid input for part {part_id!r}: field '{field}' = {value!r} ({detail})"
        )
