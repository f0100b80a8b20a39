"""Shared constants and exceptions."""

from typing import Final

INVALID_INDEX: Final = None
"""Marks a missing entry in connectivity tables and address lookups."""


class InternalError(RuntimeError):
    """Raised when an internal consistency condition does not hold."""