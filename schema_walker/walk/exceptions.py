"""
Walk module exceptions.

Custom exceptions for walk persistence and result decoding, kept apart
from builtins like ValueError so callers can tell them from bugs.
"""

from __future__ import annotations


class WalkError(Exception):
    """Base exception for all walk errors."""

    pass


class WalkDecodeError(WalkError):
    """Raised when a persisted walk cannot be deserialized."""

    pass


class RecordDecodeError(WalkError):
    """Raised when a result row does not have the expected shape.

    A single bad row fails the whole query result; partial results are
    never reported.
    """

    def __init__(self, message: str, row: object | None = None) -> None:
        super().__init__(message)
        self.row = row
