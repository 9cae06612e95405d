"""Errors raised by the clinic store.

Every violation is detected before the store writes anything, so a raised
error always means the store is unchanged.
"""

from typing import Any, Optional, Sequence


class StoreError(Exception):
    """Base class for clinic store errors."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        constraint: Optional[str] = None,
        fields: Sequence[str] = (),
        value: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.table = table
        self.constraint = constraint
        self.fields = tuple(fields)
        self.value = value

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "table": self.table,
            "constraint": self.constraint,
            "fields": list(self.fields),
        }


class UniquenessViolation(StoreError):
    """A unique field, field tuple or primary key is already taken."""


class ReferenceViolation(StoreError):
    """A reference does not resolve, or a RESTRICT policy blocks the change."""


class ConstraintViolation(StoreError):
    """A field-level check failed (named check, required field, enum domain, width)."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class RecordNotFound(StoreError, LookupError):
    """No row with the given identity."""
