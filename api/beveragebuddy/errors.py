"""
Domain errors raised by the data-access layer.

Nothing here is retried or swallowed: callers (the HTTP layer included) get
these exceptions unmodified.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .validation import Violation


class BeverageBuddyError(Exception):
    """Base class for all application errors."""


class ValidationError(BeverageBuddyError):
    """An entity broke one or more of its field constraints."""

    def __init__(self, violations: List["Violation"]):
        self.violations = list(violations)
        details = ", ".join(f"{v.field}: {v.rule}" for v in self.violations)
        super().__init__(f"Validation failed ({details})")


class StorageError(BeverageBuddyError):
    """A query or commit failed in the underlying database."""


class NotFoundError(BeverageBuddyError):
    """No row exists with the requested id."""
