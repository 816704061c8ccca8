"""
Error taxonomy and the tagged result returned by store operations.

Every store operation answers with either ``Ok(data)`` or ``Err(error)``.
Both serialize to the ``{"data": ..., "error": ...}`` shape the frontend
expects, with exactly one of the two fields populated.
"""

from dataclasses import dataclass
from typing import Any, Union


class JournalError(Exception):
    """Base class for every expected failure in the journal backend."""

    kind = "error"
    status_code = 500


class ValidationError(JournalError):
    """Bad input shape, enum value or empty field."""

    kind = "validation"
    status_code = 400


class NotFoundError(JournalError):
    """The referenced entry does not exist (anymore)."""

    kind = "not_found"
    status_code = 404


class StorageError(JournalError):
    """The database rejected or failed the statement."""

    kind = "storage"
    status_code = 500


class GenerationError(JournalError):
    """The language model call failed: network, HTTP status or shape mismatch."""

    kind = "generation"
    status_code = 500

    def __init__(self, message: str, details: str = ""):
        super().__init__(message)
        self.details = details or message


@dataclass(frozen=True)
class Ok:
    data: Any

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self):
        return self.data

    def to_dict(self) -> dict:
        return {"data": self.data, "error": None}


@dataclass(frozen=True)
class Err:
    error: JournalError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error

    def to_dict(self) -> dict:
        return {"data": None, "error": str(self.error)}


Result = Union[Ok, Err]
