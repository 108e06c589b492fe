"""Domain errors raised by the Sumly services.

Callers are expected to show ``str(error)`` to the user and leave their
state untouched; every service call either fully succeeds or fully fails.
"""

from enum import Enum


class SumlyError(Exception):
    """Base class for all errors raised by Sumly."""


class ValidationError(SumlyError, ValueError):
    """A required field is missing or empty."""


class DuplicateNameError(SumlyError):
    """A category with the same name already exists."""


class NotFoundError(SumlyError, LookupError):
    """The referenced row does not exist."""


class StorageError(SumlyError):
    """The backing store could not be opened, initialized or written."""


class ConstraintKind(Enum):
    """Kind of integrity constraint reported by the storage layer."""

    UNIQUE = "unique"
    PRIMARY_KEY = "primary_key"
    FOREIGN_KEY = "foreign_key"
    NOT_NULL = "not_null"
    CHECK = "check"
    OTHER = "other"


class ConstraintViolation(StorageError):
    """An integrity constraint rejected a write.

    Attributes:
        kind: Which constraint was violated.
    """

    def __init__(self, message: str, kind: ConstraintKind):
        super().__init__(message)
        self.kind = kind
