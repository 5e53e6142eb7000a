from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""


class InvalidTimeFormat(ValidationError):
    """Raised when a clock time is not a valid H:MM / HH:MM value."""


class InvertedTimeRange(ValidationError):
    """Raised when an end time lies before its start time on the same day."""


class AggregationDataError(DomainError):
    """Raised when a stored absence cannot be aggregated (e.g. inverted range).

    The caller's input is fine here; the stored data is not.
    """

    def __init__(self, message: str, *, absence_id: Optional[str] = None):
        super().__init__(message)
        self.absence_id = absence_id


class InvalidReference(DomainError):
    """Raised when a foreign key (employeeId) does not resolve to a live record."""


class NotFound(DomainError):
    """Raised when the target of an update/delete does not exist."""


class BackendError(Exception):
    """Base exception for failures of the persistence backend itself."""


class TransportError(BackendError):
    """Non-2xx response (or network failure) from the remote backend."""

    def __init__(self, status: Optional[int], message: str):
        super().__init__(f"API {status}: {message}" if status is not None else f"API unreachable: {message}")
        self.status = status
        self.message = message


class PersistenceError(BackendError):
    """Local document store could not be read or written."""
