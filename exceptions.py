"""
Custom exceptions for the Jobly data layer

Store-level failures raised by asyncpg (constraint violations, lost
connections) are not wrapped here; they propagate unchanged unless a
repository translates them into one of the domain errors below.
"""


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    def __init__(self, message: str, details: dict | None = None):
        """Initialize exception with message and optional details.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(JoblyError):
    """Raised when input is malformed, contradictory, or unsafe to build SQL from."""

    pass


class NotFoundError(JoblyError):
    """Raised when a keyed lookup, update or delete matches no row."""

    pass


class DuplicateError(JoblyError):
    """Raised when creating a record whose key already exists."""

    pass
