"""Error variants raised by the data-access layer.

The HTTP boundary (``jobly.app``) owns the mapping from variant to status
code; nothing here knows about transports.
"""

from __future__ import annotations


class JoblyError(Exception):
    """Base error for the service."""

    default_message = "Jobly error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    """Caller supplied input that cannot be acted on."""

    default_message = "Bad Request"


class EmptyUpdateError(BadRequestError):
    """An update was requested with no fields to set."""

    default_message = "No data"


class InvalidRangeError(BadRequestError):
    """A numeric filter range is self-contradictory."""

    default_message = "Invalid range"


class DuplicateError(BadRequestError):
    """A row with the same unique key already exists."""

    default_message = "Duplicate"


class NotFoundError(JoblyError):
    default_message = "Not Found"


class UnauthorizedError(JoblyError):
    default_message = "Unauthorized"
