"""Errors raised by the timesheet engine and the record store.

Every error is a recoverable, user-facing condition; ``status_code`` is the
HTTP status the router answers with.
"""
from __future__ import annotations


class TimesheetError(Exception):
    """Base exception for the work-hours service."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TimesheetError):
    """A required field is missing or malformed."""

    default_message = "All fields are required!"


class InvalidDateError(TimesheetError):
    """The entry date is rejected by the today-only policy."""

    default_message = "Only today's date may be entered"


class InvalidCredentialsError(TimesheetError):
    """Unknown email or wrong password; both look the same to the caller."""

    status_code = 401
    default_message = "Invalid email or password!"


class NotFoundError(TimesheetError):
    """The record does not exist or belongs to another user."""

    status_code = 404
    default_message = "Record not found"


class DuplicateEmailError(TimesheetError):
    status_code = 409
    default_message = "Email already registered!"


class DuplicateJobError(TimesheetError):
    status_code = 409
    default_message = "A job with this name already exists"


class DuplicateEntryError(TimesheetError):
    status_code = 409
    default_message = "An entry for this job and date already exists"


class StorageUnavailableError(TimesheetError):
    """The record store cannot be reached."""

    status_code = 503
    default_message = "Storage is unavailable"


__all__ = [
    "DuplicateEmailError",
    "DuplicateEntryError",
    "DuplicateJobError",
    "InvalidCredentialsError",
    "InvalidDateError",
    "NotFoundError",
    "StorageUnavailableError",
    "TimesheetError",
    "ValidationError",
]
