"""Errors raised by the booking form."""


class BookingError(Exception):
    """Base class for booking failures surfaced to the tutor."""


class ValidationError(BookingError):
    """The form cannot be submitted as filled in."""

    def __init__(self, message: str, missing_fields: tuple[str, ...] = ()):
        super().__init__(message)
        self.missing_fields = missing_fields


class SubmissionError(BookingError):
    """The booking endpoint rejected the request or could not be reached."""
