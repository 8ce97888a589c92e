"""
Shared exceptions for the schedule extraction pipeline.
"""

from typing import Any


class ScheduleExtractionError(Exception):
    """Base class for every failure of the extraction pipeline."""

    pass


class InvalidInputError(ScheduleExtractionError):
    """Raised when the selected file is not an accepted PDF document."""

    pass


class ReadError(ScheduleExtractionError):
    """Raised when the local document read fails or is aborted."""

    pass


class ServiceError(ScheduleExtractionError):
    """Raised when the extraction service answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ExtractionTimeoutError(ScheduleExtractionError, TimeoutError):
    """Raised when the extraction service does not answer within the bound."""

    pass


class EmptyResponseError(ScheduleExtractionError):
    """Raised when the service returns no usable content."""

    pass


class MalformedResponseError(ScheduleExtractionError):
    """Raised when the completion cannot be decoded into a schedule."""

    pass


class NoMatchCondition(ScheduleExtractionError):
    """
    Decoding succeeded but no shift matched the request.

    Not a hard failure: it is reported on the same channel as the errors so
    callers show a single message and no schedule.
    """

    def __init__(self, message: str, schedule: Any = None):
        super().__init__(message)
        self.schedule = schedule


class ExtractionInProgressError(ScheduleExtractionError):
    """Raised when an extraction is triggered while another is outstanding."""

    pass
