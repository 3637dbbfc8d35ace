"""
Domain-specific exception hierarchy for the free-time finder.
"""


class FreeTimeFinderError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeRangeError(FreeTimeFinderError, ValueError):
    """Raised when a time range would start after it ends or leave the day."""


class InvalidMeetingRequestError(FreeTimeFinderError, ValueError):
    """Raised when a meeting request violates its preconditions."""


class EventDataError(FreeTimeFinderError):
    """Raised when event data cannot be read or parsed."""
