"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import AvailabilityResolver, collect_conflicts
from .exceptions import (
    EventDataError,
    FreeTimeFinderError,
    InvalidMeetingRequestError,
    InvalidTimeRangeError,
)
from .models import (
    DAY_LENGTH,
    END_OF_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeRange,
)
from .range_set import combine_range_sets, extract_gaps, flatten_ranges

__all__ = [
    "AvailabilityResolver",
    "collect_conflicts",
    "flatten_ranges",
    "combine_range_sets",
    "extract_gaps",
    "TimeRange",
    "Event",
    "MeetingRequest",
    "START_OF_DAY",
    "END_OF_DAY",
    "DAY_LENGTH",
    "WHOLE_DAY",
    "FreeTimeFinderError",
    "InvalidTimeRangeError",
    "InvalidMeetingRequestError",
    "EventDataError",
]
