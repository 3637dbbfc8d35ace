"""
Domain models for minute ranges, events and meeting requests.

All times are integer minute offsets within a single day.
"""

from dataclasses import dataclass, field
from operator import attrgetter
from typing import FrozenSet, Iterable, Union

from .exceptions import InvalidMeetingRequestError, InvalidTimeRangeError

START_OF_DAY = 0
END_OF_DAY = 24 * 60 - 1  # last minute of the day
DAY_LENGTH = 24 * 60


def format_minute(minute: int) -> str:
    """Render a minute offset as HH:MM (the end of the day renders as 24:00)."""
    hours, minutes = divmod(minute, 60)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable range of minutes within one day.

    The end is exclusive. Invariant: 0 <= start <= end <= DAY_LENGTH.
    Zero-length ranges are allowed.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidTimeRangeError(
                f"Start minute {self.start} must not be after end minute {self.end}"
            )
        if self.start < START_OF_DAY or self.end > DAY_LENGTH:
            raise InvalidTimeRangeError(
                f"Range {self.start}-{self.end} is outside the day "
                f"({START_OF_DAY}-{DAY_LENGTH})"
            )

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool) -> "TimeRange":
        """
        Create a range from two minutes.

        Args:
            start: First minute of the range
            end: Last minute of the range
            inclusive: Whether ``end`` itself belongs to the range. Use this
                with END_OF_DAY to build a range reaching the end of the day.
        """
        return cls(start=start, end=end + 1 if inclusive else end)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        """Create a range starting at ``start`` lasting ``duration`` minutes."""
        return cls(start=start, end=start + duration)

    @property
    def duration(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    @property
    def ends_at_end_of_day(self) -> bool:
        """Whether the range runs up to the literal end of the day."""
        return self.end == DAY_LENGTH

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range shares at least one minute with another."""
        return self.start < other.end and other.start < self.end

    def touches(self, other: "TimeRange") -> bool:
        """Check if one range ends exactly where the other starts."""
        return self.end == other.start or other.end == self.start

    def contains(self, other: Union[int, "TimeRange"]) -> bool:
        """
        Check if a minute or a whole range lies within this range.

        A zero-length range is contained at its own boundaries.
        """
        if isinstance(other, TimeRange):
            return self.start <= other.start and other.end <= self.end
        return self.start <= other < self.end

    def __str__(self) -> str:
        return f"{format_minute(self.start)} - {format_minute(self.end)}"


WHOLE_DAY = TimeRange.from_start_end(START_OF_DAY, END_OF_DAY, inclusive=True)

# Sort keys
ORDER_BY_START = attrgetter("start")
ORDER_BY_END = attrgetter("end")


@dataclass(frozen=True)
class Event:
    """
    A scheduled event on the day.

    The name is opaque to the availability calculation.
    """
    name: str
    when: TimeRange
    attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "attendees", as_attendee_set(self.attendees))


@dataclass(frozen=True)
class MeetingRequest:
    """
    A request for a meeting of ``duration`` minutes.

    Mandatory and optional attendee sets may overlap.
    """
    duration: int
    attendees: FrozenSet[str] = field(default_factory=frozenset)
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if isinstance(self.duration, bool) or not isinstance(self.duration, int):
            raise InvalidMeetingRequestError(
                f"Duration must be a whole number of minutes, got {self.duration!r}"
            )
        if self.duration < 0:
            raise InvalidMeetingRequestError(
                f"Duration must not be negative, got {self.duration}"
            )
        try:
            object.__setattr__(self, "attendees", as_attendee_set(self.attendees))
            object.__setattr__(
                self, "optional_attendees", as_attendee_set(self.optional_attendees)
            )
        except TypeError as exc:
            raise InvalidMeetingRequestError(str(exc)) from exc


def as_attendee_set(attendees: Iterable[str]) -> FrozenSet[str]:
    """
    Return ``attendees`` as a hashed set for membership tests.

    Raises:
        TypeError: If a single string is given instead of a collection
    """
    if isinstance(attendees, frozenset):
        return attendees
    if isinstance(attendees, str):
        raise TypeError(
            f"Attendees must be a collection of identifiers, got the string {attendees!r}"
        )
    return frozenset(attendees)
