"""
Core business logic for finding the free ranges of a day.

Pure domain logic: no calendar access, no files, no network.
"""

import logging
from typing import AbstractSet, Dict, Iterable, List

from .models import Event, MeetingRequest, TimeRange, as_attendee_set
from .range_set import combine_range_sets, extract_gaps, flatten_ranges

logger = logging.getLogger(__name__)


def attendees_intersect(
    event_attendees: Iterable[str],
    requested_attendees: AbstractSet[str]
) -> bool:
    """Check whether any event attendee is one of the requested attendees."""
    return any(attendee in requested_attendees for attendee in event_attendees)


def collect_conflicts(
    events: Iterable[Event],
    attendees: Iterable[str]
) -> Dict[int, TimeRange]:
    """
    Collect the ranges of all events attended by any of ``attendees``.

    Returns a mapping from start minute to the conflicting range, ordered by
    start. When two conflicting events start at the same minute only the
    longer range is kept, since it covers the shorter one.
    """
    requested = as_attendee_set(attendees)
    conflicts: Dict[int, TimeRange] = {}

    if not requested:
        return conflicts

    for event in events:
        if not attendees_intersect(event.attendees, requested):
            continue

        when = event.when
        existing = conflicts.get(when.start)
        if existing is None or when.duration > existing.duration:
            conflicts[when.start] = when

    return dict(sorted(conflicts.items()))


class AvailabilityResolver:
    """
    Finds the ranges of a day in which a requested meeting can take place.

    Algorithm:
    1. Collect the conflicts of mandatory and of optional attendees
    2. Flatten each conflict set
    3. Combine both into one conflict set
    4. Return the gaps of the combined set that fit the meeting
    5. If there are none, return the gaps honoring mandatory attendees only,
       unless nobody is mandatory, in which case nothing fits
    """

    def query(self, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """
        Find all ranges at least ``request.duration`` long that work.

        Args:
            events: All events scheduled on the day (read only)
            request: The meeting request

        Returns:
            Start-ordered, non-overlapping list of ranges. Empty when no time
            works, which is not an error.
        """
        events = list(events)

        mandatory_conflicts = flatten_ranges(
            collect_conflicts(events, request.attendees).values()
        )
        optional_conflicts = flatten_ranges(
            collect_conflicts(events, request.optional_attendees).values()
        )
        combined_conflicts = combine_range_sets(mandatory_conflicts, optional_conflicts)

        logger.debug(
            "Conflicts: %d mandatory, %d optional, %d combined",
            len(mandatory_conflicts),
            len(optional_conflicts),
            len(combined_conflicts),
        )

        combined_ranges = extract_gaps(combined_conflicts, request.duration)
        if combined_ranges:
            return combined_ranges

        # Optional attendees alone never justify ignoring everybody
        if not request.attendees:
            logger.debug("No range fits the optional attendees and nobody is mandatory")
            return []

        logger.debug("Falling back to mandatory attendees only")
        return extract_gaps(mandatory_conflicts, request.duration)
