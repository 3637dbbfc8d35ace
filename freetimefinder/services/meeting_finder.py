"""
Application services for finding meeting ranges on a day.

The service fetches the day's events via an event source adapter and
delegates the availability calculation to the domain-level
``AvailabilityResolver``. The event source is a simple protocol so the CLI
stays thin and tests can plug in a stub.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from pendulum import Date

from ..domain.availability import AvailabilityResolver
from ..domain.models import Event, MeetingRequest, TimeRange

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the event source behaviour needed by the service."""

    async def get_events(self, day: Date) -> Iterable[Event]:
        """Return all events scheduled on ``day``."""


class MeetingFinderService:
    """
    Orchestrates event retrieval and availability resolution.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        resolver: AvailabilityResolver | None = None,
    ) -> None:
        self._event_source = event_source
        self._resolver = resolver or AvailabilityResolver()

    async def find_ranges(self, *, day: Date, request: MeetingRequest) -> List[TimeRange]:
        """
        Retrieve the day's events and compute the ranges that fit ``request``.
        """
        events = await self.fetch_events(day=day)

        ranges = self.calculate_ranges(events=events, request=request)
        logger.info("Found %d range(s) of at least %d minutes", len(ranges), request.duration)
        return ranges

    async def fetch_events(self, *, day: Date) -> List[Event]:
        """Fetch the events scheduled on ``day``."""
        events = list(await self._event_source.get_events(day))
        logger.info("Fetched %d event(s) for %s", len(events), day.to_date_string())
        return events

    def calculate_ranges(
        self,
        *,
        events: Iterable[Event],
        request: MeetingRequest,
    ) -> List[TimeRange]:
        """Calculate available ranges from event data."""
        return self._resolver.query(events, request)
