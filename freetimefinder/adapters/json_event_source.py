"""
Event source that reads a day's events from a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pendulum
from pendulum import Date

from ..domain.exceptions import EventDataError
from ..domain.models import DAY_LENGTH, Event, TimeRange

logger = logging.getLogger(__name__)

END_OF_DAY_MARKER = "24:00"


def parse_clock_time(value: str) -> int:
    """
    Convert a ``HH:mm`` clock time to a minute offset within the day.

    ``24:00`` denotes the end of the day.

    Raises:
        ValueError: If the value is not a valid clock time
    """
    value = value.strip()
    if value == END_OF_DAY_MARKER:
        return DAY_LENGTH

    parsed = pendulum.from_format(value, "HH:mm")
    return parsed.hour * 60 + parsed.minute


def normalize_attendee(identifier: str) -> str:
    """Email addresses are compared case-insensitively, other ids verbatim."""
    identifier = identifier.strip()
    return identifier.lower() if "@" in identifier else identifier


class JsonEventSource:
    """
    Loads events from a JSON file.

    The file holds either a list of events that applies to every day, or a
    mapping of ISO dates (YYYY-MM-DD) to lists of events. Each event looks
    like::

        {"name": "Standup", "start": "09:00", "end": "09:15",
         "attendees": ["alice@example.com", "bob@example.com"]}
    """

    def __init__(self, path: Path):
        """
        Load and validate the event file.

        Args:
            path: Path to the JSON file

        Raises:
            EventDataError: If the file is missing or malformed
        """
        self.path = path
        self._events_by_day: Dict[str, List[Event]] = {}
        self._every_day: List[Event] | None = None
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            raise EventDataError(f"Event file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise EventDataError(f"Invalid JSON in {self.path}: {exc}") from exc

        if isinstance(data, list):
            self._every_day = self._parse_events(data, context="events")
        elif isinstance(data, dict):
            for day, raw_events in data.items():
                try:
                    key = pendulum.from_format(day, "YYYY-MM-DD").to_date_string()
                except ValueError as exc:
                    raise EventDataError(f"Invalid date key '{day}' in {self.path}") from exc
                if not isinstance(raw_events, list):
                    raise EventDataError(f"Events for {day} must be a list")
                self._events_by_day[key] = self._parse_events(raw_events, context=day)
        else:
            raise EventDataError(
                "Event file must contain a list of events or a mapping of dates to events."
            )

        logger.debug("Loaded events from %s", self.path)

    def _parse_events(self, raw_events: List[Any], context: str) -> List[Event]:
        return [
            self._parse_event(raw, context=f"{context}[{index}]")
            for index, raw in enumerate(raw_events)
        ]

    @staticmethod
    def _parse_event(raw: Any, context: str) -> Event:
        """Build an Event from its JSON representation."""
        if not isinstance(raw, dict):
            raise EventDataError(f"{context}: event must be an object")

        try:
            start = parse_clock_time(raw["start"])
            end = parse_clock_time(raw["end"])
            attendees = raw.get("attendees", [])
            if not isinstance(attendees, list):
                raise ValueError("attendees must be a list")
            return Event(
                name=str(raw.get("name", "")),
                when=TimeRange(start=start, end=end),
                attendees=frozenset(normalize_attendee(a) for a in attendees),
            )
        except KeyError as exc:
            raise EventDataError(f"{context}: missing field {exc}") from exc
        except (AttributeError, TypeError, ValueError) as exc:
            # InvalidTimeRangeError is a ValueError
            raise EventDataError(f"{context}: {exc}") from exc

    async def get_events(self, day: Date) -> List[Event]:
        """
        Return the events scheduled on ``day``.

        A flat event list applies to every day. Days missing from a dated
        file have no events.
        """
        if self._every_day is not None:
            return list(self._every_day)
        return list(self._events_by_day.get(day.to_date_string(), []))
