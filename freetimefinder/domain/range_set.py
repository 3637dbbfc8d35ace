"""
Operations on start-ordered sequences of time ranges.

A *flat* range set is sorted by start time and no two of its ranges overlap.
Ranges that merely touch (one ends where the next starts) stay separate.
"""

from typing import Iterable, Iterator, List, Optional, Sequence

from .models import DAY_LENGTH, END_OF_DAY, START_OF_DAY, TimeRange


def _coalesce(ranges: Iterable[TimeRange]) -> Iterator[TimeRange]:
    """
    Yield the flat range set of start-ordered ``ranges``.

    A single open range accumulates overlapping input. It is yielded when a
    range starting at or after its end (and not at its start) arrives, and
    once more at exhaustion.
    """
    open_range: Optional[TimeRange] = None

    for raw_range in ranges:
        if open_range is None:
            open_range = raw_range
        elif raw_range.start < open_range.end or raw_range.start == open_range.start:
            # Input is start-ordered, so raw_range.start >= open_range.start.
            # The equal-start test covers a zero-length open range followed by a
            # range with the same start: start < end alone would keep both, and
            # combining would then depend on argument order.
            open_range = TimeRange(open_range.start, max(open_range.end, raw_range.end))
        else:
            yield open_range
            open_range = raw_range

    if open_range is not None:
        yield open_range


def flatten_ranges(ranges: Iterable[TimeRange]) -> List[TimeRange]:
    """
    Merge overlapping ranges into the minimal non-overlapping set.

    Args:
        ranges: Ranges ordered by start time. The order is trusted, not
            re-established.

    Returns:
        A flat range set covering the same minutes.

    Example:
        [09:00-10:00, 09:30-11:00, 11:00-12:00] -> [09:00-11:00, 11:00-12:00]
    """
    return list(_coalesce(ranges))


def _merge_by_start(
    set_a: Sequence[TimeRange],
    set_b: Sequence[TimeRange]
) -> Iterator[TimeRange]:
    """Yield the ranges of two start-ordered sequences in start order."""
    index_a = index_b = 0

    while index_a < len(set_a) and index_b < len(set_b):
        if set_a[index_a].start <= set_b[index_b].start:
            yield set_a[index_a]
            index_a += 1
        else:
            yield set_b[index_b]
            index_b += 1

    yield from set_a[index_a:]
    yield from set_b[index_b:]


def combine_range_sets(
    set_a: Sequence[TimeRange],
    set_b: Sequence[TimeRange]
) -> List[TimeRange]:
    """
    Union two flat range sets into a single flat range set.

    Ties on start time take the range from ``set_a`` first.
    """
    return list(_coalesce(_merge_by_start(set_a, set_b)))


def extract_gaps(
    conflicts: Iterable[TimeRange],
    min_duration: int
) -> List[TimeRange]:
    """
    Return the free ranges of the day around a flat conflict set.

    Only gaps of at least ``min_duration`` minutes are returned. The gap
    after the last conflict runs to the end of the day.

    Example:
        Conflicts: [01:00-02:00]
        Result (30 min): [00:00-01:00, 02:00-24:00]
    """
    gaps: List[TimeRange] = []
    cursor = START_OF_DAY

    for conflict in conflicts:
        if conflict.start - cursor >= min_duration:
            gaps.append(TimeRange.from_start_end(cursor, conflict.start, inclusive=False))
        # The conflict consumes its time even when the gap before it was too short
        cursor = conflict.end

    if DAY_LENGTH - cursor >= min_duration:
        gaps.append(TimeRange.from_start_end(cursor, END_OF_DAY, inclusive=True))

    return gaps
