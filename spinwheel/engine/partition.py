"""
partition.py
------------
Turns the ordered segment list into contiguous angular intervals.

Segment i owns [start, end) with span = weight / total * FULL_TURN. Intervals
are laid out clockwise from angle 0 in list order; the last end is pinned to
FULL_TURN so the intervals tile [0, FULL_TURN) exactly.
"""
import math

from spinwheel.engine.errors import InvalidConfiguration
from spinwheel.utils.config import FULL_TURN


class Interval:
    __slots__ = ("segment", "start", "end")

    def __init__(self, segment, start, end):
        self.segment = segment
        self.start = start
        self.end = end

    @property
    def span(self):
        return self.end - self.start

    @property
    def middle(self):
        return (self.start + self.end) / 2

    def contains(self, angle):
        # half-open: a boundary belongs to the interval that starts there
        return self.start <= angle < self.end

    def __repr__(self):
        return f"Interval({self.segment.label!r}, {self.start:.6f}, {self.end:.6f})"


def validate_segments(segments):
    """Raise InvalidConfiguration unless every weight is a finite positive number."""
    if not segments:
        raise InvalidConfiguration("a wheel needs at least one segment")

    seen_ids = set()
    for segment in segments:
        weight = segment.weight
        if isinstance(weight, bool) or not isinstance(weight, (int, float)) or not math.isfinite(weight):
            raise InvalidConfiguration(f"segment {segment.label!r} has an invalid weight {weight!r}")
        if weight <= 0:
            raise InvalidConfiguration(f"segment {segment.label!r} has a non-positive weight {weight!r}")
        if segment.id in seen_ids:
            raise InvalidConfiguration(f"duplicate segment id {segment.id!r}")
        seen_ids.add(segment.id)

    total = math.fsum(s.weight for s in segments)
    if not total > 0 or not math.isfinite(total):
        raise InvalidConfiguration(f"total weight must be positive, got {total!r}")
    return total


def build_partition(segments):
    """Return a tuple of Intervals, one per segment, in list order."""
    total = validate_segments(segments)

    intervals = []
    cumulative = 0.0
    start = 0.0
    last = len(segments) - 1
    for i, segment in enumerate(segments):
        cumulative += segment.weight
        if i == last:
            end = FULL_TURN
        else:
            # the running sum can round past the fsum total when trailing weights are tiny
            end = min(cumulative / total * FULL_TURN, FULL_TURN)
        intervals.append(Interval(segment, start, end))
        start = end
    return tuple(intervals)
