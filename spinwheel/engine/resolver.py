"""
resolver.py
-----------
Reads the winner off a stopped wheel.

The pointer sits at angle 0 of the wheel frame (3 o'clock on screen) and the
wheel turns clockwise by `rotation`, so the wheel angle under the pointer is
the rotation undone:

    pointer_angle = (FULL_TURN - rotation % FULL_TURN) % FULL_TURN
"""
from spinwheel.log import log_anomaly
from spinwheel.utils.config import FULL_TURN


def pointer_angle(rotation):
    # Python's % is floored, so negative rotations land in [0, FULL_TURN) too
    angle = (FULL_TURN - rotation % FULL_TURN) % FULL_TURN
    if angle >= FULL_TURN:
        angle = 0.0
    return angle


def resolve(rotation, partition):
    """Return the segment under the pointer. Always returns one of the partition's segments."""
    angle = pointer_angle(rotation)
    for interval in partition:
        if interval.contains(angle):
            return interval.segment

    # Unreachable while the partition tiles [0, FULL_TURN); never fail a finished spin over it.
    fallback = partition[-1].segment
    log_anomaly(f"pointer angle {angle!r} (rotation {rotation!r}) matched no interval, "
                f"falling back to {fallback.label!r}")
    return fallback


def resolve_index(rotation, partition):
    """Index of the interval under the pointer, for the render surface's highlight."""
    segment = resolve(rotation, partition)
    for i, interval in enumerate(partition):
        if interval.segment is segment:
            return i
    return len(partition) - 1
