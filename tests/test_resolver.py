import math
import os

import pytest

from spinwheel.engine.models import Segment
from spinwheel.engine.partition import Interval, build_partition
from spinwheel.engine.resolver import pointer_angle, resolve, resolve_index
from spinwheel.utils.config import FULL_TURN


@pytest.fixture
def halves():
    return build_partition([Segment("a", "A", 1), Segment("b", "B", 1)])


@pytest.fixture
def one_two_one():
    return build_partition([Segment("a", "A", 1), Segment("b", "B", 2), Segment("c", "C", 1)])


def test_quarter_turn_reads_three_quarters(halves):
    assert pointer_angle(FULL_TURN * 0.25) == pytest.approx(FULL_TURN * 0.75)
    assert resolve(FULL_TURN * 0.25, halves).label == "B"


def test_full_turn_resolves_like_zero(one_two_one):
    assert pointer_angle(FULL_TURN) == 0.0
    assert resolve(FULL_TURN, one_two_one).label == "A"
    assert resolve(0.0, one_two_one).label == "A"


def test_small_clockwise_turn_shows_last_segment(one_two_one):
    # turning clockwise brings the end of the wheel under the pointer
    assert resolve(0.1, one_two_one).label == "C"


@pytest.mark.parametrize("rotation", [
    -0.3, -FULL_TURN * 5 - 1.0, 1e6, 12345.6789, FULL_TURN * 1000, -1e-12, 1e-300,
])
def test_always_one_segment_in_range(one_two_one, rotation):
    angle = pointer_angle(rotation)
    assert 0.0 <= angle < FULL_TURN
    winner = resolve(rotation, one_two_one)
    matches = [iv for iv in one_two_one if iv.contains(angle)]
    assert len(matches) == 1
    assert matches[0].segment is winner


def test_negative_rotation_mirrors_positive(halves):
    # -0.25 turn (counter-clockwise) puts the pointer at a quarter turn -> first half
    assert resolve(-FULL_TURN * 0.25, halves).label == "A"


def test_resolver_is_idempotent(one_two_one):
    rotation = 987.654321
    results = {resolve(rotation, one_two_one).id for _ in range(50)}
    assert len(results) == 1


def test_resolve_matches_segment_spans(one_two_one):
    # pointer in the middle of each interval
    for interval in one_two_one:
        rotation = FULL_TURN - interval.middle
        assert resolve(rotation, one_two_one) is interval.segment


def test_resolve_index(one_two_one):
    assert resolve_index(0.0, one_two_one) == 0
    assert resolve_index(FULL_TURN - math.pi, one_two_one) == 1
    assert resolve_index(0.1, one_two_one) == 2


def test_falls_back_to_last_segment_and_logs(log_dir):
    a, b = Segment("a", "A", 1), Segment("b", "B", 1)
    # a broken partition with a hole over [pi, 2pi)
    broken = (Interval(a, 0.0, 1.0), Interval(b, 1.0, math.pi))

    assert resolve(FULL_TURN * 0.25, broken) is b

    anomaly_dir = log_dir / "ANOMALY"
    files = os.listdir(anomaly_dir)
    assert len(files) == 1
    content = (anomaly_dir / files[0]).read_text(encoding="utf-8")
    assert "matched no interval" in content
    assert "'B'" in content
