import math

import pytest

from spinwheel.engine.errors import InvalidConfiguration
from spinwheel.engine.models import Segment
from spinwheel.engine.partition import build_partition, validate_segments
from spinwheel.utils.config import FULL_TURN


def make(*weights):
    return [Segment(str(i), f"S{i}", w) for i, w in enumerate(weights)]


def test_spans_follow_weights(segments):
    partition = build_partition(segments)

    assert [iv.segment.label for iv in partition] == ["Pizza", "Sushi", "Tacos"]
    assert partition[0].span == pytest.approx(math.pi / 2)
    assert partition[1].span == pytest.approx(math.pi)
    assert partition[2].span == pytest.approx(math.pi / 2)


@pytest.mark.parametrize("weights", [
    (1,),
    (1, 1),
    (3, 0.001, 7.5, 2),
    (0.1,) * 37,
    (1e-9, 1e9),
    (0.3, 0.7, 0.1, 0.3, 0.3, 1e-300),
])
def test_intervals_tile_full_turn(weights):
    partition = build_partition(make(*weights))

    assert partition[0].start == 0.0
    assert partition[-1].end == FULL_TURN
    for prev, nxt in zip(partition, partition[1:]):
        assert prev.end == nxt.start
    for interval in partition:
        assert interval.start <= interval.end <= FULL_TURN
        assert interval.span >= 0
    assert math.fsum(iv.span for iv in partition) == pytest.approx(FULL_TURN)


def test_single_segment_covers_everything():
    (only,) = build_partition(make(5))
    assert only.start == 0.0
    assert only.end == FULL_TURN


def test_half_open_boundaries():
    first, second = build_partition(make(1, 1))
    assert first.contains(0.0)
    assert not first.contains(math.pi)
    assert second.contains(math.pi)
    assert not second.contains(FULL_TURN)


def test_empty_list_rejected():
    with pytest.raises(InvalidConfiguration):
        build_partition([])


@pytest.mark.parametrize("bad", [0, -1, float("nan"), float("inf"), "2", None, True])
def test_bad_weight_rejected_even_among_valid_ones(bad):
    segs = make(1, 2) + [Segment("x", "Bad", bad)]
    with pytest.raises(InvalidConfiguration):
        build_partition(segs)


def test_duplicate_ids_rejected():
    segs = [Segment("same", "A", 1), Segment("same", "B", 1)]
    with pytest.raises(InvalidConfiguration):
        validate_segments(segs)


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        build_partition(make(0))


def test_partition_does_not_mutate_input(segments):
    before = [s.to_dict() for s in segments]
    build_partition(segments)
    assert [s.to_dict() for s in segments] == before
