from datetime import datetime

import pytest

from spinwheel.engine.models import (
    Segment, SpinOutcome, Wheel, default_segments, new_segment,
)
from spinwheel.utils.config import COLORS


def test_default_segments_yes_no():
    segs = default_segments()
    assert [s.label for s in segs] == ["Yes", "No"]
    assert [s.weight for s in segs] == [1, 1]
    assert segs[0].color == COLORS[4]
    assert segs[1].color == COLORS[0]


def test_new_segment_cycles_palette():
    segs = []
    for _ in range(len(COLORS) + 2):
        segs.append(new_segment(segs))

    assert [s.color for s in segs[:len(COLORS)]] == COLORS
    assert segs[len(COLORS)].color == COLORS[0]
    assert segs[-1].color == COLORS[1]
    assert len({s.id for s in segs}) == len(segs)
    assert all(s.label == "New Option" and s.weight == 1 for s in segs)


def test_segment_dict_omits_empty_url():
    assert "url" not in Segment("a", "A", 2).to_dict()
    seg = Segment.from_dict({"id": "a", "label": "A", "weight": 2, "url": ""})
    assert seg.url is None


def test_segment_ids_are_strings():
    assert Segment(7, "Seven").id == "7"


def test_wheel_from_dict_round_trip():
    wheel = Wheel(id="w", title="T", segments=default_segments(),
                  created_at=datetime(2024, 1, 2, 3, 4, 5))
    copy = Wheel.from_dict(wheel.to_dict())
    assert copy.segments == wheel.segments
    assert copy.created_at == datetime(2024, 1, 2, 3, 4, 5)
    assert copy.updated_at == copy.created_at
    assert copy.is_public is True


def test_segment_by_label():
    wheel = Wheel(segments=default_segments())
    assert wheel.segment_by_label("No").id == "2"
    assert wheel.segment_by_label("Maybe") is None


def test_outcome_from_segment_copies_label():
    seg = Segment("s1", "Sushi", 2)
    outcome = SpinOutcome.from_segment("w1", seg)
    assert (outcome.wheel_id, outcome.segment_id, outcome.segment_label) == ("w1", "s1", "Sushi")
    assert isinstance(outcome.timestamp, datetime)
    assert outcome.id


def test_wheel_caption_counts_segments():
    assert Wheel(title="Lunch", segments=default_segments()).caption() == "Lunch (2 segments)"
    assert Wheel(segments=[Segment("a", "A")]).caption() == "Untitled wheel (1 segment)"


def test_outcome_from_dict_needs_timestamp():
    with pytest.raises(ValueError):
        SpinOutcome.from_dict({"wheel_id": "w1", "segment_id": "a", "segment_label": "A"})
