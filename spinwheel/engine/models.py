"""
models.py
---------
Plain data objects shared by the engine, the store and the windows:
Segment, Wheel and SpinOutcome, each with to_dict()/from_dict() for data.json.
"""
import uuid
from datetime import datetime

from spinwheel.utils.config import COLORS, FALLBACK_COLOR


def new_id(length=9):
    return uuid.uuid4().hex[:length]


def _parse_time(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _format_time(value):
    return value.isoformat() if value is not None else None


class Segment:
    """One selectable outcome. color and url are carried along, never read by the engine."""

    def __init__(self, id, label, weight=1, color=FALLBACK_COLOR, url=None):
        self.id = str(id)
        self.label = label
        self.weight = weight
        self.color = color
        self.url = url

    def to_dict(self):
        data = {"id": self.id, "label": self.label, "weight": self.weight, "color": self.color}
        if self.url:
            data["url"] = self.url
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data["id"],
            label=data.get("label", ""),
            weight=data.get("weight", 1),
            color=data.get("color", FALLBACK_COLOR),
            url=data.get("url") or None,
        )

    def __eq__(self, other):
        if not isinstance(other, Segment):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Segment(id={self.id!r}, label={self.label!r}, weight={self.weight!r})"


class Wheel:
    def __init__(self, id=None, title="", segments=None, created_at=None, updated_at=None,
                 is_public=True, user_id=None):
        now = datetime.now()
        self.id = str(id) if id is not None else new_id(13)
        self.title = title
        self.segments = list(segments) if segments else []
        self.created_at = created_at or now
        self.updated_at = updated_at or self.created_at
        self.is_public = is_public
        self.user_id = user_id

    def caption(self):
        """Text for the wheel picker: title and segment count."""
        count = len(self.segments)
        return f"{self.title or 'Untitled wheel'} ({count} segment{'' if count == 1 else 's'})"

    def segment_by_label(self, label):
        for segment in self.segments:
            if segment.label == label:
                return segment
        return None

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "segments": [s.to_dict() for s in self.segments],
            "created_at": _format_time(self.created_at),
            "updated_at": _format_time(self.updated_at),
            "is_public": self.is_public,
            "user_id": self.user_id,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            segments=[Segment.from_dict(s) for s in data.get("segments", [])],
            created_at=_parse_time(data.get("created_at")),
            updated_at=_parse_time(data.get("updated_at")),
            is_public=data.get("is_public", True),
            user_id=data.get("user_id"),
        )

    def __repr__(self):
        return f"Wheel(id={self.id!r}, title={self.title!r}, segments={len(self.segments)})"


class SpinOutcome:
    """The record of one finished spin, handed to the store by the caller."""

    def __init__(self, wheel_id, segment_id, segment_label, timestamp=None, id=None):
        self.id = str(id) if id is not None else new_id(13)
        self.wheel_id = wheel_id
        self.segment_id = segment_id
        self.segment_label = segment_label
        self.timestamp = timestamp or datetime.now()

    @classmethod
    def from_segment(cls, wheel_id, segment, timestamp=None):
        return cls(wheel_id, segment.id, segment.label, timestamp=timestamp)

    def to_dict(self):
        return {
            "id": self.id,
            "wheel_id": self.wheel_id,
            "segment_id": self.segment_id,
            "segment_label": self.segment_label,
            "timestamp": _format_time(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data):
        """Raises KeyError or ValueError for a record without wheel_id or a usable timestamp."""
        timestamp = _parse_time(data.get("timestamp"))
        if timestamp is None:
            raise ValueError(f"spin record {data.get('id')!r} has no timestamp")
        return cls(
            wheel_id=data["wheel_id"],
            segment_id=data.get("segment_id"),
            segment_label=data.get("segment_label", ""),
            timestamp=timestamp,
            id=data.get("id"),
        )

    def __repr__(self):
        return f"SpinOutcome(wheel_id={self.wheel_id!r}, segment_label={self.segment_label!r}, timestamp={self.timestamp!r})"


# --- Editing helpers ---

def default_segments():
    """Starting point for a new wheel: Yes / No, equal weight."""
    return [
        Segment("1", "Yes", 1, COLORS[4]),
        Segment("2", "No", 1, COLORS[0]),
    ]


def new_segment(segments, label="New Option"):
    """A weight-1 segment colored with the next palette entry."""
    existing = {s.id for s in segments}
    segment_id = new_id()
    while segment_id in existing:
        segment_id = new_id()
    return Segment(segment_id, label, 1, COLORS[len(segments) % len(COLORS)])
