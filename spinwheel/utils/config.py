"""
config.py
---------
Global settings and helpers.
Features:
      1. Shared constants (segment palette, physics defaults, frame interval).
      2. data_file_path(), which hides the difference between running from
         source and running as a PyInstaller bundle.
      3. PhysicsConfig: the spin tuning values plus the checks that guarantee
         every spin comes to a stop.
"""
import sys
import os
import math

from spinwheel.engine.errors import InvalidConfiguration


def data_file_path():
    """Location of data.json (wheels, results, physics settings)."""
    if os.environ.get("SPINWHEEL_DATA_FILE"):
        return os.environ["SPINWHEEL_DATA_FILE"]
    if getattr(sys, 'frozen', False):
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    return os.path.join(base_dir, "data.json")


# --- Palette ---
COLORS = [
    "#ef4444",  # red
    "#f97316",  # orange
    "#f59e0b",  # amber
    "#84cc16",  # lime
    "#10b981",  # emerald
    "#06b6d4",  # cyan
    "#3b82f6",  # blue
    "#6366f1",  # indigo
    "#8b5cf6",  # violet
    "#d946ef",  # fuchsia
    "#f43f5e",  # rose
]

# Used by analytics for labels that are no longer on the wheel
FALLBACK_COLOR = "#8884d8"

# --- Physics defaults (angles in radians, speeds in radians per frame) ---
FULL_TURN = 2 * math.pi
DEFAULT_FRICTION = 0.985
DEFAULT_MIN_SPEED = 0.002
DEFAULT_V_MIN = 0.5
DEFAULT_V_RANGE = 0.5
FRAME_INTERVAL_MS = 16  # ~60 fps

# Friction slider range on the operator console
FRICTION_SLIDER_MIN = 0.950
FRICTION_SLIDER_MAX = 0.999


class PhysicsConfig:
    """Spin tuning values. validate() must pass before a controller uses them."""

    FIELDS = ("friction", "min_speed", "v_min", "v_range", "frame_interval_ms")

    def __init__(self, friction=DEFAULT_FRICTION, min_speed=DEFAULT_MIN_SPEED,
                 v_min=DEFAULT_V_MIN, v_range=DEFAULT_V_RANGE,
                 frame_interval_ms=FRAME_INTERVAL_MS):
        self.friction = friction
        self.min_speed = min_speed
        self.v_min = v_min
        self.v_range = v_range
        self.frame_interval_ms = frame_interval_ms

    def validate(self):
        """Raise InvalidConfiguration when a spin could never stop."""
        for name in self.FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidConfiguration(f"{name} must be a finite number, got {value!r}")
        if not 0 < self.friction < 1:
            raise InvalidConfiguration(f"friction must be in (0, 1), got {self.friction}")
        if self.min_speed <= 0:
            raise InvalidConfiguration(f"min_speed must be > 0, got {self.min_speed}")
        if self.v_min <= 0 or self.v_range <= 0:
            raise InvalidConfiguration(
                f"initial speed range must be positive, got v_min={self.v_min} v_range={self.v_range}")
        if self.frame_interval_ms < 0:
            raise InvalidConfiguration(f"frame_interval_ms must be >= 0, got {self.frame_interval_ms}")
        return self

    def to_dict(self):
        return {name: getattr(self, name) for name in self.FIELDS}

    @classmethod
    def from_dict(cls, data):
        """Persisted overrides on top of the defaults; unknown keys are ignored."""
        config = cls()
        if isinstance(data, dict):
            for name in cls.FIELDS:
                if name in data:
                    setattr(config, name, data[name])
        return config

    def __eq__(self, other):
        if not isinstance(other, PhysicsConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"PhysicsConfig({self.to_dict()})"


def friction_from_slider(value):
    """Slider 0~100 -> FRICTION_SLIDER_MIN~FRICTION_SLIDER_MAX"""
    return FRICTION_SLIDER_MIN + (value / 100.0) * (FRICTION_SLIDER_MAX - FRICTION_SLIDER_MIN)


def slider_from_friction(friction):
    value = round((friction - FRICTION_SLIDER_MIN) / (FRICTION_SLIDER_MAX - FRICTION_SLIDER_MIN) * 100)
    return max(0, min(100, value))
