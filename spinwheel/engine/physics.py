"""
physics.py
----------
A single free-spinning rotor that slows down by a constant friction factor.

Every frame:
    velocity *= friction
    rotation += velocity
Once velocity drops below min_speed it snaps to 0 and the rotor is settled.
This is plain exponential decay, not real physics; keep the recurrence as is,
seeded replays depend on it.
"""
import random
from enum import Enum

from spinwheel.engine.errors import AlreadySpinning
from spinwheel.utils.config import PhysicsConfig


class Phase(Enum):
    IDLE = "idle"
    SPINNING = "spinning"
    SETTLED = "settled"


class SimulationState:
    """rotation is absolute (radians, may exceed a full turn); velocity is radians per frame."""

    def __init__(self):
        self.rotation = 0.0
        self.velocity = 0.0
        self.phase = Phase.IDLE

    def __repr__(self):
        return f"SimulationState(rotation={self.rotation:.4f}, velocity={self.velocity:.4f}, phase={self.phase.value})"


class PhysicsSimulator:
    def __init__(self, config=None, rng=None):
        self.config = (config or PhysicsConfig()).validate()
        self.rng = rng if rng is not None else random.Random()
        self.state = SimulationState()

    @property
    def is_spinning(self):
        return self.state.phase is Phase.SPINNING

    def start(self):
        if self.is_spinning:
            raise AlreadySpinning("the wheel is already spinning")
        cfg = self.config
        self.state.velocity = cfg.v_min + self.rng.random() * cfg.v_range
        self.state.phase = Phase.SPINNING
        return self.state.velocity

    def step(self):
        """
        Advance one frame.
        Returns True exactly once: on the frame where the rotor settles.
        Calling step() while not spinning does nothing and returns False.
        """
        state = self.state
        if state.phase is not Phase.SPINNING:
            return False

        state.velocity *= self.config.friction
        state.rotation += state.velocity

        if state.velocity < self.config.min_speed:
            state.velocity = 0.0
            state.phase = Phase.SETTLED
            return True
        return False

    def reset(self):
        self.state.velocity = 0.0
        self.state.rotation = 0.0
        self.state.phase = Phase.IDLE
