"""
controller.py
-------------
SpinController: the Idle -> Spinning -> Idle state machine around one wheel.

Owns the SimulationState (through its PhysicsSimulator) and the partition,
asks the scheduler for one frame at a time and, on the frame the rotor
settles, resolves the winner and hands it to on_complete exactly once.
"""
from spinwheel.engine.partition import build_partition
from spinwheel.engine.physics import Phase, PhysicsSimulator
from spinwheel.engine.resolver import resolve


class SpinController:
    def __init__(self, segments, scheduler, config=None, rng=None,
                 on_render=None, on_complete=None):
        """
        Args:
            segments: ordered Segment list; InvalidConfiguration if unusable.
            scheduler: FrameScheduler that runs one frame per schedule() call.
            config: PhysicsConfig, validated here.
            rng: randomness source with random(); seed it for replayable spins.
            on_render: callable(rotation, partition), called once per frame.
            on_complete: callable(segment), called once per finished spin.
        """
        self.partition = build_partition(segments)
        self.segments = list(segments)
        self.scheduler = scheduler
        self.simulator = PhysicsSimulator(config, rng)
        self.on_render = on_render
        self.on_complete = on_complete
        self.winner = None
        self._handle = None
        # bumped on every reset; a frame from an older generation never runs
        self._generation = 0

    @property
    def state(self):
        return self.simulator.state

    @property
    def rotation(self):
        return self.simulator.state.rotation

    @property
    def is_spinning(self):
        return self.simulator.is_spinning

    def set_segments(self, segments):
        """Stop any spin, then switch to a new segment list."""
        partition = build_partition(segments)
        self.reset()
        self.partition = partition
        self.segments = list(segments)
        self._render()

    def set_config(self, config):
        """Swap physics settings; any spin in flight is dropped."""
        simulator = PhysicsSimulator(config, self.simulator.rng)
        self.reset()
        self.simulator = simulator

    def spin(self):
        """Start a spin. Returns False (and does nothing) unless idle."""
        if self.is_spinning:
            return False
        self.winner = None
        self.simulator.start()
        self._schedule_next()
        return True

    def reset(self):
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.simulator.reset()
        self.winner = None
        self._render()

    def _schedule_next(self):
        generation = self._generation
        self._handle = self.scheduler.schedule(lambda: self._on_frame(generation))

    def _on_frame(self, generation):
        if generation != self._generation or not self.is_spinning:
            return
        self._handle = None

        settled = self.simulator.step()
        self._render()

        if not settled:
            self._schedule_next()
            return

        self.winner = resolve(self.state.rotation, self.partition)
        # Settled -> Idle before the callback so it may start the next spin
        self.state.phase = Phase.IDLE
        if self.on_complete is not None:
            self.on_complete(self.winner)

    def _render(self):
        if self.on_render is not None:
            self.on_render(self.state.rotation, self.partition)
