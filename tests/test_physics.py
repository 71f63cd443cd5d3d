import random

import pytest

from spinwheel.engine.errors import AlreadySpinning, InvalidConfiguration
from spinwheel.engine.physics import Phase, PhysicsSimulator
from spinwheel.utils.config import PhysicsConfig


def run_to_rest(sim, limit=100000):
    steps = 0
    settled_count = 0
    while sim.is_spinning:
        if sim.step():
            settled_count += 1
        steps += 1
        assert steps <= limit
    return steps, settled_count


def test_fresh_state_is_idle():
    sim = PhysicsSimulator(rng=random.Random(1))
    assert sim.state.rotation == 0.0
    assert sim.state.velocity == 0.0
    assert sim.state.phase is Phase.IDLE


def test_start_draws_velocity_in_range():
    cfg = PhysicsConfig()
    for seed in range(50):
        sim = PhysicsSimulator(cfg, random.Random(seed))
        velocity = sim.start()
        assert cfg.v_min <= velocity < cfg.v_min + cfg.v_range
        assert sim.state.phase is Phase.SPINNING


def test_start_while_spinning_raises():
    sim = PhysicsSimulator(rng=random.Random(1))
    sim.start()
    with pytest.raises(AlreadySpinning):
        sim.start()


def test_step_recurrence():
    sim = PhysicsSimulator(PhysicsConfig(friction=0.9, min_speed=0.001), random.Random(3))
    v0 = sim.start()

    sim.step()
    assert sim.state.velocity == pytest.approx(v0 * 0.9)
    assert sim.state.rotation == pytest.approx(v0 * 0.9)

    sim.step()
    assert sim.state.velocity == pytest.approx(v0 * 0.81)
    assert sim.state.rotation == pytest.approx(v0 * 0.9 + v0 * 0.81)


def test_default_spin_settles_in_a_few_hundred_steps():
    sim = PhysicsSimulator(rng=random.Random(42))
    sim.start()
    steps, settled_count = run_to_rest(sim)

    assert 100 < steps < 1000
    assert settled_count == 1
    assert sim.state.velocity == 0.0
    assert sim.state.phase is Phase.SETTLED


@pytest.mark.parametrize("friction,min_speed", [
    (0.5, 0.1), (0.9, 1e-6), (0.999, 0.01), (0.985, 0.002),
])
def test_any_valid_config_terminates(friction, min_speed):
    sim = PhysicsSimulator(PhysicsConfig(friction=friction, min_speed=min_speed), random.Random(7))
    sim.start()
    _, settled_count = run_to_rest(sim)
    assert settled_count == 1


def test_step_after_settle_is_noop():
    sim = PhysicsSimulator(rng=random.Random(5))
    sim.start()
    run_to_rest(sim)
    rotation = sim.state.rotation

    assert sim.step() is False
    assert sim.state.rotation == rotation


def test_same_seed_same_rotation():
    a = PhysicsSimulator(rng=random.Random(99))
    b = PhysicsSimulator(rng=random.Random(99))
    a.start()
    b.start()
    run_to_rest(a)
    run_to_rest(b)
    assert a.state.rotation == b.state.rotation


def test_reset_from_any_phase():
    sim = PhysicsSimulator(rng=random.Random(8))
    sim.start()
    for _ in range(10):
        sim.step()
    sim.reset()
    assert (sim.state.rotation, sim.state.velocity, sim.state.phase) == (0.0, 0.0, Phase.IDLE)

    sim.reset()
    assert sim.state.phase is Phase.IDLE


def test_can_spin_again_after_settling():
    sim = PhysicsSimulator(rng=random.Random(10))
    sim.start()
    run_to_rest(sim)
    first = sim.state.rotation

    sim.start()
    run_to_rest(sim)
    assert sim.state.rotation > first


@pytest.mark.parametrize("kwargs", [
    {"friction": 1.0},
    {"friction": 1.2},
    {"friction": 0.0},
    {"min_speed": 0.0},
    {"min_speed": -0.1},
    {"v_min": 0.0},
    {"v_range": 0.0},
    {"friction": float("nan")},
    {"frame_interval_ms": -1},
])
def test_non_terminating_config_rejected(kwargs):
    with pytest.raises(InvalidConfiguration):
        PhysicsSimulator(PhysicsConfig(**kwargs))
