import random

from spinwheel.ui_components.effects import (
    PARTICLE_LIFE, advance_particles, burst_palette, make_burst,
)


def test_palette_follows_winning_color():
    palette = burst_palette("#3b82f6")
    assert palette[0] == "#3b82f6"
    assert len(set(palette)) == len(palette)


def test_palette_survives_bad_color():
    assert burst_palette("not-a-color")[0] == "#facc15"


def test_burst_starts_at_origin_in_given_colors():
    particles = make_burst((400, 300), ["#ef4444", "#ffffff"], count=50, rng=random.Random(3))

    assert len(particles) == 50
    assert all((p['x'], p['y']) == (400, 300) for p in particles)
    assert {p['color'] for p in particles} <= {"#ef4444", "#ffffff"}
    # sprayed back over the wheel, away from the pointer on the right rim
    assert all(p['vx'] < 0 for p in particles)


def test_particles_fall_under_gravity():
    (p,) = make_burst((0, 0), ["#000000"], count=1, rng=random.Random(1))
    vy = p['vy']
    advance_particles([p], height=10000)
    assert p['vy'] > vy * 0.985


def test_burst_dies_out_on_its_own():
    particles = make_burst((200, 200), burst_palette("#10b981"), rng=random.Random(9))
    frames = 0
    while particles:
        particles = advance_particles(particles, height=400)
        frames += 1
    assert frames <= PARTICLE_LIFE


def test_particles_below_screen_are_dropped():
    (p,) = make_burst((0, 500), ["#000000"], count=1, rng=random.Random(2))
    p['size'] = 5
    assert advance_particles([p], height=100) == []
