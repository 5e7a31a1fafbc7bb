import numpy as np
import pytest

from charge_sim.core import BoundaryPolicy
from charge_sim.errors import ConfigurationError
from charge_sim.types import FixedAnchor, Orbital, Particle

W, H = 800.0, 600.0


def _state(p):
    return p.position.copy(), p.velocity.copy()


def test_left_wall_reflection():
    p = Particle(charge=0.0, radius=6.0, position=(5.0, 300.0), velocity=(-5.0, 1.0))
    assert BoundaryPolicy(restitution=0.8).enforce(p, W, H)

    assert p.position[0] == 6.0
    assert p.velocity[0] >= 0
    assert p.velocity[0] == pytest.approx(4.0)
    assert p.velocity[1] == 1.0


def test_far_walls_reflection():
    policy = BoundaryPolicy(restitution=1.0)
    p = Particle(charge=0.0, radius=6.0, position=(799.0, 300.0), velocity=(3.0, 0.0))
    policy.enforce(p, W, H)
    assert p.position[0] == W - 6.0
    assert p.velocity[0] == -3.0

    p = Particle(charge=0.0, radius=6.0, position=(400.0, 598.0), velocity=(0.0, 2.0))
    policy.enforce(p, W, H)
    assert p.position[1] == H - 6.0
    assert p.velocity[1] == -2.0


def test_corner_resolves_both_axes():
    p = Particle(charge=0.0, radius=6.0, position=(-10.0, 700.0), velocity=(-2.0, 3.0))
    BoundaryPolicy(restitution=0.5).enforce(p, W, H)

    assert np.array_equal(p.position, [6.0, H - 6.0])
    assert np.allclose(p.velocity, [1.0, -1.5])


def test_already_inward_velocity_keeps_direction():
    p = Particle(charge=0.0, radius=6.0, position=(2.0, 300.0), velocity=(5.0, 0.0))
    BoundaryPolicy(restitution=1.0).enforce(p, W, H)
    assert p.velocity[0] == 5.0


def test_enforce_is_idempotent():
    policy = BoundaryPolicy(restitution=0.8)

    inside = Particle(charge=0.0, radius=6.0, position=(6.0, 594.0), velocity=(-1.0, 1.0))
    before = _state(inside)
    assert not policy.enforce(inside, W, H)
    assert not policy.enforce(inside, W, H)
    assert all(np.array_equal(a, b) for a, b in zip(before, _state(inside)))

    outside = Particle(charge=0.0, radius=6.0, position=(-3.0, 300.0), velocity=(-5.0, 0.0))
    assert policy.enforce(outside, W, H)
    once = _state(outside)
    assert not policy.enforce(outside, W, H)
    assert all(np.array_equal(a, b) for a, b in zip(once, _state(outside)))


def test_position_within_domain_after_enforce():
    policy = BoundaryPolicy()
    rng = np.random.default_rng(0)
    for _ in range(100):
        p = Particle(
            charge=0.0,
            radius=6.0,
            position=rng.uniform(-500, 1500, 2),
            velocity=rng.uniform(-50, 50, 2),
        )
        policy.enforce(p, W, H)
        assert 0.0 <= p.position[0] <= W
        assert 0.0 <= p.position[1] <= H


def test_orbital_and_fixed_are_exempt():
    policy = BoundaryPolicy()
    anchor = Particle(charge=0.0, position=(-50.0, -50.0), motion=FixedAnchor())
    orbiting = Particle(
        charge=0.0,
        position=(-40.0, -50.0),
        motion=Orbital(anchor=anchor, radius=10.0, angular_speed=1.0),
    )
    for p in (anchor, orbiting):
        before = _state(p)
        assert not policy.enforce(p, W, H)
        assert all(np.array_equal(a, b) for a, b in zip(before, _state(p)))


def test_domain_narrower_than_particle():
    p = Particle(charge=0.0, radius=6.0, position=(1.0, 300.0), velocity=(4.0, 0.0))
    policy = BoundaryPolicy()
    policy.enforce(p, 10.0, H)
    assert p.position[0] == 5.0
    assert p.velocity[0] == 0.0
    assert not policy.enforce(p, 10.0, H)


def test_restitution_range():
    with pytest.raises(ConfigurationError):
        BoundaryPolicy(restitution=1.2)
