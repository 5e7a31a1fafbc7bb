import numpy as np
import pytest

from charge_sim.core import ForceModel
from charge_sim.errors import ConfigurationError
from charge_sim.types import Particle


def _pair(q1, q2, d=50.0):
    a = Particle(charge=q1, position=(100.0, 100.0))
    b = Particle(charge=q2, position=(100.0 + d, 100.0))
    return a, b


def test_like_charges_repel():
    model = ForceModel(k=5000.0, min_distance=20.0, max_force=1e9)
    for q in (1.0, -1.0):
        a, b = _pair(q, q)
        fx, fy, _ = model.pair_force(a, b)
        # a sits left of b, so repulsion pushes it further left
        assert fx < 0
        assert fy == 0.0


def test_opposite_charges_attract():
    model = ForceModel(k=5000.0, min_distance=20.0, max_force=1e9)
    a, b = _pair(1.0, -1.0)
    fx, fy, _ = model.pair_force(a, b)
    assert fx > 0
    assert fy == 0.0


def test_neutral_partner_gives_zero_force():
    model = ForceModel()
    for q in (1.0, -1.0, 0.0):
        a, b = _pair(q, 0.0)
        fx, fy, _ = model.pair_force(a, b)
        assert fx == 0.0 and fy == 0.0


def test_newton_third_law_exact():
    model = ForceModel(k=1234.5, min_distance=3.0, max_force=50.0)
    rng = np.random.default_rng(42)
    charges = [1.0, -1.0, 2.0 / 3.0, -1.0 / 3.0, 0.7]
    for _ in range(200):
        a = Particle(charge=rng.choice(charges), position=rng.uniform(0, 100, 2))
        b = Particle(charge=rng.choice(charges), position=rng.uniform(0, 100, 2))
        f12 = model.pair_force(a, b)
        f21 = model.pair_force(b, a)
        assert f12[0] == -f21[0]
        assert f12[1] == -f21[1]


def test_distance_clamp_matches_min_distance():
    model = ForceModel(k=5000.0, min_distance=20.0, max_force=1e9)
    near = model.pair_force(*_pair(1.0, 1.0, d=1.0))
    at_min = model.pair_force(*_pair(1.0, 1.0, d=20.0))
    assert near[0] == pytest.approx(at_min[0])
    assert near[1] == pytest.approx(at_min[1])
    assert near[2] == 20.0


def test_force_magnitude_clamp():
    model = ForceModel(k=5000.0, min_distance=1e-6, max_force=2.5)
    fx, fy, _ = model.pair_force(*_pair(1.0, 1.0, d=0.001))
    assert np.hypot(fx, fy) == pytest.approx(2.5)

    fx, fy, _ = model.pair_force(*_pair(1.0, -1.0, d=0.001))
    assert np.hypot(fx, fy) == pytest.approx(2.5)
    assert fx > 0


def test_coincident_particles_stay_finite():
    model = ForceModel()
    a = Particle(charge=1.0, position=(10.0, 10.0))
    b = Particle(charge=1.0, position=(10.0, 10.0))
    fx, fy, r = model.pair_force(a, b)
    assert (fx, fy) == (0.0, 0.0)
    assert r == model.min_distance
    assert np.isfinite(model.pair_potential_energy(a, b))


def test_scenario_two_positive_charges_20_apart():
    model = ForceModel(k=5000.0, min_distance=20.0)
    a = Particle(charge=1.0, position=(100.0, 300.0))
    b = Particle(charge=1.0, position=(120.0, 300.0))
    model.apply_all_forces([a, b])

    # 5000 * 1 * 1 / 20² = 12.5, entirely along x, pushing them apart
    assert a.force[0] == pytest.approx(-12.5)
    assert b.force[0] == pytest.approx(12.5)
    assert a.force[1] == 0.0 and b.force[1] == 0.0


def test_potential_energy_ignores_force_cap():
    model = ForceModel(k=5000.0, min_distance=20.0, max_force=1.0)
    a, b = _pair(1.0, 1.0, d=50.0)
    assert model.pair_potential_energy(a, b) == pytest.approx(100.0)

    a, b = _pair(1.0, -1.0, d=1.0)
    assert model.pair_potential_energy(a, b) == pytest.approx(-250.0)


def test_apply_all_forces_resets_and_visits_each_pair_once(monkeypatch):
    model = ForceModel(k=100.0, min_distance=1.0, max_force=1e9)
    particles = [
        Particle(charge=q, position=(10.0 * i, 3.0 * i * i))
        for i, q in enumerate([1.0, -1.0, 1.0, 0.0, -1.0])
    ]
    for p in particles:
        p.force[:] = 99.0

    calls = []
    original = model.pair_force

    def counting(p1, p2):
        calls.append((p1, p2))
        return original(p1, p2)

    monkeypatch.setattr(model, "pair_force", counting)
    model.apply_all_forces(particles)

    # 4 charged particles -> 6 unordered pairs, the neutral one is skipped
    assert len(calls) == 6
    assert len({frozenset((id(a), id(b))) for a, b in calls}) == 6
    assert np.array_equal(particles[3].force, np.zeros(2))

    total = sum(p.force for p in particles)
    assert np.allclose(total, 0.0, atol=1e-12)


def test_invalid_parameters_rejected():
    with pytest.raises(ConfigurationError):
        ForceModel(min_distance=0.0)
    with pytest.raises(ConfigurationError):
        ForceModel(max_force=-1.0)
    with pytest.raises(ConfigurationError):
        ForceModel(k=float("nan"))
