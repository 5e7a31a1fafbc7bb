# MIT License (see LICENSE)
"""
Aggregate quantities computed from the current particle state.

Every function here is a pure function of the particles passed in, so the
statistics can be recomputed at any time without drift from incremental
bookkeeping.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..types import Particle
from .forces import ForceModel


def kinetic_energy(particles: Sequence[Particle]) -> float:
    """
    Total kinetic energy.

    T = Σ 0.5 * m * |v|²

    Orbital particles contribute through their derived tangential velocity;
    fixed anchors have zero velocity.
    """
    ke = 0.0
    for p in particles:
        v_sq = float(np.dot(p.velocity, p.velocity))
        ke += 0.5 * p.mass * v_sq
    return ke


def potential_energy(particles: Sequence[Particle], model: ForceModel) -> float:
    """
    Total electrostatic potential energy over unordered pairs.

    Pairs involving a neutral particle are skipped.
    """
    pe = 0.0
    n = len(particles)
    for i in range(n):
        pi = particles[i]
        if pi.charge == 0.0:
            continue
        for j in range(i + 1, n):
            pj = particles[j]
            if pj.charge == 0.0:
                continue
            pe += model.pair_potential_energy(pi, pj)
    return pe


def average_speed(particles: Sequence[Particle]) -> float:
    """Mean |v|; 0.0 for an empty collection."""
    total = sum(p.speed for p in particles)
    return total / max(len(particles), 1)


def linear_momentum(particles: Sequence[Particle]) -> np.ndarray:
    """
    Total linear momentum of the free particles.

    P = Σ m * v
    """
    p = np.zeros(2, dtype=np.float64)
    for b in particles:
        if not b.is_free:
            continue
        p += b.mass * b.velocity
    return p
