# MIT License (see LICENSE)
"""
Electrostatic pair forces and potential energy.

Implements a Coulomb-style inverse-square law scaled for display units:
    F  = k * q1 * q2 / r²     (force magnitude, positive = repulsive)
    PE = k * q1 * q2 / r      (pair potential energy)

Two clamps keep the integration finite:
- r is raised to min_distance before either formula is evaluated. The
  direction still comes from the true offset, so closer than min_distance
  the force has the same magnitude as at min_distance.
- |F| is capped at max_force. The energy is NOT capped, so total energy is
  a diagnostic rather than an exactly conserved quantity.

Key concepts:
- Forces are accumulated in particle.force before integration.
- The whole-system pass is O(N²); every unordered pair is visited once and
  Newton's third law is applied by negation.
- Particles with charge == 0 are skipped.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Sequence

from ..constants import DEFAULT_FORCE_SCALE, DEFAULT_MAX_FORCE, DEFAULT_MIN_DISTANCE
from ..errors import ConfigurationError
from ..types import Particle
from ..util import require_finite


@dataclass
class ForceModel:
    """
    Pairwise electrostatic interaction.

    Attributes:
        k: Force scale (not the physical Coulomb constant).
        min_distance: Distance clamp preventing the r → 0 singularity.
        max_force: Cap on the magnitude of a single pair force.
    """
    k: float = DEFAULT_FORCE_SCALE
    min_distance: float = DEFAULT_MIN_DISTANCE
    max_force: float = DEFAULT_MAX_FORCE

    def __post_init__(self) -> None:
        self.k = require_finite("k", self.k)
        self.min_distance = require_finite("min_distance", self.min_distance)
        self.max_force = float(self.max_force)
        if self.min_distance <= 0:
            raise ConfigurationError(f"min_distance must be > 0, got {self.min_distance}")
        if not self.max_force > 0:
            raise ConfigurationError(f"max_force must be > 0, got {self.max_force}")

    def _separation(
        self, p1: Particle, p2: Particle
    ) -> tuple[float, float, float, float]:
        """Offset from p2 to p1, the true distance and the clamped distance."""
        dx = float(p1.position[0] - p2.position[0])
        dy = float(p1.position[1] - p2.position[1])
        d = math.sqrt(dx * dx + dy * dy)
        return dx, dy, d, max(d, self.min_distance)

    def pair_force(self, p1: Particle, p2: Particle) -> tuple[float, float, float]:
        """
        Force exerted on p1 by p2.

        A positive magnitude (like charges) points away from p2, a negative
        one (opposite charges) points toward it. p2 feels the exact negation.

        Returns:
            Tuple (fx, fy, distance) where distance is the clamped separation.
        """
        dx, dy, d, r = self._separation(p1, p2)
        if d == 0.0:
            # Coincident: no direction to push along.
            return 0.0, 0.0, r
        f = self.k * (p1.charge * p2.charge) / (r * r)
        if f > self.max_force:
            f = self.max_force
        elif f < -self.max_force:
            f = -self.max_force
        return f * dx / d, f * dy / d, r

    def pair_potential_energy(self, p1: Particle, p2: Particle) -> float:
        """PE = k * q1 * q2 / r with the distance clamp and no force cap."""
        r = self._separation(p1, p2)[3]
        return self.k * (p1.charge * p2.charge) / r

    def apply_all_forces(self, particles: Sequence[Particle]) -> None:
        """
        Accumulate pairwise forces for every unordered pair.

        Every particle's force is zeroed first, so the result does not depend
        on what the previous tick left behind.
        """
        for p in particles:
            p.clear_force()

        n = len(particles)
        for i in range(n):
            pi = particles[i]
            if pi.charge == 0.0:
                continue
            for j in range(i + 1, n):
                pj = particles[j]
                if pj.charge == 0.0:
                    continue
                fx, fy, _ = self.pair_force(pi, pj)

                # Newton's third law
                pi.apply_force(fx, fy)
                pj.apply_force(-fx, -fy)
