# MIT License (see LICENSE)
"""
Time stepping for particles.

Dispatches on the particle's motion mode:
- Free:        semi-implicit Euler with per-tick velocity damping
                 v += (F/m) dt;  v *= damping;  x += v dt
- Orbital:     phase advance around the anchor
                 θ += ω dt;  x = anchor.x + R (cos θ, sin θ)
- FixedAnchor: nothing moves.

The caller clamps dt (see SimulationClock); a dt <= 0 leaves the particle
untouched. Damping is a numerical/visual dissipation factor applied once per
tick regardless of dt, not a drag law.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
from dataclasses import dataclass
import math

from ..constants import DEFAULT_DAMPING
from ..errors import ConfigurationError
from ..types import FixedAnchor, Free, Orbital, Particle


def euler_step(particle: Particle, dt: float, damping: float) -> None:
    """
    Advance a free particle by dt and consume its accumulated force.

    Args:
        particle: Particle to integrate (modified in-place).
        dt: Timestep in seconds, already clamped by the caller.
        damping: Velocity multiplier applied after the force kick.
    """
    particle.velocity += particle.force * (dt / particle.mass)
    particle.velocity *= damping
    particle.position += particle.velocity * dt
    particle.clear_force()


def orbital_step(particle: Particle, motion: Orbital, dt: float) -> None:
    """
    Advance an orbital particle's phase and place it on its circle.

    The stored velocity is the tangential velocity relative to the anchor,
    so its magnitude is radius * |angular_speed|.
    """
    motion.angle += motion.angular_speed * dt
    c, s = math.cos(motion.angle), math.sin(motion.angle)
    anchor = motion.anchor.position
    particle.position[0] = anchor[0] + motion.radius * c
    particle.position[1] = anchor[1] + motion.radius * s
    tangential = motion.radius * motion.angular_speed
    particle.velocity[0] = -tangential * s
    particle.velocity[1] = tangential * c


@dataclass
class Integrator:
    """
    Motion-mode aware integrator.

    Attributes:
        damping: Per-tick velocity multiplier for free particles, in [0, 1].
    """
    damping: float = DEFAULT_DAMPING

    def __post_init__(self) -> None:
        self.damping = float(self.damping)
        if not 0.0 <= self.damping <= 1.0:
            raise ConfigurationError(f"damping must be in [0, 1], got {self.damping}")

    def integrate(self, particle: Particle, dt: float) -> None:
        """Advance one particle by dt (no-op for dt <= 0)."""
        if not dt > 0:
            return
        motion = particle.motion
        if isinstance(motion, Free):
            euler_step(particle, dt, self.damping)
        elif isinstance(motion, Orbital):
            orbital_step(particle, motion, dt)
        elif isinstance(motion, FixedAnchor):
            return
        else:
            raise TypeError(f"Unknown motion mode: {type(motion)}")
