# MIT License (see LICENSE)
"""
Core type definitions for the charge simulation.

Defines:
- Motion modes (Free, Orbital, FixedAnchor): the closed set of ways a
  particle's position can evolve.
- Particle: a point charge with position, velocity and accumulated force.
- ParticleView: an immutable snapshot handed to renderers and UIs.

Free particles follow Newtonian motion under the accumulated force:
  dv/dt = F/m,  dx/dt = v
Orbital particles are driven by a phase angle around an anchor particle,
and fixed anchors do not move at all.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .errors import ConfigurationError
from .util import f64


# =============================================================================
# Motion Modes
# =============================================================================

@dataclass(frozen=True)
class Free:
    """Moves under the accumulated electrostatic force."""

    name = "free"


@dataclass
class Orbital:
    """
    Circular motion around another particle.

    The anchor is a non-owning reference; it must stay in the simulation
    for as long as this particle does (guaranteed by creating anchors first
    and replacing the whole collection on reset).

    Attributes:
        anchor: Particle whose position is the orbit centre.
        radius: Orbit radius.
        angular_speed: Phase rate in rad/s (counterclockwise positive).
        angle: Current phase in radians.
    """
    anchor: "Particle"
    radius: float
    angular_speed: float
    angle: float = 0.0

    name = "orbital"


@dataclass(frozen=True)
class FixedAnchor:
    """Held in place; ignores forces entirely."""

    name = "fixed"


MotionMode = Free | Orbital | FixedAnchor


# =============================================================================
# Particle
# =============================================================================

@dataclass(eq=False)
class Particle:
    """
    A point charge.

    Attributes:
        charge: Signed charge (usually -1, 0 or +1; fractional for quarks).
        mass: Mass, must be > 0. Scales force to acceleration.
        radius: Size used for wall contact only; forces treat particles as points.
        position: [x, y].
        velocity: [vx, vy]. For orbital particles this is the derived
            tangential velocity written by the integrator.
        motion: Motion mode (Free, Orbital or FixedAnchor).
        kind: Display label for renderers ("positive", "electron", ...).
        force: Accumulated force [Fx, Fy] for the current tick.
        id: Index assigned when the particle joins a simulation.
    """
    charge: float
    mass: float = 1.0
    radius: float = 6.0
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    motion: MotionMode = field(default_factory=Free)
    kind: str = ""

    # Runtime state
    force: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))
    id: int = -1

    def __post_init__(self) -> None:
        if not self.mass > 0:
            raise ConfigurationError(f"mass must be > 0, got {self.mass!r}")
        if not self.radius > 0:
            raise ConfigurationError(f"radius must be > 0, got {self.radius!r}")
        self.charge = float(self.charge)
        self.mass = float(self.mass)
        self.radius = float(self.radius)
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.force = f64(self.force)
        if not self.kind:
            self.kind = charge_kind(self.charge)

    @property
    def is_free(self) -> bool:
        return isinstance(self.motion, Free)

    @property
    def speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[1]))

    def apply_force(self, fx: float, fy: float) -> None:
        self.force[0] += fx
        self.force[1] += fy

    def clear_force(self) -> None:
        """Reset accumulated force to zero for the next tick."""
        self.force[:] = 0.0

    def view(self) -> "ParticleView":
        """Immutable copy of the render-relevant state."""
        return ParticleView(
            id=self.id,
            kind=self.kind,
            position=(float(self.position[0]), float(self.position[1])),
            velocity=(float(self.velocity[0]), float(self.velocity[1])),
            charge=self.charge,
            mass=self.mass,
            radius=self.radius,
            motion=self.motion.name,
        )


@dataclass(frozen=True)
class ParticleView:
    """Read-only particle snapshot taken between ticks."""
    id: int
    kind: str
    position: tuple[float, float]
    velocity: tuple[float, float]
    charge: float
    mass: float
    radius: float
    motion: str


def charge_kind(charge: float) -> str:
    """Default display label for a charge value."""
    if charge > 0:
        return "positive"
    if charge < 0:
        return "negative"
    return "neutral"
