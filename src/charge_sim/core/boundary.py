# MIT License (see LICENSE)
"""
Rectangular domain walls.

A free particle whose edge crosses a wall is moved back so it touches the
wall, and its wall-normal velocity is pointed back into the domain and
scaled by the restitution factor. The two axes are handled independently,
so corner hits resolve both components in one call.

The bounds are passed in on every call rather than stored on particles, so
a resize takes effect on the next tick.
"""
from __future__ import annotations
from dataclasses import dataclass

from ..constants import DEFAULT_RESTITUTION
from ..errors import ConfigurationError
from ..types import Particle


def _reflect_axis(
    particle: Particle, axis: int, extent: float, restitution: float
) -> bool:
    """Resolve one axis against [0, extent]. Returns True if it touched a wall."""
    r = particle.radius
    x = particle.position[axis]
    v = particle.velocity[axis]

    if extent <= 2.0 * r:
        # Domain narrower than the particle: centre it and stop on this axis.
        centre = 0.5 * extent
        if x == centre and v == 0.0:
            return False
        particle.position[axis] = centre
        particle.velocity[axis] = 0.0
        return True

    if x - r < 0.0:
        particle.position[axis] = r
        particle.velocity[axis] = abs(v) * restitution
        return True
    if x + r > extent:
        particle.position[axis] = extent - r
        particle.velocity[axis] = -abs(v) * restitution
        return True
    return False


@dataclass
class BoundaryPolicy:
    """
    Elastic (restitution = 1) or lossy (restitution < 1) wall bounces.

    Attributes:
        restitution: Fraction of the wall-normal speed kept, in [0, 1].
    """
    restitution: float = DEFAULT_RESTITUTION

    def __post_init__(self) -> None:
        self.restitution = float(self.restitution)
        if not 0.0 <= self.restitution <= 1.0:
            raise ConfigurationError(
                f"restitution must be in [0, 1], got {self.restitution}"
            )

    def enforce(self, particle: Particle, width: float, height: float) -> bool:
        """
        Keep a free particle inside [0, width] x [0, height].

        Orbital and fixed particles are exempt. Calling this again on a
        particle that is already inside changes nothing.

        Returns:
            True if the particle was corrected.
        """
        if not particle.is_free:
            return False
        hit_x = _reflect_axis(particle, 0, width, self.restitution)
        hit_y = _reflect_axis(particle, 1, height, self.restitution)
        return hit_x or hit_y
