# MIT License (see LICENSE)
"""
Aggregate statistics for display.

Energies and mean speed are recomputed from scratch on every update (see
core.invariants). Only the FPS figure carries history: a rolling window of
recent frame deltas.
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
import math
from typing import Sequence

from .constants import DEFAULT_FPS_WINDOW, FPS_EPS
from .core.forces import ForceModel
from .core.invariants import average_speed, kinetic_energy, potential_energy
from .errors import ConfigurationError
from .types import Particle


@dataclass(frozen=True)
class Statistics:
    """Snapshot of the aggregate metrics after a tick."""
    particle_count: int = 0
    kinetic_energy: float = 0.0
    potential_energy: float = 0.0
    total_energy: float = 0.0
    average_speed: float = 0.0
    fps: int = 0

    def as_dict(self) -> dict[str, float | int]:
        return {
            "particleCount": self.particle_count,
            "kineticEnergy": self.kinetic_energy,
            "potentialEnergy": self.potential_energy,
            "totalEnergy": self.total_energy,
            "averageSpeed": self.average_speed,
            "fps": self.fps,
        }


class StatisticsCollector:
    """
    Recomputes Statistics from the particle collection.

    Args:
        force_model: Supplies the pair potential energy.
        window: Number of frame deltas averaged for the FPS figure.
        eps: Lower bound on the mean frame delta (guards 1/0).
    """

    def __init__(
        self,
        force_model: ForceModel,
        window: int = DEFAULT_FPS_WINDOW,
        eps: float = FPS_EPS,
    ) -> None:
        if window <= 0:
            raise ConfigurationError(f"fps window must be > 0, got {window}")
        self.force_model = force_model
        self.eps = eps
        self._frame_dts: deque[float] = deque(maxlen=window)
        self.latest = Statistics()

    @property
    def fps(self) -> int:
        """round(1 / mean frame delta); 0 before any frame was recorded."""
        if not self._frame_dts:
            return 0
        mean_dt = sum(self._frame_dts) / len(self._frame_dts)
        return round(1.0 / max(mean_dt, self.eps))

    def record_frame(self, frame_dt: float) -> None:
        """Add a frame delta to the window; non-finite deltas are dropped."""
        frame_dt = float(frame_dt)
        if math.isfinite(frame_dt):
            self._frame_dts.append(max(frame_dt, 0.0))

    def compute(self, particles: Sequence[Particle]) -> Statistics:
        """Statistics for the given particles without touching the FPS window."""
        ke = kinetic_energy(particles)
        pe = potential_energy(particles, self.force_model)
        return Statistics(
            particle_count=len(particles),
            kinetic_energy=ke,
            potential_energy=pe,
            total_energy=ke + pe,
            average_speed=average_speed(particles),
            fps=self.fps,
        )

    def update(
        self, particles: Sequence[Particle], frame_dt: float | None = None
    ) -> Statistics:
        """Record a frame delta (if given) and refresh the latest snapshot."""
        if frame_dt is not None:
            self.record_frame(frame_dt)
        self.latest = self.compute(particles)
        return self.latest

    def reset(self) -> None:
        """Forget the FPS history."""
        self._frame_dts.clear()
