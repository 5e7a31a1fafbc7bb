# MIT License (see LICENSE)
"""
The simulation world and its per-tick pipeline.

The Simulation class is the single owner of the particle collection and the
entry point for hosts (renderers, UIs, scripts). It manages:
- Population: random charges (initialize/reset) or the atom preset.
- Tunables: force scale, time scale, damping, restitution, dt ceiling.
- The tick pipeline, run once per frame by the SimulationClock:
    1. ForceModel.apply_all_forces   (O(N²) pairwise pass)
    2. Integrator.integrate          (each particle)
    3. BoundaryPolicy.enforce        (each particle)
    4. StatisticsCollector.update

Structure:
    - Host creates a Simulation and populates it.
    - Host calls start(), then tick(t) once per frame (or passes a
      request_frame hook and lets the clock reschedule itself).
    - Between ticks the host reads get_particles() / get_statistics().

All mutation happens inside tick on the caller's thread; snapshots returned
to the host are copies.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math
from collections.abc import Mapping, Sequence

import numpy as np

from .atom import build_atom
from .clock import RequestFrame, SimulationClock
from .constants import (
    DEFAULT_CHARGE_DISTRIBUTION,
    DEFAULT_DAMPING,
    DEFAULT_FORCE_SCALE,
    DEFAULT_FPS_WINDOW,
    DEFAULT_HEIGHT,
    DEFAULT_MAX_DT,
    DEFAULT_MAX_FORCE,
    DEFAULT_MIN_DISTANCE,
    DEFAULT_RESTITUTION,
    DEFAULT_WIDTH,
    INITIAL_SPEED,
    PARTICLE_MASS,
    PARTICLE_RADIUS,
    PROBABILITY_TOLERANCE,
    SPAWN_PADDING,
)
from .core.boundary import BoundaryPolicy
from .core.forces import ForceModel
from .core.integrators import Integrator
from .errors import ConfigurationError
from .profiler import Profiler
from .statistics import Statistics, StatisticsCollector
from .types import Particle, ParticleView
from .util import require_finite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChargeDistribution:
    """
    Probabilities of drawing a +1, -1 or 0 charge for a new particle.

    Raises:
        ConfigurationError: If a probability is negative or they do not sum to 1.
    """
    positive: float
    negative: float
    neutral: float

    def __post_init__(self) -> None:
        values = (self.positive, self.negative, self.neutral)
        for name, value in zip(("positive", "negative", "neutral"), values):
            if not math.isfinite(value) or value < 0.0:
                raise ConfigurationError(
                    f"{name} probability must be a finite value >= 0, got {value!r}"
                )
        total = math.fsum(values)
        if abs(total - 1.0) > PROBABILITY_TOLERANCE:
            raise ConfigurationError(
                f"charge probabilities must sum to 1.0, got {total:.6f}"
            )

    @classmethod
    def coerce(
        cls, value: "ChargeDistribution | Mapping[str, float] | Sequence[float]"
    ) -> "ChargeDistribution":
        """Accept an instance, a {positive, negative, neutral} mapping or a 3-sequence."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(
                    float(value["positive"]),
                    float(value["negative"]),
                    float(value["neutral"]),
                )
            except KeyError as exc:
                raise ConfigurationError(f"charge distribution missing key {exc}") from exc
        values = tuple(float(v) for v in value)
        if len(values) != 3:
            raise ConfigurationError(
                f"charge distribution needs 3 probabilities, got {len(values)}"
            )
        return cls(*values)

    def draw(self, rng: np.random.Generator, count: int) -> np.ndarray:
        """Independent per-particle draws, returned as charges in {-1, 0, +1}."""
        u = rng.random(count)
        return np.where(
            u < self.positive,
            1.0,
            np.where(u < self.positive + self.negative, -1.0, 0.0),
        )


@dataclass
class Simulation:
    """
    Charged-particle world.

    Attributes:
        width, height: Domain size; walls sit at 0 and at these values.
        force_scale: k in F = k q1 q2 / r².
        min_distance: Distance clamp for force and energy.
        max_force: Cap on a single pair force magnitude.
        damping: Per-tick velocity multiplier for free particles.
        restitution: Wall-normal speed kept on a bounce.
        max_dt: Largest step a single tick may integrate, in seconds.
        time_scale: Wall-clock to simulation-time multiplier.
        fps_window: Frame deltas averaged for the FPS figure.
        seed: Seed for the random spawner (None = fresh entropy).
        request_frame: Optional host hook used to reschedule ticks.
        profiler: Optional Profiler timing the pipeline sections.
    """
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    force_scale: float = DEFAULT_FORCE_SCALE
    min_distance: float = DEFAULT_MIN_DISTANCE
    max_force: float = DEFAULT_MAX_FORCE
    damping: float = DEFAULT_DAMPING
    restitution: float = DEFAULT_RESTITUTION
    max_dt: float = DEFAULT_MAX_DT
    time_scale: float = 1.0
    fps_window: int = DEFAULT_FPS_WINDOW
    seed: int | None = None
    request_frame: RequestFrame | None = None
    profiler: Profiler | None = None

    # Internal state
    particles: list[Particle] = field(default_factory=list)
    time: float = 0.0

    def __post_init__(self) -> None:
        self.width = require_finite("width", self.width)
        self.height = require_finite("height", self.height)
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"bounds must be positive, got {self.width} x {self.height}"
            )

        self.force_model = ForceModel(
            k=self.force_scale, min_distance=self.min_distance, max_force=self.max_force
        )
        self.integrator = Integrator(damping=self.damping)
        self.boundary = BoundaryPolicy(restitution=self.restitution)
        self.statistics = StatisticsCollector(self.force_model, window=self.fps_window)
        self.clock = SimulationClock(
            self._step,
            max_dt=self.max_dt,
            time_scale=self.time_scale,
            request_frame=self.request_frame,
        )
        self._rng = np.random.default_rng(self.seed)
        self._distribution = ChargeDistribution(*DEFAULT_CHARGE_DISTRIBUTION)
        self._particle_count = 0
        self._atomic_number: int | None = None
        self._with_quarks = True

        if self.particles:
            self._replace(list(self.particles))
            self._particle_count = len(self.particles)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def initialize(
        self,
        particle_count: int,
        charge_distribution: (
            ChargeDistribution | Mapping[str, float] | Sequence[float] | None
        ) = None,
    ) -> None:
        """
        Replace all particles with `particle_count` randomly placed charges.

        Charges come from independent draws against the distribution
        thresholds. Positions are uniform inside the bounds (minus padding),
        velocity components uniform in [-1, 1].

        Raises:
            ConfigurationError: On a non-positive count or a bad distribution.
                Nothing is changed in that case.
        """
        if isinstance(particle_count, bool) or not isinstance(
            particle_count, (int, np.integer)
        ):
            raise ConfigurationError(
                f"particle count must be an integer, got {particle_count!r}"
            )
        if particle_count <= 0:
            raise ConfigurationError(f"particle count must be > 0, got {particle_count}")
        distribution = (
            self._distribution
            if charge_distribution is None
            else ChargeDistribution.coerce(charge_distribution)
        )

        n = int(particle_count)
        charges = distribution.draw(self._rng, n)
        pad_x = min(SPAWN_PADDING, 0.5 * self.width)
        pad_y = min(SPAWN_PADDING, 0.5 * self.height)
        xs = self._rng.uniform(pad_x, self.width - pad_x, n)
        ys = self._rng.uniform(pad_y, self.height - pad_y, n)
        vs = self._rng.uniform(-INITIAL_SPEED, INITIAL_SPEED, (n, 2))

        self._replace([
            Particle(
                charge=charges[i],
                mass=PARTICLE_MASS,
                radius=PARTICLE_RADIUS,
                position=(xs[i], ys[i]),
                velocity=vs[i],
            )
            for i in range(n)
        ])
        self._distribution = distribution
        self._particle_count = n
        self._atomic_number = None
        logger.info(
            "initialized %d particles (p+=%.2f p-=%.2f p0=%.2f)",
            n, distribution.positive, distribution.negative, distribution.neutral,
        )

    def load_atom(self, atomic_number: int, with_quarks: bool = True) -> None:
        """
        Replace all particles with the atom preset, centred in the domain.

        Raises:
            ConfigurationError: If the atomic number is outside 1..118.
        """
        particles = build_atom(
            atomic_number,
            center=(0.5 * self.width, 0.5 * self.height),
            with_quarks=with_quarks,
        )
        self._replace(particles)
        self._atomic_number = int(atomic_number)
        self._with_quarks = bool(with_quarks)
        self._particle_count = len(particles)
        logger.info("loaded atom Z=%d (%d particles)", atomic_number, len(particles))

    def reset(self, particle_count: int | None = None) -> None:
        """
        Rebuild the population.

        With a count, draws that many random charges using the last charge
        distribution. Without one, repeats the last setup (random or atom).
        """
        if particle_count is not None:
            self.initialize(particle_count)
        elif self._atomic_number is not None:
            self.load_atom(self._atomic_number, self._with_quarks)
        elif self._particle_count > 0:
            self.initialize(self._particle_count)
        else:
            raise ConfigurationError("nothing to reset: simulation was never initialized")

    def set_particle_count(self, particle_count: int) -> None:
        self.reset(particle_count)

    def add_particle(self, particle: Particle) -> int:
        """
        Add one particle and return its id.

        Orbital particles must be added after their anchor.
        """
        particle.id = len(self.particles)
        self.particles.append(particle)
        self._particle_count = len(self.particles)
        self.statistics.update(self.particles)
        return particle.id

    def _replace(self, particles: list[Particle]) -> None:
        for i, p in enumerate(particles):
            p.id = i
            p.clear_force()
        self.particles = particles
        self.time = 0.0
        self.statistics.reset()
        self.statistics.update(self.particles)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def start(self, current_time: float | None = None) -> None:
        self.clock.start(current_time)

    def pause(self) -> None:
        self.clock.pause()

    def stop(self) -> None:
        self.clock.stop()

    @property
    def running(self) -> bool:
        return self.clock.running

    def set_force_scale(self, k: float) -> None:
        """Takes effect on the next tick (and on the next energy readout)."""
        self.force_model.k = require_finite("force scale", k)
        self.force_scale = self.force_model.k

    def set_time_scale(self, multiplier: float) -> None:
        """Takes effect on the next tick."""
        self.clock.set_time_scale(multiplier)
        self.time_scale = self.clock.time_scale

    def resize(self, width: float, height: float) -> None:
        """New bounds, applied by the boundary pass of the next tick."""
        width = require_finite("width", width)
        height = require_finite("height", height)
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"bounds must be positive, got {width} x {height}")
        self.width, self.height = width, height

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def tick(self, current_time: float) -> bool:
        """Advance one frame if running. Returns True if a step was taken."""
        return self.clock.tick(current_time)

    def step(self, dt: float) -> None:
        """Run the pipeline once with an explicit dt (clamped to max_dt)."""
        self._step(min(max(float(dt), 0.0), self.clock.max_dt), None)

    def _step(self, dt: float, frame_dt: float | None) -> None:
        prof = self.profiler
        if prof:
            with prof.section("forces"):
                self.force_model.apply_all_forces(self.particles)
            with prof.section("integrate"):
                self._integrate(dt)
            with prof.section("boundary"):
                self._enforce_bounds()
            with prof.section("statistics"):
                self.statistics.update(self.particles, frame_dt)
        else:
            self.force_model.apply_all_forces(self.particles)
            self._integrate(dt)
            self._enforce_bounds()
            self.statistics.update(self.particles, frame_dt)
        self.time += dt

    def _integrate(self, dt: float) -> None:
        for p in self.particles:
            self.integrator.integrate(p, dt)

    def _enforce_bounds(self) -> None:
        for p in self.particles:
            self.boundary.enforce(p, self.width, self.height)

    # ------------------------------------------------------------------
    # Readout
    # ------------------------------------------------------------------

    def get_particles(self) -> tuple[ParticleView, ...]:
        """Read-only snapshot of every particle."""
        return tuple(p.view() for p in self.particles)

    def get_statistics(self) -> Statistics:
        """Aggregate metrics as of the last tick (or population change)."""
        return self.statistics.latest
