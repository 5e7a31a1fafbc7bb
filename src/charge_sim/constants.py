# MIT License (see LICENSE)
"""
Default tuning values for the charge simulation.

Units are arbitrary screen units (positions in pixels, time in seconds).
The force scale is not Coulomb's constant: it is tuned so that unit charges
a few tens of units apart produce visible motion at display frame rates.
"""
from __future__ import annotations

# Force scale k in F = k * q1 * q2 / r².
DEFAULT_FORCE_SCALE: float = 5000.0

# Pair distances below this are treated as this distance (force and energy).
DEFAULT_MIN_DISTANCE: float = 20.0

# Upper bound on the magnitude of a single pairwise force.
DEFAULT_MAX_FORCE: float = 500.0

# Per-tick velocity multiplier for free particles.
DEFAULT_DAMPING: float = 0.99

# Fraction of the wall-normal speed kept after a bounce.
DEFAULT_RESTITUTION: float = 0.8

# Largest timestep a single tick may integrate, in seconds (10 Hz).
DEFAULT_MAX_DT: float = 0.1

# Number of frame deltas averaged for the FPS figure.
DEFAULT_FPS_WINDOW: int = 60
FPS_EPS: float = 1e-3

# Simulation domain.
DEFAULT_WIDTH: float = 800.0
DEFAULT_HEIGHT: float = 600.0

# Randomly spawned particles.
PARTICLE_MASS: float = 1.0
PARTICLE_RADIUS: float = 6.0
SPAWN_PADDING: float = 30.0
INITIAL_SPEED: float = 1.0

# (positive, negative, neutral)
DEFAULT_CHARGE_DISTRIBUTION: tuple[float, float, float] = (0.4, 0.4, 0.2)
PROBABILITY_TOLERANCE: float = 1e-6
