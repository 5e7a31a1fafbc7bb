# MIT License (see LICENSE)
"""
charge_sim - A 2D point-charge simulation engine.

Point charges interact through a clamped inverse-square force, are
integrated in real time with damping, bounce off the walls of a
rectangular domain, and report energy/speed/FPS statistics. Rendering and
UI are left to the host; the engine exposes per-frame particle snapshots.

Main entry points:
    - Simulation: The world; population, controls, tick pipeline, readout.
    - Particle: A point charge with a motion mode (Free, Orbital, FixedAnchor).
    - ChargeDistribution: Probabilities for random charge assignment.

Submodules:
    - core: ForceModel, Integrator, BoundaryPolicy and energy invariants.
    - clock: The Stopped/Running frame clock.
    - statistics: Aggregate metrics.
    - atom: Nucleus/quark/electron preset.
    - driver: Headless request_frame implementation.

Note:
    The force pass is O(N²); a few hundred particles is the practical
    ceiling at display frame rates.

Example:
    from charge_sim import Simulation

    sim = Simulation(width=800, height=600, seed=1)
    sim.initialize(50, (0.4, 0.4, 0.2))
    sim.start(0.0)
    sim.tick(1 / 60)
    print(sim.get_statistics())
"""
from .simulation import Simulation, ChargeDistribution
from .types import Particle, ParticleView, Free, Orbital, FixedAnchor
from .statistics import Statistics
from .errors import ConfigurationError

__version__ = "0.1.0"

__all__ = [
    # Core simulation
    "Simulation",
    "ChargeDistribution",
    # Particles
    "Particle",
    "ParticleView",
    "Free",
    "Orbital",
    "FixedAnchor",
    # Readout
    "Statistics",
    # Errors
    "ConfigurationError",
]
