# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - ForceModel: Clamped Coulomb-style pair forces and potential energy.
    - Integrator: Motion-mode aware time stepping with damping.
    - BoundaryPolicy: Rectangular walls with restitution.
    - Invariants: Kinetic/potential energy, mean speed, momentum.

Typical usage:
    from charge_sim.core import ForceModel, Integrator

    ForceModel(k=5000.0).apply_all_forces(particles)
    for p in particles:
        Integrator(damping=0.99).integrate(p, dt=1/60)
"""
from .forces import ForceModel
from .integrators import Integrator, euler_step, orbital_step
from .boundary import BoundaryPolicy
from .invariants import average_speed, kinetic_energy, linear_momentum, potential_energy

__all__ = [
    # Forces
    "ForceModel",
    # Integrators
    "Integrator",
    "euler_step",
    "orbital_step",
    # Boundaries
    "BoundaryPolicy",
    # Invariants
    "kinetic_energy",
    "potential_energy",
    "average_speed",
    "linear_momentum",
]
