# MIT License (see LICENSE)
"""
Atom preset: a fixed nucleus with orbiting quarks and electrons.

This is a picture-book atom, not quantum mechanics. Structure:
- A neutral nucleus core (fixed) at the centre, anchor for the electrons.
- Z protons and round(1.2 Z) neutrons (fixed), laid out on a Fibonacci
  sphere of radius 10 and projected onto the plane.
- Three quarks circling each nucleon (proton uud, neutron udd). When quarks
  are present they carry the nucleon's charge and the nucleon itself is
  neutral, so the total charge is counted once.
- Z electrons circling the core, filled in Aufbau order with two electrons
  per orbital. Outer shells turn more slowly (0.6 / n rad/s).

Reference:
    Aufbau principle: https://en.wikipedia.org/wiki/Aufbau_principle
"""
from __future__ import annotations
from dataclasses import dataclass
import math

import numpy as np

from .core.integrators import orbital_step
from .errors import ConfigurationError
from .types import FixedAnchor, Orbital, Particle
from .util import f64

MAX_ATOMIC_NUMBER = 118

NEUTRON_RATIO = 1.2
NUCLEUS_RADIUS = 25.0
NUCLEON_SHELL_RADIUS = 10.0
NUCLEON_RADIUS = 4.0
QUARK_ORBIT_RADIUS = 3.0
QUARK_RADIUS = 1.0
QUARK_ANGULAR_SPEED = 3.0
ELECTRON_RADIUS = 2.0
ELECTRON_BASE_ANGULAR_SPEED = 0.6
ELECTRON_PHASE_STEP = 0.7 * math.pi

UP_CHARGE = 2.0 / 3.0
DOWN_CHARGE = -1.0 / 3.0

# (label, principal quantum number n, orbitals, orbit radius) in filling order
SUBSHELLS: tuple[tuple[str, int, int, float], ...] = (
    ("1s", 1, 1, 50.0),
    ("2s", 2, 1, 80.0),
    ("2p", 2, 3, 80.0),
    ("3s", 3, 1, 120.0),
    ("3p", 3, 3, 120.0),
    ("4s", 4, 1, 160.0),
    ("3d", 3, 5, 140.0),
    ("4p", 4, 3, 160.0),
    ("5s", 5, 1, 200.0),
    ("4d", 4, 5, 180.0),
    ("5p", 5, 3, 200.0),
    ("6s", 6, 1, 240.0),
    ("4f", 4, 7, 190.0),
    ("5d", 5, 5, 220.0),
    ("6p", 6, 3, 240.0),
    ("7s", 7, 1, 280.0),
    ("5f", 5, 7, 230.0),
    ("6d", 6, 5, 260.0),
    ("7p", 7, 3, 280.0),
)


@dataclass(frozen=True)
class ShellOccupancy:
    label: str
    n: int
    electrons: int
    radius: float


def electron_configuration(atomic_number: int) -> list[ShellOccupancy]:
    """
    Occupied subshells for a neutral atom, in filling order.

    >>> [(s.label, s.electrons) for s in electron_configuration(6)]
    [('1s', 2), ('2s', 2), ('2p', 2)]
    """
    _check_atomic_number(atomic_number)
    remaining = atomic_number
    shells = []
    for label, n, orbitals, radius in SUBSHELLS:
        if remaining <= 0:
            break
        count = min(2 * orbitals, remaining)
        shells.append(ShellOccupancy(label=label, n=n, electrons=count, radius=radius))
        remaining -= count
    return shells


def nucleon_offsets(
    count: int, offset: float = 0.0, radius: float = NUCLEON_SHELL_RADIUS
) -> np.ndarray:
    """
    Planar offsets of `count` points spread over a sphere (Fibonacci spiral).

    Returns:
        Array of shape (count, 2).
    """
    if count <= 0:
        return np.zeros((0, 2), dtype=np.float64)
    i = np.arange(count, dtype=np.float64)
    phi = np.arccos(-1.0 + 2.0 * i / count)
    theta = math.sqrt(count * math.pi) * phi + offset
    return np.stack(
        [radius * np.cos(theta) * np.sin(phi), radius * np.sin(theta) * np.sin(phi)],
        axis=1,
    )


def _check_atomic_number(atomic_number: int) -> None:
    if isinstance(atomic_number, bool) or not isinstance(atomic_number, (int, np.integer)):
        raise ConfigurationError(f"atomic number must be an integer, got {atomic_number!r}")
    if not 1 <= atomic_number <= MAX_ATOMIC_NUMBER:
        raise ConfigurationError(
            f"atomic number must be in [1, {MAX_ATOMIC_NUMBER}], got {atomic_number}"
        )


def _place(particle: Particle) -> Particle:
    """Put an orbital particle on its circle at its initial phase."""
    orbital_step(particle, particle.motion, 0.0)
    return particle


def _quarks(nucleon: Particle, flavours: str) -> list[Particle]:
    quarks = []
    for i, flavour in enumerate(flavours):
        up = flavour == "u"
        quarks.append(_place(Particle(
            charge=UP_CHARGE if up else DOWN_CHARGE,
            mass=1.0 / 3.0,
            radius=QUARK_RADIUS,
            motion=Orbital(
                anchor=nucleon,
                radius=QUARK_ORBIT_RADIUS,
                angular_speed=QUARK_ANGULAR_SPEED,
                angle=2.0 * math.pi * i / 3.0,
            ),
            kind="up" if up else "down",
        )))
    return quarks


def build_atom(
    atomic_number: int,
    center: tuple[float, float] = (0.0, 0.0),
    with_quarks: bool = True,
) -> list[Particle]:
    """
    Particles for a neutral atom, anchors before the particles that orbit them.

    Args:
        atomic_number: Z, 1..118.
        center: Nucleus position.
        with_quarks: Add three orbiting quarks per nucleon.

    Raises:
        ConfigurationError: If Z is out of range.
    """
    _check_atomic_number(atomic_number)
    center_v = f64(center)
    n_protons = int(atomic_number)
    n_neutrons = round(atomic_number * NEUTRON_RATIO)

    core = Particle(
        charge=0.0,
        mass=float(n_protons + n_neutrons),
        radius=NUCLEUS_RADIUS,
        position=center_v,
        motion=FixedAnchor(),
        kind="nucleus",
    )
    particles = [core]

    nucleons = []
    for kind, count, charge, phase, flavours in (
        ("proton", n_protons, 1.0, 0.0, "uud"),
        ("neutron", n_neutrons, 0.0, math.pi / 6.0, "udd"),
    ):
        for off in nucleon_offsets(count, offset=phase):
            nucleon = Particle(
                charge=0.0 if with_quarks else charge,
                mass=1.0,
                radius=NUCLEON_RADIUS,
                position=center_v + off,
                motion=FixedAnchor(),
                kind=kind,
            )
            nucleons.append((nucleon, flavours))
    particles.extend(n for n, _ in nucleons)

    if with_quarks:
        for nucleon, flavours in nucleons:
            particles.extend(_quarks(nucleon, flavours))

    index = 0
    for shell in electron_configuration(atomic_number):
        for _ in range(shell.electrons):
            particles.append(_place(Particle(
                charge=-1.0,
                mass=1.0,
                radius=ELECTRON_RADIUS,
                motion=Orbital(
                    anchor=core,
                    radius=shell.radius,
                    angular_speed=ELECTRON_BASE_ANGULAR_SPEED / shell.n,
                    angle=index * ELECTRON_PHASE_STEP,
                ),
                kind="electron",
            )))
            index += 1
    return particles
