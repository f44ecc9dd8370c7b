# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness and debugging stability issues.
Pair forces here are central and derived from potentials, so total energy
and linear momentum should remain constant up to integration error. The
core recomputes each side of a pair independently, so momentum is conserved
only to rounding.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from .forces import lennard_jones_potential
from ..elements import pair_parameters
from ..types import Particle
from ..util import magnitude, subtract

if TYPE_CHECKING:
    from ..universe import Universe


def kinetic_energy(particles: list[Particle]) -> float:
    """
    Calculate the total kinetic energy of a set of particles.

    T = Σ 0.5 * m * v²

    Returns:
        Total kinetic energy in Joules.
    """
    ke = 0.0
    for p in particles:
        ke += 0.5 * p.mass * float(np.dot(p.velocity, p.velocity))
    return ke


def linear_momentum(particles: list[Particle]) -> np.ndarray:
    """
    Calculate the total linear momentum of a set of particles.

    P = Σ m * v

    Returns:
        Total momentum vector [Px, Py, Pz] in kg·m/s.
    """
    p_total = np.zeros(3, dtype=np.float64)
    for p in particles:
        p_total += p.mass * p.velocity
    return p_total


def potential_energy(universe: "Universe") -> float:
    """
    Total pair potential energy (gravity + Coulomb + Lennard-Jones).

    Each unordered pair is counted once. The Lennard-Jones term is truncated
    (not shifted) at the universe's cutoff, matching the force model.
    Coincident pairs have no defined energy and are skipped.
    """
    particles = universe.particles
    u = 0.0
    for i in range(len(particles) - 1):
        a = particles[i]
        for j in range(i + 1, len(particles)):
            b = particles[j]
            r = magnitude(subtract(b.position, a.position))
            if r == 0.0:
                continue
            u -= universe.c_grav * a.mass * b.mass / r
            u += universe.c_elec * a.charge * b.charge / r
            params = pair_parameters(a.element, b.element, universe.elements)
            if r <= universe.lj_cutoff * params.sigma:
                u += lennard_jones_potential(r, params)
    return u


def total_energy(universe: "Universe") -> float:
    """Kinetic plus potential energy in Joules."""
    return kinetic_energy(universe.particles) + potential_energy(universe)
