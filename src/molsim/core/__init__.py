# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Force model: gravitational, electrostatic and Lennard-Jones pair forces.
    - Integrator phases: force, acceleration, velocity, position.
    - Invariants: kinetic/potential energy and linear momentum.

Typical usage:
    from molsim.core import accumulate_force, update_acceleration

    accumulate_force(universe, 0)
    update_acceleration(universe, 0)
"""
from .forces import (
    gravitational_force,
    electrostatic_force,
    lennard_jones_potential,
    lennard_jones_force,
    pair_force,
    accumulate_force,
)
from .integrators import (
    PHASES,
    update_force,
    update_acceleration,
    update_velocity,
    update_position,
)
from .invariants import kinetic_energy, linear_momentum, potential_energy, total_energy

__all__ = [
    # Forces
    "gravitational_force",
    "electrostatic_force",
    "lennard_jones_potential",
    "lennard_jones_force",
    "pair_force",
    "accumulate_force",
    # Integrator phases
    "PHASES",
    "update_force",
    "update_acceleration",
    "update_velocity",
    "update_position",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "potential_energy",
    "total_energy",
]
