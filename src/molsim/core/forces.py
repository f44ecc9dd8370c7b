# MIT License (see LICENSE)
"""
Pairwise force model.

For a subject particle A and a source particle B at distance r, each
interaction contributes a signed scalar along the unit vector from A to B.
A positive value pulls A towards B. For a pair potential U(r) this scalar is
exactly dU/dr:

    gravity          U = -G·mA·mB / r        ->  +G·mA·mB / r²
    electrostatic    U = +k·qA·qB / r        ->  -k·qA·qB / r²
    Lennard-Jones    U = 4ε[(σ/r)¹² - (σ/r)⁶] ->  -24ε/r · [2(σ/r)¹² - (σ/r)⁶]

The three scalars are summed and applied once along the direction, giving a
single force vector per ordered pair. The Lennard-Jones term is zero beyond
cutoff·σ and can alternatively be evaluated by central differences of U.

Complexity of accumulate_force is O(N) per particle, O(N²) per step. There is
no neighbour list.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from ..constants import LENNARD_JONES_CUTOFF, ROOT_MACHINE_EPSILON
from ..elements import Element, LJParameters, pair_parameters
from ..errors import UndefinedOperation
from ..types import Particle
from ..util import add, magnitude, normalize, scale, subtract, zero

if TYPE_CHECKING:
    from ..universe import Universe


def gravitational_force(c_grav: float, a: Particle, b: Particle, dst: float) -> float:
    """Newtonian attraction G·mA·mB / r² (always >= 0 along A→B)."""
    return c_grav * a.mass * b.mass / (dst * dst)


def electrostatic_force(c_elec: float, a: Particle, b: Particle, dst: float) -> float:
    """
    Coulomb interaction along A→B.

    Negative for like charges (A is pushed away from B), positive for
    unlike charges.
    """
    return -c_elec * a.charge * b.charge / (dst * dst)


def lennard_jones_potential(dst: float, params: LJParameters) -> float:
    """12-6 pair energy 4ε[(σ/r)¹² - (σ/r)⁶] in Joules."""
    sr2 = (params.sigma * params.sigma) / (dst * dst)
    sr6 = sr2 * sr2 * sr2
    return 4.0 * params.epsilon * (sr6 * sr6 - sr6)


def lennard_jones_force(
    a: Particle,
    b: Particle,
    dst: float,
    elements: dict[str, Element] | None = None,
    cutoff: float = LENNARD_JONES_CUTOFF,
    numerical: bool = False,
) -> float:
    """
    Lennard-Jones interaction along A→B.

    Args:
        a: Subject particle.
        b: Source particle.
        dst: Distance between the two, in metres. Must be > 0.
        elements: Element table used to look up ε and σ by label.
        cutoff: Cutoff in units of the pair σ; beyond it the force is zero.
        numerical: Differentiate the potential by central differences
            instead of using the closed form.

    Returns:
        Signed scalar; negative when the pair is inside the repulsive core.
    """
    params = pair_parameters(a.element, b.element, elements)
    if dst > cutoff * params.sigma:
        return 0.0

    if numerical:
        h = ROOT_MACHINE_EPSILON * dst
        return (
            lennard_jones_potential(dst + h, params) - lennard_jones_potential(dst - h, params)
        ) / (2.0 * h)

    sr2 = (params.sigma * params.sigma) / (dst * dst)
    sr6 = sr2 * sr2 * sr2
    return -24.0 * params.epsilon * (2.0 * sr6 * sr6 - sr6) / dst


def pair_force(
    universe: "Universe",
    a: Particle,
    b: Particle,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """
    Combined force exerted on a by b.

    Args:
        universe: Supplies the coupling constants and LJ settings.
        a: Subject particle.
        b: Source particle (must be a different particle).
        out: Optional destination vector.

    Raises:
        UndefinedOperation: If a and b occupy the same position.
    """
    direction = subtract(b.position, a.position, out=out)
    dst = magnitude(direction)
    if dst == 0.0:
        raise UndefinedOperation(
            f"particles {a.element!r} and {b.element!r} coincide at {a.position.tolist()}"
        )
    normalize(direction, out=direction)

    total = (
        gravitational_force(universe.c_grav, a, b, dst)
        + electrostatic_force(universe.c_elec, a, b, dst)
        + lennard_jones_force(
            a, b, dst,
            elements=universe.elements,
            cutoff=universe.lj_cutoff,
            numerical=universe.numerical,
        )
    )
    return scale(direction, total, out=direction)


def accumulate_force(universe: "Universe", idx: int) -> np.ndarray:
    """
    Recompute the net force on particle idx from every other particle.

    The force is reset to zero first, then contributions are summed in the
    insertion order of universe.particles, so the result is reproducible
    bit for bit. With fewer than two particles the force stays zero.

    Returns:
        The particle's force vector (updated in place).
    """
    current = universe.particles[idx]
    current.force.fill(0.0)
    contribution = zero()
    for j, other in enumerate(universe.particles):
        if j == idx:
            continue
        pair_force(universe, current, other, out=contribution)
        add(current.force, contribution, out=current.force)
    return current.force
