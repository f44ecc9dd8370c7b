# MIT License (see LICENSE)
"""
Per-particle phases of the semi-implicit (symplectic) Euler scheme.

One step of the scheme is four phases, each run over every particle before
the next one starts:

    1. force          F_i   = Σ_j≠i f(i, j)      (from current positions)
    2. acceleration   a_i   = F_i / m_i
    3. velocity       v_i  += a_i · dt
    4. position       x_i  += v_i · dt           (uses the new velocity)

Each function here performs one phase for one particle, identified by its
index in the universe, and writes only that particle's fields. The ordering
and the barriers between phases are enforced by Universe.step().

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from .forces import accumulate_force
from ..util import add, divide, scale, zero

if TYPE_CHECKING:
    from ..universe import Universe


def update_force(universe: "Universe", idx: int) -> np.ndarray:
    """Phase 1: recompute the net force on particle idx."""
    return accumulate_force(universe, idx)


def update_acceleration(universe: "Universe", idx: int) -> np.ndarray:
    """
    Phase 2: a = F / m.

    Raises:
        DivisionByZero: If the particle's mass is zero.
    """
    p = universe.particles[idx]
    return divide(p.force, p.mass, out=p.acceleration)


def update_velocity(universe: "Universe", idx: int) -> np.ndarray:
    """Phase 3: v += a·dt."""
    p = universe.particles[idx]
    dv = scale(p.acceleration, universe.c_time, out=zero())
    return add(p.velocity, dv, out=p.velocity)


def update_position(universe: "Universe", idx: int) -> np.ndarray:
    """Phase 4: x += v·dt, with the velocity from phase 3."""
    p = universe.particles[idx]
    dx = scale(p.velocity, universe.c_time, out=zero())
    return add(p.position, dx, out=p.position)


# Phase order of one step. Universe.step() runs them in this order.
PHASES = (
    ("forces", update_force),
    ("acceleration", update_acceleration),
    ("velocity", update_velocity),
    ("position", update_position),
)
