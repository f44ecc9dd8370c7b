# MIT License (see LICENSE)
"""
Core type definitions for the molecular-dynamics engine.

Defines the fundamental data structures:
- ParticleRecord: one particle as read from an input file (input units).
- Particle: the simulation entity with position, velocity, mass, charge.

The equations of motion are plain Newtonian point mechanics:
  dx/dt = v
  dv/dt = F/m
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from .constants import AMU_TO_KG, PM_TO_M, UNKNOWN_ELEMENT
from .errors import InitializationFailure
from .util import f64, zero


class ParticleRecord(NamedTuple):
    """
    One particle as it appears in an input file.

    Units are those of the file format: mass in atomic mass units, charge in
    Coulombs, position in picometres. Velocity, acceleration and force are
    taken as-is; the force is recomputed on the first step anyway.
    """
    element: str
    mass: float
    charge: float
    position: tuple[float, float, float]
    velocity: tuple[float, float, float] = (0.0, 0.0, 0.0)
    acceleration: tuple[float, float, float] = (0.0, 0.0, 0.0)
    force: tuple[float, float, float] = (0.0, 0.0, 0.0)


@dataclass
class Particle:
    """
    A point particle with full kinematic and dynamic state (SI units).

    Attributes:
        element: Element label, at most 2 characters ("??" until loaded).
        mass: Mass in kg. Must be > 0.
        charge: Electric charge in Coulombs (signed, may be 0).
        position: Position [x, y, z] in metres.
        velocity: Velocity [vx, vy, vz] in m/s.
        acceleration: Acceleration [ax, ay, az] in m/s², set from force each step.
        force: Force [Fx, Fy, Fz] in N, recomputed from scratch each step.

    Note:
        Vector fields are converted to float64 numpy arrays on init and are
        then updated in place by the integrator.
    """
    element: str = UNKNOWN_ELEMENT
    mass: float = 1.0
    charge: float = 0.0
    position: np.ndarray | tuple[float, float, float] = field(default_factory=zero)
    velocity: np.ndarray | tuple[float, float, float] = field(default_factory=zero)
    acceleration: np.ndarray | tuple[float, float, float] = field(default_factory=zero)
    force: np.ndarray | tuple[float, float, float] = field(default_factory=zero)

    def __post_init__(self) -> None:
        """Convert vectors to float64 arrays and check the invariants."""
        self.position = _vec3(self.position, "position")
        self.velocity = _vec3(self.velocity, "velocity")
        self.acceleration = _vec3(self.acceleration, "acceleration")
        self.force = _vec3(self.force, "force")
        self.mass = float(self.mass)
        self.charge = float(self.charge)
        _check_element(self.element)
        if not self.mass > 0.0:
            raise InitializationFailure(f"Particle mass must be positive, got {self.mass}")

    def load(self, record: ParticleRecord) -> "Particle":
        """
        Populate this particle from a parsed input record.

        Mass is converted from atomic mass units to kg and position from
        picometres to metres. Returns self.
        """
        _check_element(record.element)
        mass = float(record.mass) * AMU_TO_KG
        if not mass > 0.0:
            raise InitializationFailure(
                f"Particle mass must be positive, got {record.mass} u for {record.element!r}"
            )
        self.element = record.element
        self.mass = mass
        self.charge = float(record.charge)
        self.position = _vec3(record.position, "position") * PM_TO_M
        self.velocity = _vec3(record.velocity, "velocity")
        self.acceleration = _vec3(record.acceleration, "acceleration")
        self.force = _vec3(record.force, "force")
        return self

    @classmethod
    def from_record(cls, record: ParticleRecord) -> "Particle":
        """Create a default particle and load it from record."""
        return cls().load(record)


def _vec3(v, name: str) -> np.ndarray:
    arr = f64(v)
    if arr.shape != (3,):
        raise InitializationFailure(f"{name} must have 3 components, got shape {arr.shape}")
    return arr


def _check_element(label: str) -> None:
    if not isinstance(label, str) or not 0 < len(label) <= 2:
        raise InitializationFailure(f"Element label must be 1-2 characters, got {label!r}")
