# MIT License (see LICENSE)
"""
Per-element properties used by the force model.

Each element carries its standard atomic mass and a Lennard-Jones pair
(ε, σ). Pairs of unlike elements are combined with the Lorentz-Berthelot
rules:
    σ_ab = (σ_a + σ_b) / 2
    ε_ab = sqrt(ε_a · ε_b)

Labels that are not in the table (including the "??" placeholder of an
unloaded particle) fall back to DEFAULT_ELEMENT.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from .constants import K_BOLTZMANN, PM_TO_M


@dataclass(frozen=True)
class Element:
    """
    Physical properties of one chemical element.

    Attributes:
        symbol: Element label (at most 2 characters).
        mass: Standard atomic mass in atomic mass units.
        epsilon_k: Lennard-Jones well depth expressed as ε/k_B, in Kelvin.
        sigma_pm: Lennard-Jones zero-crossing distance σ in picometres.
    """
    symbol: str
    mass: float
    epsilon_k: float
    sigma_pm: float

    @property
    def epsilon(self) -> float:
        """Well depth ε in Joules."""
        return self.epsilon_k * K_BOLTZMANN

    @property
    def sigma(self) -> float:
        """Zero-crossing distance σ in metres."""
        return self.sigma_pm * PM_TO_M


@dataclass(frozen=True)
class LJParameters:
    """Lennard-Jones parameters of one (possibly mixed) pair, SI units."""
    epsilon: float
    sigma: float


# Approximate literature values for atom-atom interactions.
ELEMENTS: dict[str, Element] = {
    e.symbol: e
    for e in (
        Element("H", 1.008, 8.6, 281.0),
        Element("He", 4.0026, 10.22, 256.0),
        Element("C", 12.011, 51.2, 335.0),
        Element("N", 14.007, 37.3, 331.0),
        Element("O", 15.999, 61.6, 295.0),
        Element("Ne", 20.180, 35.6, 275.0),
        Element("Ar", 39.948, 119.8, 340.5),
        Element("Kr", 83.798, 164.0, 365.0),
        Element("Xe", 131.29, 221.0, 410.0),
    )
}

DEFAULT_ELEMENT: str = "Ar"


def lookup(symbol: str, table: dict[str, Element] | None = None) -> Element:
    """Return the element for a label, or the default element if unknown."""
    table = ELEMENTS if table is None else table
    element = table.get(symbol)
    if element is None:
        element = table.get(DEFAULT_ELEMENT, ELEMENTS[DEFAULT_ELEMENT])
    return element


def mix(a: Element, b: Element) -> LJParameters:
    """Lorentz-Berthelot combination of two elements' LJ parameters."""
    if a is b:
        return LJParameters(epsilon=a.epsilon, sigma=a.sigma)
    return LJParameters(
        epsilon=math.sqrt(a.epsilon * b.epsilon),
        sigma=0.5 * (a.sigma + b.sigma),
    )


def pair_parameters(
    symbol_a: str,
    symbol_b: str,
    table: dict[str, Element] | None = None,
) -> LJParameters:
    """LJ parameters for the pair of element labels (a, b)."""
    return mix(lookup(symbol_a, table), lookup(symbol_b, table))
