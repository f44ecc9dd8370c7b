# MIT License (see LICENSE)
"""
Physical constants, unit conversions and run defaults.

The core stores every quantity in SI units (kg, C, m, s). Input records use
atomic mass units and picometres; the conversion factors below are applied
once, when a record is loaded into a Particle. The presentation factors are
only used by recorders.
"""
from __future__ import annotations

# Gravitational constant G in N·m²/kg².
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?bg
G_NEWTON: float = 6.67430e-11

# Coulomb's constant (electrostatic constant), k = 1/(4πε₀)
# Value: 8.9875517923 × 10⁹ N·m²/C²
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?k
K_COULOMB: float = 8.9875517923e9

# Boltzmann constant in J/K, used to express LJ well depths given as ε/k_B.
K_BOLTZMANN: float = 1.380649e-23

# Square root of the float64 machine epsilon. Relative step for the
# central-difference Lennard-Jones force.
ROOT_MACHINE_EPSILON: float = 1.48996644e-8

# Lennard-Jones cutoff in units of sigma.
LENNARD_JONES_CUTOFF: float = 2.5

# =============================================================================
# Unit conversions
# =============================================================================

# Atomic mass units -> kilograms (applied on load).
AMU_TO_KG: float = 1.66053904020e-27

# Picometres -> metres (applied to positions on load).
PM_TO_M: float = 1e-12

# Presentation factors used by recorders.
DISTANCE_SCALE: float = 1e12
TIME_SCALE: float = 1e12
MASS_SCALE: float = 6.0229552894949e26

# =============================================================================
# Run defaults
# =============================================================================

DEFAULT_TIMESTEP: float = 1e-15       # 1 femtosecond
DEFAULT_MAX_TIME: float = 1e-9        # 1 nanosecond
DEFAULT_MOLECULES: int = 1
DEFAULT_TEMPERATURE: float = 273.15   # K
DEFAULT_PRESSURE: float = 1e5         # Pa
DEFAULT_OUTPUT_PREFIX: str = "out/particle_"

# Placeholder label for particles that have not been loaded yet.
UNKNOWN_ELEMENT: str = "??"

EXIT_SUCCESS: int = 0
EXIT_FAILURE: int = 1
