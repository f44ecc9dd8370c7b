# MIT License (see LICENSE)
"""
molsim - A classical molecular-dynamics integrator.

Point particles carrying mass and charge are advanced in fixed time steps
under pairwise gravitational, electrostatic and Lennard-Jones forces, using
a semi-implicit Euler scheme, and their states are recorded every step.

Main entry points:
    - Universe: The particle collection, constants and time loop.
    - Particle: One point particle with its kinematic state.
    - SimulationConfig: Parameters of a command-line run.

Submodules:
    - core: Force model, integrator phases and invariants.
    - recorder: Per-step state recorders (memory, CSV).
    - io: Input records and JSON serialization.
    - cli: Command-line driver (python -m molsim).

Example:
    from molsim import Universe, Particle
    from molsim.recorder import MemoryRecorder

    universe = Universe(c_time=1e-15)
    universe.add_particle(Particle("Ar", mass=6.63e-26, position=(0, 0, 0)))
    universe.add_particle(Particle("Ar", mass=6.63e-26, position=(4e-10, 0, 0)))
    recorder = MemoryRecorder()
    universe.simulate(1e-13, recorder)
"""
from .universe import Universe
from .types import Particle, ParticleRecord
from .config import SimulationConfig
from .errors import (
    SimulationError,
    AllocationFailure,
    IOFailure,
    MathFailure,
    DivisionByZero,
    UndefinedOperation,
    InitializationFailure,
)

__all__ = [
    # Core simulation
    "Universe",
    "Particle",
    "ParticleRecord",
    "SimulationConfig",
    # Errors
    "SimulationError",
    "AllocationFailure",
    "IOFailure",
    "MathFailure",
    "DivisionByZero",
    "UndefinedOperation",
    "InitializationFailure",
]
