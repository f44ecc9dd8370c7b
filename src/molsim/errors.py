# MIT License (see LICENSE)
"""
Exception hierarchy for the simulation.

Every failure is fatal for the run: nothing in the core catches one of these
and carries on. The driver logs and re-raises, and the command line maps any
SimulationError to a non-zero exit status.
"""
from __future__ import annotations


class SimulationError(Exception):
    """Base class for all simulation failures."""


class AllocationFailure(SimulationError, MemoryError):
    """Particle or output buffers could not be sized."""


class IOFailure(SimulationError, OSError):
    """An input or output file could not be opened, read or written."""


class MathFailure(SimulationError, ArithmeticError):
    """A numeric operation has no defined result."""


class DivisionByZero(MathFailure, ZeroDivisionError):
    """Division of a vector by a zero scalar (e.g. a zero mass)."""


class UndefinedOperation(MathFailure):
    """Operation undefined for its input, e.g. the direction of a zero vector."""


class InitializationFailure(SimulationError, ValueError):
    """Malformed initial record or configuration value."""
