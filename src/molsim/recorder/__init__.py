# MIT License (see LICENSE)
"""
State recorders.

This subpackage provides:
    - ParticleSnapshot: Immutable per-particle state after a step.
    - StateRecorder: Abstract base class defining the recording interface.
    - NullRecorder: Discards everything.
    - MemoryRecorder: Buffers steps in memory (tests, notebooks).
    - CsvRecorder: One trajectory file per particle.

Typical usage:
    from molsim.recorder import CsvRecorder

    with CsvRecorder("out/particle_") as recorder:
        universe.simulate(1e-12, recorder)
"""
from .base import (
    ParticleSnapshot,
    StateRecorder,
    NullRecorder,
    MemoryRecorder,
)
from .csv_recorder import CsvRecorder, HEADER, format_row

__all__ = [
    "ParticleSnapshot",
    "StateRecorder",
    "NullRecorder",
    "MemoryRecorder",
    "CsvRecorder",
    "HEADER",
    "format_row",
]
