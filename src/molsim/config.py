# MIT License (see LICENSE)
"""
Run configuration.

Values come from three layers, later ones overriding earlier ones:
dataclass defaults, an optional JSON file (see io.json_io.load_config) and
command-line flags (see cli).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, fields

from .constants import (
    DEFAULT_MAX_TIME,
    DEFAULT_MOLECULES,
    DEFAULT_OUTPUT_PREFIX,
    DEFAULT_PRESSURE,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMESTEP,
    G_NEWTON,
    K_COULOMB,
    LENNARD_JONES_CUTOFF,
)
from .elements import DEFAULT_ELEMENT
from .errors import InitializationFailure

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SimulationConfig:
    """
    Parameters of one run.

    Attributes:
        numerical: Use the finite-difference Lennard-Jones force.
        input_path: Particle record file; None to synthesize particles.
        output_prefix: Prefix of the per-particle CSV files; None disables output.
        dt: Time step in seconds.
        max_time: Time horizon in seconds.
        molecules: Number of particles to synthesize without an input file.
        temperature: Initial temperature in K. Reserved; not used by the engine.
        pressure: Initial pressure in Pa. Reserved; not used by the engine.
        c_grav: Gravitational constant.
        c_elec: Electrostatic constant.
        lj_cutoff: Lennard-Jones cutoff in units of σ.
        element: Element label of synthesized particles.
        log_level: Name of the logging level.
        log_file: Optional path of a log file.
    """
    numerical: bool = False
    input_path: str | None = None
    output_prefix: str | None = DEFAULT_OUTPUT_PREFIX
    dt: float = DEFAULT_TIMESTEP
    max_time: float = DEFAULT_MAX_TIME
    molecules: int = DEFAULT_MOLECULES
    temperature: float = DEFAULT_TEMPERATURE
    pressure: float = DEFAULT_PRESSURE
    c_grav: float = G_NEWTON
    c_elec: float = K_COULOMB
    lj_cutoff: float = LENNARD_JONES_CUTOFF
    element: str = DEFAULT_ELEMENT
    log_level: str = "INFO"
    log_file: str | None = None

    def validate(self) -> "SimulationConfig":
        """
        Check value ranges. Returns self.

        Raises:
            InitializationFailure: On the first invalid value.
        """
        if not self.dt > 0.0:
            raise InitializationFailure(f"dt must be positive, got {self.dt}")
        if not self.max_time > 0.0:
            raise InitializationFailure(f"max_time must be positive, got {self.max_time}")
        if self.molecules < 0:
            raise InitializationFailure(f"molecules must be >= 0, got {self.molecules}")
        if self.lj_cutoff < 0.0:
            raise InitializationFailure(f"lj_cutoff must be >= 0, got {self.lj_cutoff}")
        if not 0 < len(self.element) <= 2:
            raise InitializationFailure(f"element must be 1-2 characters, got {self.element!r}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise InitializationFailure(f"unknown log level {self.log_level!r}")
        return self

    @property
    def level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level.upper())

    def updated(self, **overrides) -> "SimulationConfig":
        """
        Copy with the given fields replaced. None values are ignored so
        unset command-line flags do not clobber file values.

        Raises:
            InitializationFailure: On an unknown field name.
        """
        known = {f.name for f in fields(self)}
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in known:
                raise InitializationFailure(f"unknown configuration key {key!r}")
            if value is not None:
                values[key] = value
        return SimulationConfig(**values)
