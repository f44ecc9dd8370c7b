# MIT License (see LICENSE)
"""
JSON serialization of run configurations and universe state.

Config schema (every key optional, defaults from SimulationConfig):
-----------------------------------------------------------------
{
  "numerical": bool,          # finite-difference LJ force
  "input_path": string,       # particle record file
  "output_prefix": string,    # per-particle CSV prefix
  "dt": float,                # time step (s), default 1e-15
  "max_time": float,          # horizon (s), default 1e-9
  "molecules": int,           # synthesized particle count
  "temperature": float,       # K (reserved)
  "pressure": float,          # Pa (reserved)
  "c_grav": float,
  "c_elec": float,
  "lj_cutoff": float,         # in units of sigma
  "element": string,
  "log_level": string,
  "log_file": string
}

Universe schema (SI units, as stored internally):
-------------------------------------------------
{
  "c_grav": float, "c_elec": float, "dt": float,
  "lj_cutoff": float, "numerical": bool,
  "time": float, "iterations": int,
  "elements": [                          # Default: built-in table
    {"symbol": string, "mass": float, "epsilon_k": float, "sigma_pm": float}
  ],
  "particles": [
    {
      "element": string,                 # Required
      "mass": float,                     # Required, kg
      "charge": float,                   # Default: 0
      "position": [x, y, z],             # Default: [0, 0, 0]
      "velocity": [vx, vy, vz],          # Default: [0, 0, 0]
      "acceleration": [ax, ay, az],      # Default: [0, 0, 0]
      "force": [fx, fy, fz]              # Default: [0, 0, 0]
    }
  ]
}
"""
from __future__ import annotations
import json
import math
from dataclasses import asdict, fields
from typing import TYPE_CHECKING, Any

import numpy as np

from ..config import SimulationConfig
from ..elements import Element
from ..errors import InitializationFailure, IOFailure
from ..types import Particle

if TYPE_CHECKING:
    from ..universe import Universe


def load_json_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a file without object construction.

    Raises:
        IOFailure: If the file cannot be read.
        InitializationFailure: If it is not valid JSON or not an object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise IOFailure(f"cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InitializationFailure(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InitializationFailure(f"{path} must contain a JSON object")
    return data


def _dump(data: dict[str, Any], path: str, indent: int) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent)
    except OSError as exc:
        raise IOFailure(f"cannot write {path}: {exc}") from exc


# =============================================================================
# Configuration
# =============================================================================

# Expected JSON type of each config key.
_FLOAT_KEYS = ("dt", "max_time", "temperature", "pressure", "c_grav", "c_elec", "lj_cutoff")
_STR_KEYS = ("element", "log_level")
_PATH_KEYS = ("input_path", "output_prefix", "log_file")


def _config_value(key: str, value: Any) -> Any:
    """Check one config value's JSON type and convert it."""
    if key in _FLOAT_KEYS:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InitializationFailure(f"'{key}' must be a finite number, got {value!r}")
        return float(value)
    if key == "molecules":
        if isinstance(value, bool) or not (
            isinstance(value, int) or (isinstance(value, float) and value.is_integer())
        ):
            raise InitializationFailure(f"'{key}' must be an integer, got {value!r}")
        return int(value)
    if key == "numerical":
        if not isinstance(value, bool):
            raise InitializationFailure(f"'{key}' must be true or false, got {value!r}")
        return value
    if key in _STR_KEYS:
        if not isinstance(value, str):
            raise InitializationFailure(f"'{key}' must be a string, got {value!r}")
        return value
    if key in _PATH_KEYS:
        if value is not None and not isinstance(value, str):
            raise InitializationFailure(f"'{key}' must be a string or null, got {value!r}")
        return value
    raise InitializationFailure(f"unknown configuration key {key!r}")


def config_from_json(d: dict[str, Any]) -> SimulationConfig:
    """
    Build a validated config from a dictionary.

    Raises:
        InitializationFailure: On unknown keys, wrongly typed values or
            values out of range.
    """
    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise InitializationFailure(f"unknown configuration keys: {', '.join(unknown)}")
    values = {key: _config_value(key, value) for key, value in d.items()}
    return SimulationConfig(**values).validate()


def config_to_json(config: SimulationConfig) -> dict[str, Any]:
    """Serialize a config, keeping only non-default values."""
    defaults = asdict(SimulationConfig())
    return {k: v for k, v in asdict(config).items() if v != defaults[k]}


def load_config(path: str) -> SimulationConfig:
    """Load and validate a config file."""
    return config_from_json(load_json_raw(path))


def save_config(config: SimulationConfig, path: str, indent: int = 2) -> None:
    """Save a config to a JSON file."""
    _dump(config_to_json(config), path, indent)


# =============================================================================
# Universe state
# =============================================================================

def particle_from_json(d: dict[str, Any]) -> Particle:
    """
    Parse a single particle (SI units) from a dictionary.

    Raises:
        InitializationFailure: If required fields are missing or invalid.
    """
    for key in ("element", "mass"):
        if key not in d:
            raise InitializationFailure(f"Particle definition missing required '{key}' field.")
    return Particle(
        element=d["element"],
        mass=float(d["mass"]),
        charge=float(d.get("charge", 0.0)),
        position=tuple(d.get("position", [0.0, 0.0, 0.0])),
        velocity=tuple(d.get("velocity", [0.0, 0.0, 0.0])),
        acceleration=tuple(d.get("acceleration", [0.0, 0.0, 0.0])),
        force=tuple(d.get("force", [0.0, 0.0, 0.0])),
    )


def particle_to_json(p: Particle) -> dict[str, Any]:
    """Serialize a particle to a dictionary (round-trip compatible)."""
    result = {
        "element": p.element,
        "mass": p.mass,
        "position": _to_list(p.position),
        "velocity": _to_list(p.velocity),
    }
    if p.charge != 0.0:
        result["charge"] = p.charge
    if np.any(p.acceleration):
        result["acceleration"] = _to_list(p.acceleration)
    if np.any(p.force):
        result["force"] = _to_list(p.force)
    return result


def element_from_json(d: dict[str, Any]) -> Element:
    """
    Parse one Lennard-Jones table entry.

    Raises:
        InitializationFailure: If a field is missing or not numeric.
    """
    try:
        return Element(
            symbol=str(d["symbol"]),
            mass=float(d["mass"]),
            epsilon_k=float(d["epsilon_k"]),
            sigma_pm=float(d["sigma_pm"]),
        )
    except KeyError as exc:
        raise InitializationFailure(f"Element definition missing required {exc} field.") from exc
    except (TypeError, ValueError) as exc:
        raise InitializationFailure(f"invalid element definition {d!r}: {exc}") from exc


def universe_to_json(universe: "Universe") -> dict[str, Any]:
    """Serialize constants, element table, clock and every particle of a universe."""
    return {
        "c_grav": universe.c_grav,
        "c_elec": universe.c_elec,
        "dt": universe.c_time,
        "lj_cutoff": universe.lj_cutoff,
        "numerical": universe.numerical,
        "time": universe.time,
        "iterations": universe.iterations,
        "elements": [asdict(e) for e in universe.elements.values()],
        "particles": [particle_to_json(p) for p in universe.particles],
    }


def universe_from_json(d: dict[str, Any]) -> "Universe":
    """
    Rebuild a universe, including its clock, from a dictionary.

    Without an "elements" list the default table is used.
    """
    from ..universe import Universe

    kwargs = {}
    if "elements" in d:
        table = [element_from_json(e) for e in d["elements"]]
        kwargs["elements"] = {e.symbol: e for e in table}
    universe = Universe(
        c_grav=float(d.get("c_grav", Universe.c_grav)),
        c_elec=float(d.get("c_elec", Universe.c_elec)),
        c_time=float(d.get("dt", Universe.c_time)),
        lj_cutoff=float(d.get("lj_cutoff", Universe.lj_cutoff)),
        numerical=bool(d.get("numerical", False)),
        particles=[particle_from_json(p) for p in d.get("particles", [])],
        **kwargs,
    )
    universe.time = float(d.get("time", 0.0))
    universe.iterations = int(d.get("iterations", 0))
    return universe


def save_universe(universe: "Universe", path: str, indent: int = 2) -> None:
    """Save a universe's state to a JSON file."""
    _dump(universe_to_json(universe), path, indent)


def load_universe(path: str) -> "Universe":
    """Load a universe saved with save_universe()."""
    return universe_from_json(load_json_raw(path))


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
