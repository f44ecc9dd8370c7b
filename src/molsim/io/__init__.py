# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides:
    - Particle records: the comma-separated input line format and lattice
      synthesis when no input file is given.
    - JSON: run configurations and round-trip universe state.

Typical usage:
    from molsim.io import read_records, load_config

    config = load_config("run.json")
    records = read_records(config.input_path)
"""
from .records import (
    parse_record,
    format_record,
    iter_records,
    read_records,
    write_records,
    synthesize_records,
)
from .json_io import (
    load_json_raw,
    load_config,
    save_config,
    config_to_json,
    config_from_json,
    particle_to_json,
    particle_from_json,
    element_from_json,
    universe_to_json,
    universe_from_json,
    save_universe,
    load_universe,
)

__all__ = [
    # Records
    "parse_record",
    "format_record",
    "iter_records",
    "read_records",
    "write_records",
    "synthesize_records",
    # JSON
    "load_json_raw",
    "load_config",
    "save_config",
    "config_to_json",
    "config_from_json",
    "particle_to_json",
    "particle_from_json",
    "element_from_json",
    "universe_to_json",
    "universe_from_json",
    "save_universe",
    "load_universe",
]
