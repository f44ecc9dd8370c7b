# MIT License (see LICENSE)
"""
Command-line driver.

Example:
    python -m molsim --in particles.csv --out out/p_ --dt 1e-15 --time 1e-12
    python -m molsim --mol 8 --element Ar --time 1e-13 --no-output

Exit status is 0 when the time horizon is reached and 1 on any failure.
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import Sequence

from .config import LOG_LEVELS, SimulationConfig
from .constants import EXIT_FAILURE, EXIT_SUCCESS
from .errors import SimulationError
from .io.json_io import load_config
from .io.records import read_records, synthesize_records
from .logging_config import setup_logging
from .recorder import CsvRecorder
from .universe import Universe

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="molsim",
        description="Classical molecular dynamics with gravity, Coulomb and Lennard-Jones forces",
    )
    p.add_argument("--config", type=str, default=None, help="JSON config file (flags override it)")
    p.add_argument("--numerical", action="store_const", const=True, default=None,
                   help="differentiate the LJ potential numerically")
    p.add_argument("--in", dest="input_path", type=str, default=None,
                   help="particle record file; without it --mol particles are synthesized")
    p.add_argument("--out", dest="output_prefix", type=str, default=None,
                   help="prefix of the per-particle CSV files")
    p.add_argument("--no-output", action="store_true", help="do not write trajectory files")
    p.add_argument("--dt", type=float, default=None, help="time step in seconds")
    p.add_argument("--time", dest="max_time", type=float, default=None, help="time horizon in seconds")
    p.add_argument("--mol", dest="molecules", type=int, default=None, help="number of synthesized particles")
    p.add_argument("--temp", dest="temperature", type=float, default=None, help="temperature in K (reserved)")
    p.add_argument("--pressure", type=float, default=None, help="pressure in Pa (reserved)")
    p.add_argument("--grav", dest="c_grav", type=float, default=None, help="gravitational constant")
    p.add_argument("--elec", dest="c_elec", type=float, default=None, help="electrostatic constant")
    p.add_argument("--cutoff", dest="lj_cutoff", type=float, default=None, help="LJ cutoff in sigma")
    p.add_argument("--element", type=str, default=None, help="element of synthesized particles")
    p.add_argument("--log-level", dest="log_level", choices=LOG_LEVELS, default=None)
    p.add_argument("--log-file", dest="log_file", type=str, default=None)
    return p


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Defaults, then the JSON file, then command-line flags."""
    config = load_config(args.config) if args.config else SimulationConfig()
    overrides = {k: v for k, v in vars(args).items() if k not in ("config", "no_output")}
    config = config.updated(**overrides)
    if args.no_output:
        config.output_prefix = None
    return config.validate()


def build_universe(config: SimulationConfig) -> Universe:
    """Load or synthesize the particles and apply the config's constants."""
    if config.input_path:
        records = read_records(config.input_path)
    else:
        records = synthesize_records(config.molecules, element=config.element)
    return Universe.from_records(
        records,
        c_grav=config.c_grav,
        c_elec=config.c_elec,
        c_time=config.dt,
        lj_cutoff=config.lj_cutoff,
        numerical=config.numerical,
    )


def run(config: SimulationConfig) -> Universe:
    """
    Execute one configured run.

    Raises:
        SimulationError: On any failure; partial trajectory files are kept.
    """
    universe = build_universe(config)
    logger.debug(
        "Initial temperature %g K and pressure %g Pa are not used by the integrator",
        config.temperature, config.pressure,
    )
    if config.output_prefix:
        with CsvRecorder(config.output_prefix) as recorder:
            universe.simulate(config.max_time, recorder)
    else:
        universe.simulate(config.max_time)
    return universe


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = build_config(args)
        setup_logging(config.level, config.log_file)
    except (SimulationError, OSError) as exc:
        print(f"molsim: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        run(config)
    except SimulationError as exc:
        logger.error("Run failed: %s", exc)
        return EXIT_FAILURE
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
