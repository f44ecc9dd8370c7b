# MIT License (see LICENSE)
"""
Particle input records in the comma-separated line format.

Each non-empty line describes one particle with 15 fields:

    element,mass,charge,px,py,pz,vx,vy,vz,ax,ay,az,fx,fy,fz

    element   label of at most 2 characters (e.g. Ar, H, Na)
    mass      atomic mass units
    charge    Coulombs
    p*        position in picometres
    v*, a*    velocity (m/s) and acceleration (m/s²)
    f*        force (N); ignored in practice since it is recomputed

Blank lines and lines starting with '#' are skipped. Files are read in a
single streaming pass.

When no input file is given, synthesize_records() builds a small lattice of
particles at rest instead.
"""
from __future__ import annotations
import logging
import math
from pathlib import Path
from typing import Iterable, Iterator

from ..elements import DEFAULT_ELEMENT, lookup
from ..errors import InitializationFailure, IOFailure
from ..types import ParticleRecord

logger = logging.getLogger(__name__)

FIELD_COUNT = 15


def parse_record(line: str, lineno: int | None = None) -> ParticleRecord:
    """
    Parse one input line.

    Args:
        line: The text of the line, with or without trailing newline.
        lineno: Line number, only used in error messages.

    Raises:
        InitializationFailure: On a wrong field count, a non-numeric value
            or an element label that is empty or longer than 2 characters.
    """
    where = f" (line {lineno})" if lineno is not None else ""
    fields = [f.strip() for f in line.strip().split(",")]
    if len(fields) != FIELD_COUNT:
        raise InitializationFailure(
            f"expected {FIELD_COUNT} fields, got {len(fields)}{where}: {line.strip()!r}"
        )

    element = fields[0].strip('"')
    if not 0 < len(element) <= 2:
        raise InitializationFailure(f"element label must be 1-2 characters{where}: {element!r}")

    try:
        values = [float(f) for f in fields[1:]]
    except ValueError as exc:
        raise InitializationFailure(f"non-numeric field{where}: {exc}") from exc

    return ParticleRecord(
        element=element,
        mass=values[0],
        charge=values[1],
        position=tuple(values[2:5]),
        velocity=tuple(values[5:8]),
        acceleration=tuple(values[8:11]),
        force=tuple(values[11:14]),
    )


def format_record(record: ParticleRecord) -> str:
    """Render a record as one input line (without newline)."""
    values = (
        record.mass, record.charge,
        *record.position, *record.velocity, *record.acceleration, *record.force,
    )
    return ",".join([record.element, *(repr(float(v)) for v in values)])


def iter_records(lines: Iterable[str]) -> Iterator[ParticleRecord]:
    """Parse records from an iterable of lines, skipping blanks and comments."""
    for lineno, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        yield parse_record(text, lineno)


def read_records(path: str | Path) -> list[ParticleRecord]:
    """
    Read every record of an input file.

    Raises:
        IOFailure: If the file cannot be opened or read.
        InitializationFailure: If a line is malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = list(iter_records(f))
    except OSError as exc:
        raise IOFailure(f"cannot read input file {path}: {exc}") from exc
    logger.info("Read %d particle records from %s", len(records), path)
    return records


def write_records(path: str | Path, records: Iterable[ParticleRecord]) -> None:
    """
    Write records in the input line format.

    Raises:
        IOFailure: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            for r in records:
                f.write(format_record(r) + "\n")
    except OSError as exc:
        raise IOFailure(f"cannot write records to {path}: {exc}") from exc


def synthesize_records(
    count: int,
    element: str = DEFAULT_ELEMENT,
    spacing: float | None = None,
) -> list[ParticleRecord]:
    """
    Place count particles at rest on a simple cubic lattice.

    Args:
        count: Number of particles (>= 0).
        element: Element label; its standard mass is used.
        spacing: Lattice spacing in picometres. Defaults to the element's
            Lennard-Jones minimum 2^(1/6)·σ.

    Raises:
        InitializationFailure: If count is negative or spacing not positive.
    """
    if count < 0:
        raise InitializationFailure(f"molecule count must be >= 0, got {count}")
    props = lookup(element)
    if spacing is None:
        spacing = 2.0 ** (1.0 / 6.0) * props.sigma_pm
    if not spacing > 0.0:
        raise InitializationFailure(f"lattice spacing must be positive, got {spacing}")

    side = max(1, math.ceil(round(count ** (1.0 / 3.0), 9)))
    records = []
    for i in range(side):
        for j in range(side):
            for k in range(side):
                if len(records) == count:
                    return records
                records.append(ParticleRecord(
                    element=element,
                    mass=props.mass,
                    charge=0.0,
                    position=(i * spacing, j * spacing, k * spacing),
                ))
    return records
