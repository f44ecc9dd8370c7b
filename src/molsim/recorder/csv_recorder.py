# MIT License (see LICENSE)
"""
Per-particle CSV trajectory files.

One file per particle, named "<prefix><index>.csv", each starting with the
header below and receiving one row per completed step. Presentation units:

    t              picoseconds          (x 1e12)
    m              atomic mass units    (x 6.0229552894949e26)
    r, x, y, z     picometres           (x 1e12)
    q, F, a, v     unscaled SI
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import TextIO

from .base import ParticleSnapshot, StateRecorder
from ..constants import DISTANCE_SCALE, MASS_SCALE, TIME_SCALE
from ..errors import IOFailure

logger = logging.getLogger(__name__)

HEADER = "Element,t,m,q,F,a,v,r,Fx,Fy,Fz,ax,ay,az,vx,vy,vz,x,y,z"


def format_row(s: ParticleSnapshot) -> str:
    """Render a snapshot as one CSV line (without newline) in display units."""
    head = f'"{s.element}",{s.time * TIME_SCALE:.3f},{s.mass * MASS_SCALE:.3f},{s.charge:.3f}'
    values = (
        s.force, s.acceleration, s.velocity, s.position * DISTANCE_SCALE,
        s.fx, s.fy, s.fz,
        s.ax, s.ay, s.az,
        s.vx, s.vy, s.vz,
        s.x * DISTANCE_SCALE, s.y * DISTANCE_SCALE, s.z * DISTANCE_SCALE,
    )
    return head + "," + ",".join(f"{v:.15f}" for v in values)


class CsvRecorder(StateRecorder):
    """
    Writes each particle's trajectory to its own CSV file.

    Files are created on the first record for each particle; the parent
    directory of the prefix is created if missing.

    Args:
        prefix: Path prefix, e.g. "out/particle_" -> out/particle_0.csv, ...
    """

    def __init__(self, prefix: str) -> None:
        self.prefix = str(prefix)
        self._files: dict[int, TextIO] = {}

    def path_for(self, index: int) -> Path:
        """Output path of the particle at index."""
        return Path(f"{self.prefix}{index}.csv")

    def _open(self, index: int) -> TextIO:
        path = self.path_for(index)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fh = open(path, "w", encoding="utf-8")
            fh.write(HEADER + "\n")
        except OSError as exc:
            raise IOFailure(f"cannot open output file {path}: {exc}") from exc
        logger.debug("Opened trajectory file %s", path)
        self._files[index] = fh
        return fh

    def begin_step(self, time: float, iteration: int) -> None:
        pass

    def record(self, index: int, snapshot: ParticleSnapshot) -> None:
        fh = self._files.get(index)
        if fh is None:
            fh = self._open(index)
        try:
            fh.write(format_row(snapshot) + "\n")
        except OSError as exc:
            raise IOFailure(f"cannot write to {self.path_for(index)}: {exc}") from exc

    def end_step(self) -> None:
        pass

    def close(self) -> None:
        """Flush and close every open file."""
        for fh in self._files.values():
            fh.close()
        if self._files:
            logger.info("Wrote %d trajectory files with prefix %s", len(self._files), self.prefix)
        self._files.clear()
