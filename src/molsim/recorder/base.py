# MIT License (see LICENSE)
"""
State recorder interface.

After each completed step the driver hands every particle's state to a
recorder as a ParticleSnapshot. Snapshots are in internal SI units; any
display-unit conversion is the recorder's business. The engine itself has
no storage dependency.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..types import Particle
from ..util import magnitude

if TYPE_CHECKING:
    from ..universe import Universe


@dataclass(frozen=True)
class ParticleSnapshot:
    """
    Immutable per-particle state after one step (SI units).

    Attributes:
        element: Element label.
        time: Simulated time in seconds.
        mass: Mass in kg.
        charge: Charge in Coulombs.
        force, acceleration, velocity, position: Magnitudes of the vectors.
        fx .. z: Raw components of force, acceleration, velocity and position.
    """
    element: str
    time: float
    mass: float
    charge: float
    force: float
    acceleration: float
    velocity: float
    position: float
    fx: float
    fy: float
    fz: float
    ax: float
    ay: float
    az: float
    vx: float
    vy: float
    vz: float
    x: float
    y: float
    z: float

    @classmethod
    def capture(cls, particle: Particle, time: float) -> "ParticleSnapshot":
        """Copy the current state of particle at simulated time."""
        f, a, v, r = particle.force, particle.acceleration, particle.velocity, particle.position
        return cls(
            element=particle.element,
            time=time,
            mass=particle.mass,
            charge=particle.charge,
            force=magnitude(f),
            acceleration=magnitude(a),
            velocity=magnitude(v),
            position=magnitude(r),
            fx=float(f[0]), fy=float(f[1]), fz=float(f[2]),
            ax=float(a[0]), ay=float(a[1]), az=float(a[2]),
            vx=float(v[0]), vy=float(v[1]), vz=float(v[2]),
            x=float(r[0]), y=float(r[1]), z=float(r[2]),
        )


class StateRecorder(ABC):
    """
    Abstract base class for recorders.

    Usage:
        recorder = MyRecorder()
        recorder.begin_step(universe.time, universe.iterations)
        for i, p in enumerate(universe.particles):
            recorder.record(i, ParticleSnapshot.capture(p, universe.time))
        recorder.end_step()

    Or use the convenience method:
        recorder.record_universe(universe)

    Recorders are context managers; leaving the block calls close().
    """

    @abstractmethod
    def begin_step(self, time: float, iteration: int) -> None:
        """
        Begin recording a completed step.

        Args:
            time: Simulated time in seconds.
            iteration: The universe's step counter.
        """
        ...

    @abstractmethod
    def record(self, index: int, snapshot: ParticleSnapshot) -> None:
        """
        Record one particle.

        Args:
            index: Position of the particle in the universe.
            snapshot: Its state.
        """
        ...

    @abstractmethod
    def end_step(self) -> None:
        """Called after every particle of the step has been recorded."""
        ...

    def close(self) -> None:
        """Release any resources held by the recorder."""

    def record_universe(self, universe: "Universe") -> None:
        """Record every particle of universe at its current time."""
        self.begin_step(universe.time, universe.iterations)
        for i, snap in enumerate(universe.snapshot()):
            self.record(i, snap)
        self.end_step()

    def __enter__(self) -> "StateRecorder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class NullRecorder(StateRecorder):
    """
    No-op recorder.

    Useful for benchmarks and for runs where only the final state matters.
    """

    def begin_step(self, time: float, iteration: int) -> None:
        pass

    def record(self, index: int, snapshot: ParticleSnapshot) -> None:
        pass

    def end_step(self) -> None:
        pass


class MemoryRecorder(StateRecorder):
    """
    Recorder that buffers every step in memory.

    Example:
        recorder = MemoryRecorder()
        universe.simulate(1e-13, recorder)
        for frame in recorder.frames:
            print(frame["time"], len(frame["particles"]))
    """

    def __init__(self) -> None:
        self.frames: list[dict] = []
        self._current: dict | None = None

    def begin_step(self, time: float, iteration: int) -> None:
        self._current = {"time": time, "iteration": iteration, "particles": []}

    def record(self, index: int, snapshot: ParticleSnapshot) -> None:
        if self._current is None:
            raise RuntimeError("record() called outside begin_step()/end_step()")
        self._current["particles"].append(snapshot)

    def end_step(self) -> None:
        if self._current is not None:
            self.frames.append(self._current)
            self._current = None

    def trajectory(self, index: int) -> list[ParticleSnapshot]:
        """All recorded snapshots of the particle at index, in step order."""
        return [frame["particles"][index] for frame in self.frames]

    def clear(self) -> None:
        """Drop all buffered frames."""
        self.frames.clear()
