# MIT License (see LICENSE)
"""
The simulation state and time loop.

The Universe class owns every particle and the global constants, and acts as
the simulation controller. It manages:
- The ordered particle list (its size is fixed once the first step runs).
- The coupling constants (G, k_e), the time step and the LJ settings.
- One integration step (step), made of four barrier-separated phases:
    1. Force accumulation (O(N²) pair sum from current positions).
    2. Acceleration from force and mass.
    3. Velocity from acceleration.
    4. Position from the new velocity.
- The driver loop (simulate): step, record, advance time, until a horizon.

Structure:
    - User creates a Universe, directly or from parsed records.
    - User calls universe.simulate(max_time, recorder), or step() in a loop.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Iterable

from .constants import DEFAULT_TIMESTEP, G_NEWTON, K_COULOMB, LENNARD_JONES_CUTOFF
from .core.integrators import PHASES
from .core.invariants import total_energy
from .elements import ELEMENTS, Element
from .errors import AllocationFailure, InitializationFailure, SimulationError
from .profiler import Profiler
from .recorder.base import ParticleSnapshot, StateRecorder
from .types import Particle, ParticleRecord

logger = logging.getLogger(__name__)


@dataclass
class Universe:
    """
    Molecular-dynamics world.

    Attributes:
        c_grav: Gravitational constant G (N·m²/kg²).
        c_elec: Electrostatic constant k_e (N·m²/C²).
        c_time: Fixed integration time step in seconds. Must be > 0.
        lj_cutoff: Lennard-Jones cutoff in units of the pair σ.
        numerical: Evaluate the LJ force by finite differences.
        elements: Element table for LJ parameter lookup.
        profiler: Optional Profiler instance for phase timings.
        particles: Ordered particle list, exclusively owned by the universe.
        iterations: Number of completed integration steps.
        time: Simulated time in seconds.
    """
    c_grav: float = G_NEWTON
    c_elec: float = K_COULOMB
    c_time: float = DEFAULT_TIMESTEP
    lj_cutoff: float = LENNARD_JONES_CUTOFF
    numerical: bool = False
    elements: dict[str, Element] = field(default_factory=lambda: dict(ELEMENTS))
    profiler: Profiler | None = None

    # Simulation state
    particles: list[Particle] = field(default_factory=list)
    iterations: int = 0
    time: float = 0.0

    def __post_init__(self) -> None:
        if not self.c_time > 0.0:
            raise InitializationFailure(f"time step must be positive, got {self.c_time}")
        if self.lj_cutoff < 0.0:
            raise InitializationFailure(f"LJ cutoff must be >= 0, got {self.lj_cutoff}")
        self.particles = list(self.particles)
        logger.debug(
            "Universe: %d particles, G=%g, k_e=%g, dt=%g s, LJ cutoff=%g sigma (%s)",
            len(self.particles), self.c_grav, self.c_elec, self.c_time, self.lj_cutoff,
            "numerical" if self.numerical else "analytical",
        )

    @classmethod
    def from_records(cls, records: Iterable[ParticleRecord], **kwargs) -> "Universe":
        """
        Build a universe from parsed input records in a single pass.

        Each record is loaded into a default Particle (amu -> kg, pm -> m).
        Remaining keyword arguments are passed to the constructor.

        Raises:
            InitializationFailure: If a record is malformed.
            AllocationFailure: If the particle list cannot be allocated.
        """
        try:
            particles = [Particle.from_record(r) for r in records]
        except MemoryError as exc:
            raise AllocationFailure("cannot allocate particle storage") from exc
        logger.info("Loaded %d particles", len(particles))
        return cls(particles=particles, **kwargs)

    @property
    def dt(self) -> float:
        """Alias for c_time."""
        return self.c_time

    @property
    def started(self) -> bool:
        """True once a step has run; from then on the particle set is fixed."""
        return self.iterations > 0 or self.time > 0.0

    def add_particle(self, particle: Particle) -> int:
        """
        Append a particle before the run starts.

        Returns:
            The particle's index.

        Raises:
            InitializationFailure: If the simulation has already started.
        """
        if self.started:
            raise InitializationFailure("particles cannot be added once the simulation has started")
        self.particles.append(particle)
        return len(self.particles) - 1

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler is not None else nullcontext()

    def step(self) -> "Universe":
        """
        Advance every particle by one time step.

        Runs the force, acceleration, velocity and position phases in that
        order, each over the whole particle list before the next begins,
        then increments the step counter. Simulated time is advanced by the
        driver (simulate), not here.

        Raises:
            MathFailure: On coincident particles or a zero mass. The step is
                abandoned part way and the counter is not incremented.
        """
        n = len(self.particles)
        for name, phase in PHASES:
            with self._section(name):
                for i in range(n):
                    phase(self, i)
        self.iterations += 1
        logger.debug("Step %d done (t=%g s)", self.iterations, self.time)
        return self

    def snapshot(self) -> list[ParticleSnapshot]:
        """State of every particle at the current time, in index order."""
        return [ParticleSnapshot.capture(p, self.time) for p in self.particles]

    def emit_state(self, recorder: StateRecorder) -> None:
        """Hand the current snapshot of every particle to recorder."""
        recorder.record_universe(self)

    def simulate(self, max_time: float, recorder: StateRecorder | None = None) -> int:
        """
        Run the time loop until the simulated time reaches max_time.

        Each iteration performs one step, emits a snapshot of every particle
        (stamped with the time at the start of the step), then advances time
        by exactly c_time.

        Args:
            max_time: Time horizon in seconds.
            recorder: Optional consumer of per-step snapshots.

        Returns:
            Number of steps performed by this call.

        Raises:
            SimulationError: Any failure aborts the run immediately and is
                re-raised unchanged.
        """
        logger.info(
            "Simulating %d particles from t=%g s to t=%g s (dt=%g s)",
            len(self.particles), self.time, max_time, self.c_time,
        )
        steps = 0
        try:
            while self.time < max_time:
                self.step()
                if recorder is not None:
                    self.emit_state(recorder)
                self.time += self.c_time
                steps += 1
        except SimulationError as exc:
            logger.error("Simulation aborted at step %d (t=%g s): %s", self.iterations + 1, self.time, exc)
            raise

        logger.info("Reached t=%g s after %d steps", self.time, steps)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Total energy %.6e J", total_energy(self))
        if self.profiler is not None:
            self.profiler.log_summary(logging.DEBUG)
        return steps
