import logging

import numpy as np
import pytest

from molsim.constants import AMU_TO_KG, PM_TO_M
from molsim.core.invariants import kinetic_energy, linear_momentum, total_energy
from molsim.elements import ELEMENTS
from molsim.errors import (
    AllocationFailure,
    InitializationFailure,
    IOFailure,
    SimulationError,
    UndefinedOperation,
)
from molsim.profiler import Profiler
from molsim.recorder import MemoryRecorder, StateRecorder
from molsim.types import Particle, ParticleRecord
from molsim.universe import Universe

AR_MASS = ELEMENTS["Ar"].mass * AMU_TO_KG
R_MIN = 2.0 ** (1.0 / 6.0) * ELEMENTS["Ar"].sigma


def drifting_pair(dt: float) -> Universe:
    """Two far-apart neutral particles with no coupling: straight-line motion."""
    a = Particle("Ar", mass=1.0, position=(0.0, 0.0, 0.0), velocity=(1.0, 0.0, 0.0))
    b = Particle("Ar", mass=2.0, position=(10.0, 0.0, 0.0), velocity=(0.0, -2.0, 0.0))
    return Universe(c_grav=0.0, c_elec=0.0, c_time=dt, particles=[a, b])


def test_simulate_reaches_horizon_and_records_every_step():
    universe = drifting_pair(0.25)
    recorder = MemoryRecorder()
    steps = universe.simulate(1.0, recorder)

    assert steps == 4
    assert universe.iterations == 4
    assert universe.time == 1.0
    assert [f["time"] for f in recorder.frames] == [0.0, 0.25, 0.5, 0.75]
    assert [f["iteration"] for f in recorder.frames] == [1, 2, 3, 4]
    assert all(len(f["particles"]) == 2 for f in recorder.frames)

    # Snapshot k is taken after k+1 position updates
    xs = [s.x for s in recorder.trajectory(0)]
    assert xs == pytest.approx([0.25, 0.5, 0.75, 1.0])
    ys = [s.y for s in recorder.trajectory(1)]
    assert ys == pytest.approx([-0.5, -1.0, -1.5, -2.0])

    last = recorder.trajectory(1)[-1]
    assert last.element == "Ar"
    assert last.mass == 2.0
    assert last.velocity == pytest.approx(2.0)
    assert last.position == pytest.approx(np.hypot(10.0, 2.0))


def test_horizon_not_multiple_of_dt():
    universe = drifting_pair(0.5)
    assert universe.simulate(1.2) == 3
    assert universe.time == 1.5
    # Already past the horizon: nothing to do
    assert universe.simulate(1.0) == 0
    assert universe.iterations == 3


def test_particle_count_is_fixed_after_start():
    universe = drifting_pair(0.5)
    assert universe.add_particle(Particle("He", mass=1.0, position=(0.0, 5.0, 0.0))) == 2
    universe.step()
    with pytest.raises(InitializationFailure):
        universe.add_particle(Particle("He", mass=1.0, position=(0.0, -5.0, 0.0)))
    assert len(universe.particles) == 3


def test_invalid_construction():
    with pytest.raises(InitializationFailure):
        Universe(c_time=0.0)
    with pytest.raises(InitializationFailure):
        Universe(lj_cutoff=-1.0)
    with pytest.raises(InitializationFailure):
        Particle("Ar", mass=0.0)
    with pytest.raises(InitializationFailure):
        Particle("Arg", mass=1.0)
    with pytest.raises(InitializationFailure):
        Particle("Ar", mass=1.0, position=(1.0, 2.0))


def test_default_particle():
    p = Particle()
    assert p.element == "??"
    assert p.mass == 1.0
    assert p.charge == 0.0
    for v in (p.position, p.velocity, p.acceleration, p.force):
        assert v.dtype == np.float64
        assert np.array_equal(v, np.zeros(3))


def test_from_records_converts_units():
    records = [
        ParticleRecord("Ar", 39.948, 0.0, (100.0, -200.0, 300.0), (1.0, 2.0, 3.0)),
        ParticleRecord("H", 1.008, 1.6e-19, (0.0, 0.0, 0.0), force=(9.0, 9.0, 9.0)),
    ]
    universe = Universe.from_records(records, c_time=2e-15)
    a, h = universe.particles

    assert universe.c_time == 2e-15
    assert a.mass == pytest.approx(39.948 * AMU_TO_KG)
    assert a.position == pytest.approx(np.array([100.0, -200.0, 300.0]) * PM_TO_M)
    assert np.array_equal(a.velocity, (1.0, 2.0, 3.0))
    assert h.charge == 1.6e-19
    assert np.array_equal(h.force, (9.0, 9.0, 9.0))

    with pytest.raises(InitializationFailure):
        Universe.from_records([ParticleRecord("Ar", -1.0, 0.0, (0.0, 0.0, 0.0))])


def test_from_records_reports_allocation_failure():
    def records():
        yield ParticleRecord("Ar", 39.948, 0.0, (0.0, 0.0, 0.0))
        raise MemoryError

    with pytest.raises(AllocationFailure) as info:
        Universe.from_records(records())
    assert isinstance(info.value, SimulationError)
    assert isinstance(info.value, MemoryError)
    assert isinstance(info.value.__cause__, MemoryError)


def test_math_failure_aborts_run(caplog):
    a = Particle("Ar", mass=AR_MASS, position=(1e-10, 0.0, 0.0))
    b = Particle("Ar", mass=AR_MASS, position=(1e-10, 0.0, 0.0))
    universe = Universe(particles=[a, b])
    recorder = MemoryRecorder()

    with caplog.at_level(logging.ERROR, logger="molsim"):
        with pytest.raises(UndefinedOperation):
            universe.simulate(1e-13, recorder)

    assert universe.time == 0.0
    assert universe.iterations == 0
    assert recorder.frames == []
    assert "Simulation aborted" in caplog.text


class FailingRecorder(MemoryRecorder):
    """Raises on the n-th recorded step."""

    def __init__(self, fail_on: int):
        super().__init__()
        self.fail_on = fail_on

    def begin_step(self, time: float, iteration: int) -> None:
        if iteration == self.fail_on:
            raise IOFailure("disk full")
        super().begin_step(time, iteration)


def test_recorder_failure_aborts_run():
    universe = drifting_pair(0.5)
    recorder = FailingRecorder(fail_on=2)
    with pytest.raises(IOFailure):
        universe.simulate(10.0, recorder)
    assert universe.iterations == 2
    assert universe.time == 0.5
    assert len(recorder.frames) == 1


def test_recorder_is_a_context_manager():
    closed = []

    class Closing(MemoryRecorder):
        def close(self) -> None:
            closed.append(True)

    with Closing() as recorder:
        assert isinstance(recorder, StateRecorder)
        drifting_pair(0.5).simulate(1.0, recorder)
    assert closed == [True]
    assert len(recorder.frames) == 2


def test_memory_recorder_needs_an_open_step():
    recorder = MemoryRecorder()
    snap = drifting_pair(0.5).snapshot()[0]
    with pytest.raises(RuntimeError):
        recorder.record(0, snap)
    recorder.begin_step(0.0, 1)
    recorder.record(0, snap)
    recorder.end_step()
    with pytest.raises(RuntimeError):
        recorder.record(1, snap)
    assert recorder.trajectory(0) == [snap]


def test_profiler_times_each_phase():
    universe = drifting_pair(0.5)
    universe.profiler = Profiler()
    universe.step()
    universe.step()
    summary = universe.profiler.stats.summary()
    assert set(summary) == {"forces", "acceleration", "velocity", "position"}
    assert all(s["n"] == 2 for s in summary.values())


def test_argon_dimer_conserves_momentum_and_energy():
    """
    Two argon atoms released slightly outside the LJ minimum oscillate.
    Pair forces are central, so momentum stays at zero; semi-implicit Euler
    keeps the energy error bounded.
    """
    a = Particle("Ar", mass=AR_MASS, position=(0.0, 0.0, 0.0))
    b = Particle("Ar", mass=AR_MASS, position=(1.05 * R_MIN, 0.0, 0.0))
    universe = Universe(c_time=1e-15, particles=[a, b])

    e0 = total_energy(universe)
    for _ in range(500):
        universe.step()
    e1 = total_energy(universe)

    p = linear_momentum(universe.particles)
    p_scale = AR_MASS * np.linalg.norm(a.velocity)
    print("E0", e0, "E1", e1, "P", p, "ke", kinetic_energy(universe.particles))

    assert kinetic_energy(universe.particles) > 0.0
    assert np.linalg.norm(p) <= 1e-9 * p_scale
    assert abs(e1 - e0) / abs(e0) < 5e-3
