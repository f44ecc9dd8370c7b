import copy

import numpy as np
import pytest

from molsim.constants import K_COULOMB
from molsim.core.forces import pair_force
from molsim.core.integrators import update_acceleration, update_position, update_velocity
from molsim.elements import ELEMENTS
from molsim.errors import DivisionByZero, UndefinedOperation
from molsim.types import Particle
from molsim.universe import Universe

AR_MASS = ELEMENTS["Ar"].mass * 1.66053904020e-27
R_MIN = 2.0 ** (1.0 / 6.0) * ELEMENTS["Ar"].sigma


def argon_cluster() -> Universe:
    """Four argon atoms near their LJ minimum, slightly perturbed."""
    particles = [
        Particle("Ar", mass=AR_MASS, position=(0.0, 0.0, 0.0), velocity=(30.0, 0.0, -10.0)),
        Particle("Ar", mass=AR_MASS, position=(1.02 * R_MIN, 0.0, 0.0)),
        Particle("Ar", mass=AR_MASS, position=(0.0, 0.97 * R_MIN, 0.05 * R_MIN)),
        Particle("Ar", mass=AR_MASS, position=(0.5 * R_MIN, 0.5 * R_MIN, 0.9 * R_MIN),
                 velocity=(0.0, -20.0, 15.0)),
    ]
    return Universe(c_time=1e-15, particles=particles)


def test_stationary_particle_is_unchanged():
    p = Particle("Ar", mass=AR_MASS, position=(1e-10, 2e-10, 3e-10))
    universe = Universe(particles=[p])
    universe.step()
    assert universe.iterations == 1
    assert np.array_equal(p.position, (1e-10, 2e-10, 3e-10))
    assert np.array_equal(p.velocity, np.zeros(3))
    assert np.array_equal(p.acceleration, np.zeros(3))


def test_constant_force_recurrence():
    """
    Under a constant force F, after k steps of semi-implicit Euler:
      v_k = v0 + (F/m) k dt
      x_k = x_{k-1} + v_k dt
    """
    m = 4.0
    dt = 0.1
    F = np.array([2.0, -1.0, 0.5])
    v0 = np.array([0.3, 0.0, -0.2])
    p = Particle("Ar", mass=m, velocity=v0)
    universe = Universe(c_time=dt, particles=[p])

    x_exp = np.zeros(3)
    k = 25
    for step in range(1, k + 1):
        p.force[:] = F
        update_acceleration(universe, 0)
        update_velocity(universe, 0)
        update_position(universe, 0)
        v_exp = v0 + (F / m) * step * dt
        x_exp = x_exp + v_exp * dt
        assert np.allclose(p.velocity, v_exp, rtol=1e-12, atol=1e-15)
        assert np.allclose(p.position, x_exp, rtol=1e-12, atol=1e-15)

    assert np.allclose(p.acceleration, F / m)


def test_split_runs_are_identical():
    """k steps in one go == k1 steps followed by k2 steps."""
    a = argon_cluster()
    b = argon_cluster()

    for _ in range(10):
        a.step()
    for _ in range(4):
        b.step()
    for _ in range(6):
        b.step()

    assert a.iterations == b.iterations == 10
    for pa, pb in zip(a.particles, b.particles):
        assert np.array_equal(pa.position, pb.position)
        assert np.array_equal(pa.velocity, pb.velocity)
        assert np.array_equal(pa.force, pb.force)


def test_two_ion_single_step_closed_form():
    """
    Two particles, m = 1e-27 kg, q = ±1 C, 1e-12 m apart, G = 0, LJ off,
    dt = 1e-15 s. One step must match
      F = k q² / r²  (towards the partner)
      a = F/m,  v = a dt,  x = x0 ± v dt
    Unlike charges attract, so each particle moves towards the other.
    """
    m, r, dt = 1e-27, 1e-12, 1e-15
    a = Particle("Na", mass=m, charge=+1.0, position=(0.0, 0.0, 0.0))
    b = Particle("Cl", mass=m, charge=-1.0, position=(r, 0.0, 0.0))
    universe = Universe(c_grav=0.0, c_time=dt, lj_cutoff=0.0, particles=[a, b])

    universe.step()

    F = K_COULOMB / (r * r)
    acc = F / m
    v = acc * dt
    dx = v * dt
    print("F", F, "a", acc, "v", v, "dx", dx)

    assert a.force == pytest.approx(np.array([F, 0.0, 0.0]), rel=1e-12)
    assert b.force == pytest.approx(np.array([-F, 0.0, 0.0]), rel=1e-12)
    assert a.acceleration == pytest.approx(np.array([acc, 0.0, 0.0]), rel=1e-12)
    assert a.velocity == pytest.approx(np.array([v, 0.0, 0.0]), rel=1e-12)
    assert b.velocity == pytest.approx(np.array([-v, 0.0, 0.0]), rel=1e-12)
    assert a.position == pytest.approx(np.array([dx, 0.0, 0.0]), rel=1e-12)
    assert b.position == pytest.approx(np.array([r - dx, 0.0, 0.0]), rel=1e-12)


def test_force_phase_uses_positions_from_before_the_step():
    """Every particle sees the others' old positions (phase barrier)."""
    universe = argon_cluster()
    before = copy.deepcopy(universe)
    expected = []
    for i, p in enumerate(before.particles):
        total = np.zeros(3)
        for j, q in enumerate(before.particles):
            if i != j:
                total = total + pair_force(before, p, q)
        expected.append(total)

    universe.step()
    for p, f in zip(universe.particles, expected):
        assert np.array_equal(p.force, f)
    # and the positions did move
    assert not np.array_equal(universe.particles[0].position, before.particles[0].position)


def test_failed_step_does_not_count():
    a = Particle("Ar", mass=AR_MASS, position=(1e-10, 0.0, 0.0))
    b = Particle("Ar", mass=AR_MASS, position=(1e-10, 0.0, 0.0))
    universe = Universe(particles=[a, b])
    with pytest.raises(UndefinedOperation):
        universe.step()
    assert universe.iterations == 0


def test_zero_mass_fails_acceleration_phase():
    p = Particle("Ar", mass=AR_MASS, force=(1.0, 0.0, 0.0))
    universe = Universe(particles=[p])
    p.mass = 0.0
    with pytest.raises(DivisionByZero):
        update_acceleration(universe, 0)
    with pytest.raises(DivisionByZero):
        universe.step()
