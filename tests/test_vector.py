import numpy as np
import pytest

from molsim.errors import DivisionByZero, MathFailure, UndefinedOperation
from molsim.util import add, divide, f64, magnitude, normalize, scale, subtract


def test_normalize_gives_unit_length():
    """|normalize(v)| == 1 for non-zero vectors over many orders of magnitude."""
    rng = np.random.default_rng(7)
    for _ in range(200):
        v = rng.normal(size=3) * 10.0 ** int(rng.integers(-15, 16))
        if not np.any(v):
            continue
        u = normalize(v)
        assert magnitude(u) == pytest.approx(1.0, rel=1e-9)


def test_divide_fails_only_on_exact_zero():
    v = f64((1.0, -2.0, 3.0))
    with pytest.raises(DivisionByZero):
        divide(v, 0.0)
    with pytest.raises(ZeroDivisionError):
        divide(v, -0.0)

    tiny = divide(v, 1e-300)
    assert np.all(np.isfinite(tiny))
    assert tiny[0] == pytest.approx(1e300)


def test_normalize_fails_only_on_zero_vector():
    with pytest.raises(UndefinedOperation):
        normalize(np.zeros(3))
    # Also reported as a generic math failure
    with pytest.raises(MathFailure):
        normalize(f64((0.0, 0.0, 0.0)))

    u = normalize(f64((1e-150, 0.0, 0.0)))
    assert np.allclose(u, (1.0, 0.0, 0.0))


def test_magnitude():
    assert magnitude(f64((3.0, 4.0, 12.0))) == 13.0
    assert magnitude(np.zeros(3)) == 0.0
    assert magnitude(f64((-3.0, -4.0, 0.0))) == 5.0


def test_operations_write_into_destination():
    """The destination may alias a source and is returned."""
    a = f64((1.0, 2.0, 3.0))
    b = f64((0.5, 0.5, 0.5))

    out = add(a, b, out=a)
    assert out is a
    assert np.array_equal(a, (1.5, 2.5, 3.5))

    out = subtract(a, b, out=a)
    assert out is a
    assert np.array_equal(a, (1.0, 2.0, 3.0))

    dest = np.empty(3)
    assert scale(a, 2.0, out=dest) is dest
    assert np.array_equal(dest, (2.0, 4.0, 6.0))

    assert divide(dest, 2.0, out=dest) is dest
    assert np.array_equal(dest, a)

    n = normalize(dest, out=dest)
    assert n is dest
    assert magnitude(dest) == pytest.approx(1.0)


def test_operations_without_destination_leave_sources_alone():
    a = f64((1.0, 0.0, 0.0))
    b = f64((0.0, 1.0, 0.0))
    c = add(a, b)
    assert c is not a and c is not b
    assert np.array_equal(a, (1.0, 0.0, 0.0))
    assert np.array_equal(b, (0.0, 1.0, 0.0))
