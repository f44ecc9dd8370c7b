# MIT License (see LICENSE)
"""
Utility functions for 3D vector math.

Vectors are float64 numpy arrays of shape (3,). Every operation that
produces a vector accepts an optional destination ``out``; the destination
may alias one of the operands for in-place updates, and it is returned so
calls can be chained. When ``out`` is None a new array is allocated.

Operations with no defined result raise instead of returning NaN/inf:
- divide() raises DivisionByZero when the scalar is exactly zero.
- normalize() raises UndefinedOperation for the zero vector.
"""
from __future__ import annotations
import math

import numpy as np

from .errors import DivisionByZero, UndefinedOperation


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def zero() -> np.ndarray:
    """A fresh zero vector."""
    return np.zeros(3, dtype=np.float64)


def add(a: np.ndarray, b: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """Component-wise a + b."""
    return np.add(a, b, out=out)


def subtract(a: np.ndarray, b: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """Component-wise a - b."""
    return np.subtract(a, b, out=out)


def scale(v: np.ndarray, k: float, out: np.ndarray | None = None) -> np.ndarray:
    """Multiply every component of v by the scalar k."""
    return np.multiply(v, k, out=out)


def divide(v: np.ndarray, k: float, out: np.ndarray | None = None) -> np.ndarray:
    """
    Divide every component of v by the scalar k.

    Raises:
        DivisionByZero: If k == 0.
    """
    if k == 0.0:
        raise DivisionByZero(f"cannot divide vector {v.tolist()} by zero")
    return np.divide(v, k, out=out)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude. Avoids sqrt when only comparisons are needed."""
    return float(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def magnitude(v: np.ndarray) -> float:
    """Euclidean norm sqrt(x² + y² + z²); always >= 0."""
    return math.sqrt(norm2(v))


def normalize(v: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Return the unit vector in the direction of v.

    Raises:
        UndefinedOperation: If v is the zero vector (it has no direction).
    """
    n = magnitude(v)
    if n == 0.0:
        raise UndefinedOperation("cannot normalize the zero vector")
    return divide(v, n, out=out)
