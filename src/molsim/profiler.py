# MIT License (see LICENSE)
"""
Phase timing for the integration loop.

Universe.step() wraps each of its four phases in a profiler section when a
Profiler is attached, so the cost of the O(N²) force phase can be compared
with the O(N) update phases.

Example:
    profiler = Profiler()
    universe = Universe(particles=..., profiler=profiler)
    universe.simulate(1e-12)
    profiler.log_summary()
"""
from __future__ import annotations
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class ProfileStats:
    """Wall-clock samples per phase name, in seconds."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, elapsed: float) -> None:
        self.samples.setdefault(name, []).append(elapsed)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-phase statistics in milliseconds.

        Returns:
            {phase: {"n", "total_ms", "mean_ms", "min_ms", "max_ms"}}
        """
        result = {}
        for name, samples in self.samples.items():
            ms = 1e3 * np.asarray(samples)
            result[name] = {
                "n": len(samples),
                "total_ms": float(ms.sum()),
                "mean_ms": float(ms.mean()),
                "min_ms": float(ms.min()),
                "max_ms": float(ms.max()),
            }
        return result


class Profiler:
    """Collects ProfileStats through timed `with profiler.section(name):` blocks."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under name."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - start)

    def log_summary(self, level: int = logging.INFO) -> None:
        """Write one line per section to the log."""
        for name, s in self.stats.summary().items():
            logger.log(
                level,
                "%-12s n=%d total=%.3f ms mean=%.4f ms min=%.4f ms max=%.4f ms",
                name, s["n"], s["total_ms"], s["mean_ms"], s["min_ms"], s["max_ms"],
            )
