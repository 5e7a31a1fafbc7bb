# MIT License (see LICENSE)
"""
Simple profiling utilities for performance measurement.

Times the phases of a simulation tick (forces, integrate, boundary,
statistics) without external dependencies.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    ...
    print(profiler.stats.summary()["forces"]["mean_ms"])
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
import time
from typing import Iterator


@dataclass
class ProfileStats:
    """Raw timing samples per named section, in seconds."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section stats.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms', 'total_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            total = sum(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * total / n,
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)

    def reset(self) -> None:
        self.stats = ProfileStats()
