# MIT License (see LICENSE)
"""
Headless frame driver.

Stands in for a display's refresh callback: ``request_frame`` queues a
callback, ``advance`` moves a synthetic clock forward and delivers what
was queued. Useful for scripts, benchmarks and tests that need the
scheduling behaviour of a real frame loop without a window.

Example:
    driver = ManualFrameDriver()
    sim = Simulation(request_frame=driver.request_frame)
    sim.initialize(50)
    sim.start(driver.time)
    driver.run(frames=600, frame_time=1/60)
"""
from __future__ import annotations
from typing import Callable

FrameCallback = Callable[[float], None]


class ManualFrameDriver:
    """
    Deterministic request_frame implementation.

    Args:
        start_time: Initial value of the synthetic clock, in seconds.
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self.time = float(start_time)
        self._pending: list[FrameCallback] = []
        self.delivered = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def advance(self, dt: float) -> int:
        """
        Move the clock by dt and deliver the callbacks queued before the call.

        Callbacks requested during delivery wait for the next advance.

        Returns:
            Number of callbacks delivered.
        """
        self.time += dt
        due, self._pending = self._pending, []
        for callback in due:
            callback(self.time)
        self.delivered += len(due)
        return len(due)

    def run(self, frames: int, frame_time: float) -> int:
        """Advance `frames` times by `frame_time`. Returns total deliveries."""
        total = 0
        for _ in range(frames):
            total += self.advance(frame_time)
        return total
