# MIT License (see LICENSE)
"""
Frame clock: the Stopped/Running state machine that turns wall-clock
samples into clamped simulation steps.

The clock never owns a loop. A host hands it a ``request_frame`` hook
(the equivalent of "call me on the next display refresh"); while running,
every tick asks for exactly one follow-up frame, and a frame that arrives
after ``pause()`` does nothing and asks for nothing. Without a hook, the
host calls ``tick`` itself.

Timestep rule:
    frame_dt = max(t - t_prev, 0)
    dt       = min(frame_dt * time_scale, max_dt)
so a stall (tab switch, debugger pause) never becomes one huge step. A
non-finite timestamp counts as a zero-length frame and leaves the
reference time unchanged.
"""
from __future__ import annotations
from enum import Enum
import logging
import math
import time
from typing import Callable

from .constants import DEFAULT_MAX_DT
from .errors import ConfigurationError
from .util import require_finite

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]
RequestFrame = Callable[[FrameCallback], None]
StepFn = Callable[[float, float], None]


class ClockState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class SimulationClock:
    """
    Drives a step function from wall-clock timestamps.

    Args:
        step: Called as step(dt, frame_dt) once per running tick, where dt is
            the clamped, time-scaled integration step and frame_dt the raw
            (non-negative) wall-clock delta.
        max_dt: Largest dt handed to step, in seconds.
        time_scale: Multiplier applied to the wall-clock delta before clamping.
        request_frame: Optional host hook that schedules one future call of
            the callback it receives, with the wake-up time in seconds.
        now: Time source used by start() when no timestamp is given.
    """

    def __init__(
        self,
        step: StepFn,
        max_dt: float = DEFAULT_MAX_DT,
        time_scale: float = 1.0,
        request_frame: RequestFrame | None = None,
        now: Callable[[], float] = time.perf_counter,
    ) -> None:
        max_dt = require_finite("max_dt", max_dt)
        if max_dt <= 0:
            raise ConfigurationError(f"max_dt must be > 0, got {max_dt}")
        self.step = step
        self.max_dt = max_dt
        self.time_scale = 1.0
        self.set_time_scale(time_scale)
        self.request_frame = request_frame
        self.now = now

        self.state = ClockState.STOPPED
        self.last_time: float | None = None
        self.frames = 0
        self._frame_pending = False

    @property
    def running(self) -> bool:
        return self.state is ClockState.RUNNING

    @property
    def frame_pending(self) -> bool:
        """True while a requested wake-up has not been delivered yet."""
        return self._frame_pending

    def set_time_scale(self, multiplier: float) -> None:
        """Takes effect on the next tick."""
        multiplier = require_finite("time_scale", multiplier)
        if multiplier < 0:
            raise ConfigurationError(f"time_scale must be >= 0, got {multiplier}")
        self.time_scale = multiplier

    def start(self, current_time: float | None = None) -> None:
        """
        Enter Running and take current_time as the integration reference.

        Calling start while already running does nothing.
        """
        if self.running:
            return
        self.state = ClockState.RUNNING
        if current_time is None or not math.isfinite(current_time):
            current_time = self.now()
        self.last_time = float(current_time)
        logger.debug("clock started at t=%.6f", self.last_time)
        self._schedule()

    def pause(self) -> None:
        """Enter Stopped. A tick already in progress completes normally."""
        if self.running:
            logger.debug("clock paused after %d frames", self.frames)
        self.state = ClockState.STOPPED

    def stop(self) -> None:
        """Enter Stopped and forget the time reference."""
        self.pause()
        self.last_time = None

    def tick(self, current_time: float) -> bool:
        """
        Run one step if running.

        Backwards or non-finite timestamps give a zero-length step.

        Returns:
            True if a step was taken.
        """
        if not self.running:
            return False

        current_time = float(current_time)
        frame_dt = 0.0
        if not math.isfinite(current_time):
            # Keep the old reference; this frame integrates nothing.
            logger.debug("ignoring non-finite frame time %r", current_time)
        elif self.last_time is None:
            self.last_time = current_time
        else:
            delta = current_time - self.last_time
            if delta > 0.0:
                frame_dt = delta
            self.last_time = current_time

        dt = frame_dt * self.time_scale
        if dt > self.max_dt:
            logger.debug("frame delta %.4fs clamped to %.4fs", dt, self.max_dt)
            dt = self.max_dt

        self.step(dt, frame_dt)
        self.frames += 1
        self._schedule()
        return True

    def _on_frame(self, current_time: float) -> None:
        self._frame_pending = False
        self.tick(current_time)

    def _schedule(self) -> None:
        """Ask the host for one wake-up unless one is already outstanding."""
        if self.request_frame is None or self._frame_pending or not self.running:
            return
        self._frame_pending = True
        self.request_frame(self._on_frame)
