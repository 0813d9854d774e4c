"""
Pausable timers driven by an injected clock.

Nothing here ticks on its own: elapsed time is derived from clock samples
taken when a method is called, so the same sequence of clock readings always
produces the same durations.
"""
from __future__ import annotations
import math
from enum import Enum

from ironlog.services.clock import Clock


class TimerState(str, Enum):
    idle = "idle"
    running = "running"
    paused = "paused"
    stopped = "stopped"


class Stopwatch:
    """Counts up. Paused intervals never count towards ``elapsed``."""

    def __init__(self, clock: Clock):
        self._clock = clock
        self.reset()

    def reset(self) -> None:
        self.state = TimerState.idle
        self._accumulated = 0.0
        self._run_started: float | None = None

    @property
    def running(self) -> bool:
        return self.state is TimerState.running

    @property
    def paused(self) -> bool:
        return self.state is TimerState.paused

    @property
    def active(self) -> bool:
        """Started and not yet stopped (running or paused)."""
        return self.state in (TimerState.running, TimerState.paused)

    def start(self, at: float | None = None) -> None:
        # no-op while already counting; a stopped watch keeps its total
        if self.active:
            return
        now = self._clock.now()
        self._run_started = now if at is None else min(at, now)
        self.state = TimerState.running

    def restart(self, at: float | None = None) -> None:
        self.reset()
        self.start(at)

    def pause(self) -> bool:
        if not self.running:
            return False
        self._accumulated += self._clock.now() - self._run_started
        self._run_started = None
        self.state = TimerState.paused
        return True

    def resume(self) -> bool:
        if not self.paused:
            return False
        self._run_started = self._clock.now()
        self.state = TimerState.running
        return True

    def stop(self) -> int:
        """Freeze the watch and return whole elapsed seconds. Idempotent."""
        if self.running:
            self._accumulated += self._clock.now() - self._run_started
        self._run_started = None
        if self.state is not TimerState.idle:
            self.state = TimerState.stopped
        return self.elapsed_seconds()

    def elapsed(self) -> float:
        total = self._accumulated
        if self.running:
            total += self._clock.now() - self._run_started
        return max(0.0, total)

    def elapsed_seconds(self) -> int:
        return int(math.floor(self.elapsed()))


class Countdown:
    """Counts down from ``duration`` to zero; pausing freezes the remainder."""

    def __init__(self, clock: Clock):
        self._watch = Stopwatch(clock)
        self.duration = 0

    @property
    def state(self) -> TimerState:
        return self._watch.state

    @property
    def active(self) -> bool:
        return self._watch.active

    @property
    def paused(self) -> bool:
        return self._watch.paused

    def start(self, duration: int) -> None:
        self.duration = max(0, int(duration))
        self._watch.restart()

    def pause(self) -> bool:
        return self._watch.pause()

    def resume(self) -> bool:
        return self._watch.resume()

    def stop(self) -> int:
        self._watch.stop()
        return self.elapsed_seconds()

    def reset(self) -> None:
        self._watch.reset()
        self.duration = 0

    def elapsed_seconds(self) -> int:
        return min(self.duration, self._watch.elapsed_seconds())

    def remaining_seconds(self) -> int:
        if self.state is TimerState.idle:
            return 0
        return self.duration - self.elapsed_seconds()

    @property
    def expired(self) -> bool:
        return self.active and self._watch.elapsed() >= self.duration

    def overshoot(self) -> float:
        """Seconds the countdown has been running past zero."""
        return max(0.0, self._watch.elapsed() - self.duration)
