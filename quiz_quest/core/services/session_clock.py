"""Countdown clock for timed quiz attempts.

Architecture note:
    The clock never sleeps or polls. Each second is a single scheduled
    callback obtained from a ``Scheduler``; the next one is scheduled against
    a monotonic deadline so late callbacks do not accumulate drift. Cancelling
    bumps a generation token, which makes any callback that is already queued
    (for example a ``threading.Timer`` blocked on the manager lock) a no-op
    once it finally runs.
"""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock, RLock, Timer
import time
from typing import Protocol

from quiz_quest.constants.quiz_constants import CLOCK_TICK_SECONDS


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback once after a delay."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall: ...


class ThreadingScheduler:
    """Scheduler backed by daemon ``threading.Timer`` threads.

    When a lock is given, callbacks run while holding it so they serialize
    with every other access guarded by the same lock.
    """

    def __init__(self, lock: Lock | RLock | None = None) -> None:
        self._lock = lock

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall:
        def run() -> None:
            if self._lock is None:
                callback()
                return
            with self._lock:
                callback()

        timer = Timer(max(0.0, delay_seconds), run)
        timer.daemon = True
        timer.name = "QuizSessionClock"
        timer.start()
        return timer


class SessionClock:
    """Counts whole seconds down to zero and signals expiry once."""

    def __init__(
        self,
        total_seconds: int,
        scheduler: Scheduler,
        on_tick: Callable[[int], None] | None = None,
        on_expired: Callable[[], None] | None = None,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        if total_seconds <= 0:
            raise ValueError("Clock duration must be a positive number of seconds.")
        self._remaining = total_seconds
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._on_expired = on_expired
        self._time_source = time_source
        self._generation = 0
        self._running = False
        self._pending: ScheduledCall | None = None
        self._next_deadline = 0.0

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running or self._remaining <= 0:
            return
        self._running = True
        self._next_deadline = self._time_source() + CLOCK_TICK_SECONDS
        self._schedule_next()

    def cancel(self) -> None:
        """Stop the countdown. Callbacks already queued will be ignored."""
        self._generation += 1
        self._running = False
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_next(self) -> None:
        generation = self._generation
        delay = max(0.0, self._next_deadline - self._time_source())
        self._pending = self._scheduler.call_later(delay, lambda: self._handle_tick(generation))

    def _handle_tick(self, generation: int) -> None:
        if generation != self._generation or not self._running:
            return
        self._pending = None
        self._remaining -= 1
        if self._on_tick is not None:
            self._on_tick(self._remaining)
        if self._remaining <= 0:
            self._remaining = 0
            self._running = False
            if self._on_expired is not None:
                self._on_expired()
            return
        # on_tick may have cancelled us.
        if generation != self._generation:
            return
        self._next_deadline += CLOCK_TICK_SECONDS
        self._schedule_next()
