from __future__ import annotations

import threading

import pytest

from quiz_quest.core.services.session_clock import SessionClock, ThreadingScheduler


def test_clock_counts_down_and_expires_once(scheduler, fake_clock):
    ticks: list[int] = []
    expired: list[bool] = []
    clock = SessionClock(
        3,
        scheduler,
        on_tick=ticks.append,
        on_expired=lambda: expired.append(True),
        time_source=fake_clock,
    )
    clock.start()
    assert clock.is_running()

    scheduler.advance(2)
    assert ticks == [2, 1]
    assert clock.remaining_seconds == 1
    assert expired == []

    scheduler.advance(5)
    assert ticks == [2, 1, 0]
    assert expired == [True]
    assert clock.remaining_seconds == 0
    assert not clock.is_running()
    assert scheduler.pending() == []


def test_cancel_stops_pending_callbacks(scheduler, fake_clock):
    ticks: list[int] = []
    clock = SessionClock(10, scheduler, on_tick=ticks.append, time_source=fake_clock)
    clock.start()
    scheduler.advance(1)
    clock.cancel()
    scheduler.advance(5)
    assert ticks == [9]
    assert clock.remaining_seconds == 9
    assert not clock.is_running()


def test_stale_callback_is_ignored_after_cancel(scheduler, fake_clock):
    ticks: list[int] = []
    clock = SessionClock(10, scheduler, on_tick=ticks.append, time_source=fake_clock)
    clock.start()
    queued = scheduler.pending()[0]
    clock.cancel()
    # A timer that was already running when cancel() happened still fires.
    queued.callback()
    assert ticks == []


def test_late_tick_does_not_drift(scheduler, fake_clock):
    clock = SessionClock(10, scheduler, time_source=fake_clock)
    clock.start()
    # The first tick runs 0.4s late; the next one is still due on the whole second.
    fake_clock.now += 1.4
    first = scheduler.pending()[0]
    scheduler.calls.remove(first)
    first.callback()
    assert scheduler.pending()[0].due == pytest.approx(fake_clock.now + 0.6)


def test_non_positive_duration_is_rejected(scheduler):
    with pytest.raises(ValueError):
        SessionClock(0, scheduler)


def test_threading_scheduler_runs_callback_under_lock():
    lock = threading.Lock()
    done = threading.Event()
    held: list[bool] = []

    def callback() -> None:
        held.append(lock.locked())
        done.set()

    ThreadingScheduler(lock=lock).call_later(0.01, callback)
    assert done.wait(2.0)
    assert held == [True]
