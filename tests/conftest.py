from __future__ import annotations

from collections.abc import Callable

import pytest

from quiz_quest.core.models import Quiz, QuizQuestion


class FakeClock:
    """Monotonic time source the tests move by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


class _PendingCall:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler that only fires callbacks when the test advances time."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.calls: list[_PendingCall] = []

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> _PendingCall:
        call = _PendingCall(self.clock.now + delay_seconds, callback)
        self.calls.append(call)
        return call

    def pending(self) -> list[_PendingCall]:
        return [call for call in self.calls if not call.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.clock.now + seconds
        while True:
            due = [c for c in self.pending() if c.due <= target]
            if not due:
                break
            call = min(due, key=lambda c: c.due)
            self.calls.remove(call)
            self.clock.now = max(self.clock.now, call.due)
            call.callback()
        self.clock.now = target


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler(fake_clock: FakeClock) -> ManualScheduler:
    return ManualScheduler(fake_clock)


def make_quiz(time_limit_seconds: int | None = None, xp_reward: int = 100, quiz_id: str = "sample") -> Quiz:
    return Quiz(
        id=quiz_id,
        title="Sample Quiz",
        questions=(
            QuizQuestion(
                id="q1",
                prompt="What is 2 + 2?",
                options=("3", "4", "5"),
                correct_option_index=1,
                points=10,
                order=1,
                explanation="2 + 2 = 4.",
            ),
            QuizQuestion(
                id="q2",
                prompt="Which is a prime?",
                options=("7", "8", "9", "10"),
                correct_option_index=0,
                points=20,
                order=2,
                hint="Only divisible by 1 and itself.",
                explanation="7 has no divisors other than 1 and 7.",
            ),
            QuizQuestion(
                id="q3",
                prompt="Pick C.",
                options=("A", "B", "C"),
                correct_option_index=2,
                points=10,
                order=3,
            ),
        ),
        time_limit_seconds=time_limit_seconds,
        xp_reward=xp_reward,
    )


@pytest.fixture()
def sample_quiz() -> Quiz:
    return make_quiz()


@pytest.fixture()
def timed_quiz() -> Quiz:
    return make_quiz(time_limit_seconds=5)
