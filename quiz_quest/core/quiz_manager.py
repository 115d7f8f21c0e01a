"""Business logic for managing quiz state shared between UI and API."""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path
from threading import RLock
import time

from quiz_quest.core.models import (
    CompletionEvent,
    OperationResult,
    Quiz,
    RejectionKind,
    SessionPhase,
    SessionSnapshot,
)
from quiz_quest.core.quiz_catalog import QuizCatalog
from quiz_quest.core.quiz_importer import load_quizzes_from_directory
from quiz_quest.core.services.attempt_session import AttemptSession
from quiz_quest.core.services.rewards import RewardGrant, RewardSummary, XpRewardDispatcher
from quiz_quest.core.services.session_clock import Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

_NO_SESSION = "No quiz is in progress."


class QuizManager:
    """Facade for quiz services: Catalog, AttemptSession and rewards.

    The Qt window and the API thread share one manager. Every call, and every
    clock callback, runs under the same re-entrant lock.
    """

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        reward_dispatcher: XpRewardDispatcher | None = None,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = RLock()
        self._time_source = time_source

        # Services
        self._catalog = QuizCatalog()
        self._scheduler = scheduler or ThreadingScheduler(lock=self._lock)
        self._rewards = reward_dispatcher or XpRewardDispatcher()
        self._session: AttemptSession | None = None
        self._last_grant: RewardGrant | None = None
        self._completion_listeners: list[Callable[[CompletionEvent], None]] = []

    # --- Quiz Catalog Delegation ---

    def load_quizzes(self, quizzes: list[Quiz]) -> None:
        with self._lock:
            self._catalog.load_quizzes(quizzes)
            self._discard_session()

    def load_library(self, directory: Path) -> int:
        """Import every quiz file in a directory and return how many loaded."""
        quizzes = load_quizzes_from_directory(directory)
        self.load_quizzes(quizzes)
        logger.info("Loaded %d quizzes from %s", len(quizzes), directory)
        return len(quizzes)

    def add_quiz(self, quiz: Quiz) -> Quiz:
        with self._lock:
            return self._catalog.add_quiz(quiz)

    def get_quizzes(self) -> list[Quiz]:
        with self._lock:
            return self._catalog.get_quizzes()

    def get_quiz(self, quiz_id: str) -> Quiz:
        with self._lock:
            return self._catalog.get_quiz(quiz_id)

    def has_quizzes(self) -> bool:
        with self._lock:
            return self._catalog.has_quizzes()

    # --- Session Lifecycle ---

    def start_quiz(self, quiz_id: str) -> OperationResult:
        """Start a fresh attempt. Allowed with no session or a completed one."""
        with self._lock:
            if not self._catalog.has_quiz(quiz_id):
                return OperationResult.rejected(RejectionKind.INVALID_ARGUMENT, f"Unknown quiz '{quiz_id}'.")
            if self._session is not None and self._session.phase is SessionPhase.ACTIVE:
                return OperationResult.rejected(
                    RejectionKind.INVALID_PHASE,
                    "A quiz is already in progress; clear it before starting another.",
                )
            return self._begin_session(self._catalog.get_quiz(quiz_id))

    def retake_quiz(self) -> OperationResult:
        """Replace a completed attempt with a new one for the same quiz."""
        with self._lock:
            if self._session is None:
                return OperationResult.rejected(RejectionKind.INVALID_PHASE, _NO_SESSION)
            if self._session.phase is not SessionPhase.COMPLETED:
                return OperationResult.rejected(
                    RejectionKind.INVALID_PHASE,
                    "Only a finished quiz can be retaken.",
                )
            return self._begin_session(self._session.quiz)

    def clear_session(self) -> None:
        """Discard the current attempt, stopping its clock."""
        with self._lock:
            self._discard_session()

    def has_session(self) -> bool:
        with self._lock:
            return self._session is not None

    def get_snapshot(self) -> SessionSnapshot | None:
        with self._lock:
            if self._session is None:
                return None
            return self._session.snapshot()

    def add_completion_listener(self, listener: Callable[[CompletionEvent], None]) -> None:
        """Subscribe to completion events of every future attempt."""
        with self._lock:
            self._completion_listeners.append(listener)

    # --- Attempt Session Delegation ---

    def answer_question(self, question_id: str, option_index: int) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.answer(question_id, option_index))

    def answer_current_question(self, option_index: int) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.answer_current(option_index))

    def next_question(self) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.next())

    def previous_question(self) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.previous())

    def finish_quiz(self) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.finish())

    def show_hint(self) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.show_hint())

    def hide_hint(self) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.hide_hint())

    def show_explanation(self) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.show_explanation())

    def hide_explanation(self) -> OperationResult:
        with self._lock:
            return self._call(lambda s: s.hide_explanation())

    # --- Rewards Delegation ---

    def get_reward_summary(self) -> RewardSummary:
        with self._lock:
            return self._rewards.get_summary()

    def get_last_grant(self) -> RewardGrant | None:
        """Grant recorded for the most recent completion of the current session."""
        with self._lock:
            return self._last_grant

    def get_snapshot_and_grant(self) -> tuple[SessionSnapshot | None, RewardGrant | None]:
        """Snapshot and its reward grant, read under one lock acquisition."""
        with self._lock:
            if self._session is None:
                return None, None
            return self._session.snapshot(), self._last_grant

    # --- Internals ---

    def _begin_session(self, quiz: Quiz) -> OperationResult:
        self._discard_session()
        session = AttemptSession(quiz, scheduler=self._scheduler, time_source=self._time_source)
        session.add_completion_listener(self._handle_completion)
        for listener in self._completion_listeners:
            session.add_completion_listener(listener)
        self._session = session
        return session.start()

    def _discard_session(self) -> None:
        if self._session is not None:
            self._session.discard()
            self._session = None
        self._last_grant = None

    def _handle_completion(self, event: CompletionEvent) -> None:
        self._last_grant = self._rewards.deliver(event)

    def _call(self, operation: Callable[[AttemptSession], OperationResult]) -> OperationResult:
        if self._session is None:
            return OperationResult.rejected(RejectionKind.INVALID_PHASE, _NO_SESSION)
        return operation(self._session)
