"""State machine driving one learner's attempt at a single quiz."""

from __future__ import annotations

from collections.abc import Callable
import logging
import time

from quiz_quest.core.models import (
    CompletionEvent,
    FinishReason,
    OperationResult,
    Quiz,
    QuizQuestion,
    RejectionKind,
    ScoreResult,
    SessionPhase,
    SessionSnapshot,
)
from quiz_quest.core.services import scorer
from quiz_quest.core.services.answer_ledger import AnswerLedger
from quiz_quest.core.services.reveal_controller import RevealController
from quiz_quest.core.services.session_clock import Scheduler, SessionClock

logger = logging.getLogger(__name__)

CompletionListener = Callable[[CompletionEvent], None]
ChangeListener = Callable[[SessionSnapshot], None]


class AttemptSession:
    """Owns position, answers, reveal flags, clock and result of one attempt.

    Every mutator returns an ``OperationResult``. Rejected operations leave
    the session untouched. Once completed the session is a frozen snapshot;
    a retake needs a new instance.
    """

    def __init__(
        self,
        quiz: Quiz,
        scheduler: Scheduler | None = None,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        if not quiz.questions:
            raise ValueError("Cannot run a session for a quiz without questions.")
        if quiz.time_limit_seconds is not None and scheduler is None:
            raise ValueError("A timed quiz needs a scheduler for its clock.")

        self._quiz = quiz
        self._scheduler = scheduler
        self._time_source = time_source

        self._phase = SessionPhase.NOT_STARTED
        self._current_index = 0
        self._ledger = AnswerLedger(quiz)
        self._reveal = RevealController()
        self._clock: SessionClock | None = None
        self._result: ScoreResult | None = None
        self._finish_reason: FinishReason | None = None
        self._completion_notice: str | None = None
        self._started_at: float | None = None
        self._finished_at: float | None = None
        self._discarded = False

        self._completion_listeners: list[CompletionListener] = []
        self._change_listeners: list[ChangeListener] = []

    # --- Read access ---

    @property
    def quiz(self) -> Quiz:
        return self._quiz

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> QuizQuestion:
        return self._quiz.questions[self._current_index]

    @property
    def answers(self) -> dict[str, int]:
        return self._ledger.as_dict()

    @property
    def hints_used(self) -> int:
        return self._reveal.hints_used

    @property
    def remaining_seconds(self) -> int | None:
        if self._clock is None:
            return self._quiz.time_limit_seconds
        return self._clock.remaining_seconds

    @property
    def result(self) -> ScoreResult | None:
        return self._result

    @property
    def completion_notice(self) -> str | None:
        return self._completion_notice

    def is_discarded(self) -> bool:
        return self._discarded

    def time_spent_seconds(self) -> int:
        if self._started_at is None:
            return 0
        end = self._finished_at if self._finished_at is not None else self._time_source()
        return max(0, round(end - self._started_at))

    def snapshot(self) -> SessionSnapshot:
        question = None if self._phase is SessionPhase.NOT_STARTED else self.current_question
        selected = self._ledger.get(question.id) if question is not None else None
        return SessionSnapshot(
            quiz_id=self._quiz.id,
            quiz_title=self._quiz.title,
            phase=self._phase,
            current_index=self._current_index,
            question_count=self._quiz.question_count,
            current_question=question,
            selected_option_index=selected,
            reveal=self._reveal.state,
            hints_used=self._reveal.hints_used,
            remaining_seconds=self.remaining_seconds,
            answered_count=len(self._ledger),
            result=self._result,
            percentage=scorer.percentage(self._result) if self._result is not None else None,
            finish_reason=self._finish_reason,
            completion_notice=self._completion_notice,
        )

    # --- Observation ---

    def add_completion_listener(self, listener: CompletionListener) -> None:
        self._completion_listeners.append(listener)

    def add_change_listener(self, listener: ChangeListener) -> None:
        self._change_listeners.append(listener)

    # --- Operations ---

    def start(self) -> OperationResult:
        if self._discarded:
            return self._reject(RejectionKind.INVALID_PHASE, "Session was discarded.")
        if self._phase is not SessionPhase.NOT_STARTED:
            return self._reject(RejectionKind.INVALID_PHASE, "Session has already been started.")

        self._phase = SessionPhase.ACTIVE
        self._started_at = self._time_source()
        if self._quiz.time_limit_seconds is not None and self._scheduler is not None:
            self._clock = SessionClock(
                self._quiz.time_limit_seconds,
                self._scheduler,
                on_tick=self._handle_clock_tick,
                on_expired=self._handle_clock_expired,
                time_source=self._time_source,
            )
            self._clock.start()
        logger.info("Started quiz '%s' (%d questions)", self._quiz.id, self._quiz.question_count)
        self._notify_change()
        return OperationResult.ok()

    def answer(self, question_id: str, option_index: int) -> OperationResult:
        rejection = self._require_active()
        if rejection is not None:
            return rejection
        if not self._ledger.knows_question(question_id):
            return self._reject(
                RejectionKind.INVALID_ARGUMENT,
                f"Question '{question_id}' is not part of this quiz.",
            )
        if not self._ledger.is_valid_option(question_id, option_index):
            return self._reject(
                RejectionKind.INVALID_ARGUMENT,
                f"Option {option_index!r} is out of range for question '{question_id}'.",
            )

        self._ledger.record(question_id, option_index)
        # A changed answer may make a shown explanation stale.
        self._reveal.hide_explanation()
        self._notify_change()
        return OperationResult.ok()

    def answer_current(self, option_index: int) -> OperationResult:
        """Answer whichever question is currently displayed."""
        rejection = self._require_active()
        if rejection is not None:
            return rejection
        return self.answer(self.current_question.id, option_index)

    def next(self) -> OperationResult:
        rejection = self._require_active()
        if rejection is not None:
            return rejection
        if self._current_index >= self._quiz.question_count - 1:
            return self.finish(FinishReason.LAST_QUESTION)

        self._current_index += 1
        self._reveal.reset_for_navigation()
        self._notify_change()
        return OperationResult.ok()

    def previous(self) -> OperationResult:
        rejection = self._require_active()
        if rejection is not None:
            return rejection
        if self._current_index == 0:
            return self._reject(RejectionKind.AT_BOUNDARY, "Already at the first question.")

        self._current_index -= 1
        self._reveal.reset_for_navigation()
        self._notify_change()
        return OperationResult.ok()

    def finish(self, reason: FinishReason = FinishReason.MANUAL) -> OperationResult:
        if self._phase is SessionPhase.COMPLETED:
            return OperationResult.ok()
        rejection = self._require_active()
        if rejection is not None:
            return rejection

        if self._clock is not None:
            self._clock.cancel()
        self._finished_at = self._time_source()
        self._result = scorer.score(self._quiz, self._ledger)
        self._finish_reason = reason
        self._phase = SessionPhase.COMPLETED
        logger.info(
            "Finished quiz '%s': %d/%d points (%s)",
            self._quiz.id,
            self._result.earned_points,
            self._result.max_points,
            reason.value,
        )

        event = CompletionEvent(
            quiz_id=self._quiz.id,
            earned_points=self._result.earned_points,
            max_points=self._result.max_points,
            time_spent_seconds=self.time_spent_seconds(),
            hints_used=self._reveal.hints_used,
            xp_reward=self._quiz.xp_reward,
            finish_reason=reason,
        )
        self._deliver_completion(event)
        self._notify_change()
        return OperationResult.ok()

    def show_hint(self) -> OperationResult:
        rejection = self._require_active()
        if rejection is not None:
            return rejection
        if self._reveal.show_hint():
            self._notify_change()
        return OperationResult.ok()

    def hide_hint(self) -> OperationResult:
        rejection = self._require_active()
        if rejection is not None:
            return rejection
        self._reveal.hide_hint()
        self._notify_change()
        return OperationResult.ok()

    def show_explanation(self) -> OperationResult:
        rejection = self._require_active()
        if rejection is not None:
            return rejection
        self._reveal.show_explanation()
        self._notify_change()
        return OperationResult.ok()

    def hide_explanation(self) -> OperationResult:
        rejection = self._require_active()
        if rejection is not None:
            return rejection
        self._reveal.hide_explanation()
        self._notify_change()
        return OperationResult.ok()

    def discard(self) -> None:
        """Tear the session down, stopping its clock before returning."""
        if self._clock is not None:
            self._clock.cancel()
        self._discarded = True
        self._change_listeners.clear()
        self._completion_listeners.clear()

    # --- Internals ---

    def _require_active(self) -> OperationResult | None:
        if self._discarded:
            return self._reject(RejectionKind.INVALID_PHASE, "Session was discarded.")
        if self._phase is not SessionPhase.ACTIVE:
            return self._reject(
                RejectionKind.INVALID_PHASE,
                f"Operation not allowed while session is {self._phase.value}.",
            )
        return None

    def _reject(self, kind: RejectionKind, reason: str) -> OperationResult:
        logger.debug("Rejected operation on quiz '%s': %s", self._quiz.id, reason)
        return OperationResult.rejected(kind, reason)

    def _handle_clock_tick(self, remaining_seconds: int) -> None:
        if remaining_seconds > 0:
            self._notify_change()

    def _handle_clock_expired(self) -> None:
        if self._discarded or self._phase is not SessionPhase.ACTIVE:
            return
        logger.info("Time expired for quiz '%s'", self._quiz.id)
        self.finish(FinishReason.TIME_EXPIRED)

    def _deliver_completion(self, event: CompletionEvent) -> None:
        for listener in list(self._completion_listeners):
            try:
                listener(event)
            except Exception as exc:  # noqa: BLE001 - delivery is best-effort
                logger.exception("Completion event for quiz '%s' was not delivered", event.quiz_id)
                self._completion_notice = f"Could not deliver quiz results: {exc}"

    def _notify_change(self) -> None:
        if not self._change_listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._change_listeners):
            try:
                listener(snapshot)
            except Exception:  # noqa: BLE001
                logger.exception("Session change listener failed")
