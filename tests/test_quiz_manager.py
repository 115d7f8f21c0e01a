from __future__ import annotations

from pathlib import Path

import pytest

from conftest import make_quiz

from quiz_quest.core.models import FinishReason, RejectionKind, SessionPhase
from quiz_quest.core.quiz_importer import QuizImportError
from quiz_quest.core.quiz_manager import QuizManager


@pytest.fixture()
def manager(scheduler, fake_clock):
    quiz_manager = QuizManager(scheduler=scheduler, time_source=fake_clock)
    quiz_manager.load_quizzes([make_quiz(), make_quiz(time_limit_seconds=5, quiz_id="timed")])
    return quiz_manager


def test_operations_without_session_are_rejected(manager):
    assert manager.get_snapshot() is None
    for operation in (manager.next_question, manager.finish_quiz, manager.show_hint, manager.retake_quiz):
        result = operation()
        assert result.kind is RejectionKind.INVALID_PHASE


def test_start_unknown_quiz_is_rejected(manager):
    result = manager.start_quiz("missing")
    assert result.kind is RejectionKind.INVALID_ARGUMENT
    assert not manager.has_session()


def test_start_while_active_is_rejected(manager):
    assert manager.start_quiz("sample")
    manager.answer_current_question(1)
    result = manager.start_quiz("timed")
    assert result.kind is RejectionKind.INVALID_PHASE
    snapshot = manager.get_snapshot()
    assert snapshot.quiz_id == "sample"
    assert snapshot.answered_count == 1


def test_full_attempt_grants_rewards(manager):
    manager.start_quiz("sample")
    manager.answer_question("q1", 1)
    manager.answer_question("q2", 0)
    manager.answer_question("q3", 2)
    manager.next_question()
    manager.next_question()
    assert manager.next_question()

    snapshot = manager.get_snapshot()
    assert snapshot.phase is SessionPhase.COMPLETED
    assert snapshot.percentage == 100
    assert snapshot.finish_reason is FinishReason.LAST_QUESTION

    grant = manager.get_last_grant()
    assert grant.xp_earned == 100
    assert manager.get_reward_summary().total_xp == 100


def test_retake_starts_fresh_attempt(manager):
    manager.start_quiz("sample")
    manager.show_hint()
    manager.answer_question("q1", 1)
    manager.finish_quiz()

    assert manager.retake_quiz()
    snapshot = manager.get_snapshot()
    assert snapshot.phase is SessionPhase.ACTIVE
    assert snapshot.quiz_id == "sample"
    assert snapshot.answered_count == 0
    assert snapshot.hints_used == 0
    assert manager.get_last_grant() is None
    assert manager.get_reward_summary().quizzes_completed == 1


def test_retake_requires_completed_session(manager):
    manager.start_quiz("sample")
    assert manager.retake_quiz().kind is RejectionKind.INVALID_PHASE


def test_start_after_completion_replaces_session(manager):
    manager.start_quiz("sample")
    manager.finish_quiz()
    assert manager.start_quiz("timed")
    assert manager.get_snapshot().quiz_id == "timed"


def test_clear_session_cancels_clock(manager, scheduler):
    events = []
    manager.add_completion_listener(events.append)
    manager.start_quiz("timed")
    assert scheduler.pending()
    manager.clear_session()
    assert scheduler.pending() == []
    scheduler.advance(10)
    assert events == []
    assert manager.get_snapshot() is None


def test_timed_attempt_expires_and_is_rewarded(manager, scheduler):
    events = []
    manager.add_completion_listener(events.append)
    manager.start_quiz("timed")
    manager.answer_question("q1", 1)
    scheduler.advance(5)

    snapshot = manager.get_snapshot()
    assert snapshot.phase is SessionPhase.COMPLETED
    assert snapshot.finish_reason is FinishReason.TIME_EXPIRED
    assert snapshot.result.earned_points == 10
    assert len(events) == 1
    assert manager.get_last_grant() is not None


def test_failing_listener_surfaces_notice(manager):
    def broken(_event):
        raise ConnectionError("progress store unavailable")

    manager.add_completion_listener(broken)
    manager.start_quiz("sample")
    assert manager.finish_quiz()
    snapshot = manager.get_snapshot()
    assert snapshot.phase is SessionPhase.COMPLETED
    assert "progress store unavailable" in snapshot.completion_notice
    assert manager.get_last_grant() is not None


def test_loading_quizzes_discards_session(manager):
    manager.start_quiz("sample")
    manager.load_quizzes([make_quiz(quiz_id="other")])
    assert not manager.has_session()
    assert [quiz.id for quiz in manager.get_quizzes()] == ["other"]


def test_load_library(tmp_path: Path, scheduler):
    (tmp_path / "basics.txt").write_text("Q: a\nA: 1\nB: 2\nCORRECT: A\n", encoding="utf-8")
    quiz_manager = QuizManager(scheduler=scheduler)
    assert quiz_manager.load_library(tmp_path) == 1
    assert quiz_manager.get_quiz("basics").question_count == 1


def test_load_library_propagates_import_errors(tmp_path: Path, scheduler):
    (tmp_path / "bad.txt").write_text("Q: a\n", encoding="utf-8")
    with pytest.raises(QuizImportError):
        QuizManager(scheduler=scheduler).load_library(tmp_path)


def test_snapshot_and_grant_are_read_together(manager, scheduler):
    assert manager.get_snapshot_and_grant() == (None, None)

    manager.start_quiz("timed")
    snapshot, grant = manager.get_snapshot_and_grant()
    assert snapshot.phase is SessionPhase.ACTIVE
    assert grant is None

    manager.answer_question("q1", 1)
    scheduler.advance(5)
    snapshot, grant = manager.get_snapshot_and_grant()
    assert snapshot.phase is SessionPhase.COMPLETED
    assert grant is not None
    assert grant.quiz_id == "timed"
