from __future__ import annotations

import pytest

from quiz_quest.core.models import CompletionEvent, FinishReason
from quiz_quest.core.services.rewards import XpRewardDispatcher, level_for_xp, xp_for_attempt


def _event(earned: int, maximum: int = 100, xp_reward: int = 200) -> CompletionEvent:
    return CompletionEvent(
        quiz_id="sample",
        earned_points=earned,
        max_points=maximum,
        time_spent_seconds=30,
        hints_used=0,
        xp_reward=xp_reward,
        finish_reason=FinishReason.MANUAL,
    )


@pytest.mark.parametrize(
    ("earned", "expected_xp"),
    [(100, 200), (90, 200), (89, 160), (70, 160), (69, 100), (50, 100), (49, 0), (0, 0)],
)
def test_xp_tiers(earned, expected_xp):
    assert xp_for_attempt(_event(earned)) == expected_xp


@pytest.mark.parametrize(
    ("earned", "maximum", "expected_xp"),
    [(179, 200, 80), (180, 200, 100), (99, 200, 0), (100, 200, 50), (0, 0, 0)],
)
def test_xp_tiers_use_unrounded_score(earned, maximum, expected_xp):
    assert xp_for_attempt(_event(earned, maximum=maximum, xp_reward=100)) == expected_xp


def test_grant_keeps_rounded_percentage_for_display():
    grant = XpRewardDispatcher().deliver(_event(99, maximum=200, xp_reward=100))
    assert grant.percentage == 50
    assert grant.xp_earned == 0
    assert grant.granted_at.tzinfo is not None


def test_level_boundaries():
    assert level_for_xp(0) == 1
    assert level_for_xp(999) == 1
    assert level_for_xp(1000) == 2


def test_dispatcher_accumulates_and_reports_level_up():
    dispatcher = XpRewardDispatcher(starting_xp=900)
    grant = dispatcher.deliver(_event(95))
    assert grant.xp_earned == 200
    assert grant.total_xp == 1100
    assert grant.leveled_up
    assert grant.message == "Quiz completed! +200 XP earned! Level 2 achieved!"

    summary = dispatcher.get_summary()
    assert summary.total_xp == 1100
    assert summary.level == 2
    assert summary.quizzes_completed == 1
    assert summary.last_grant is grant


def test_low_score_earns_nothing():
    dispatcher = XpRewardDispatcher()
    grant = dispatcher.deliver(_event(10))
    assert grant.xp_earned == 0
    assert not grant.leveled_up
    assert grant.message == "Quiz completed. Score at least 50% to earn XP."
    assert len(dispatcher.get_grants()) == 1


def test_negative_starting_xp_is_rejected():
    with pytest.raises(ValueError):
        XpRewardDispatcher(starting_xp=-1)
