"""Service turning completed attempts into XP and levels."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging

from quiz_quest.constants.quiz_constants import XP_PER_LEVEL, XP_REWARD_TIERS
from quiz_quest.core.models import CompletionEvent, ScoreResult
from quiz_quest.core.services import scorer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RewardGrant:
    """XP granted for a single completed attempt."""

    quiz_id: str
    percentage: int
    xp_earned: int
    total_xp: int
    level: int
    leveled_up: bool
    message: str
    granted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, slots=True)
class RewardSummary:
    """Immutable snapshot returned to consumers."""

    total_xp: int
    level: int
    quizzes_completed: int
    last_grant: RewardGrant | None


def xp_for_attempt(event: CompletionEvent) -> int:
    """XP earned for an attempt, by percentage tier of the quiz reward.

    Tiers compare the exact score, not the rounded display percentage, so
    89.5% stays in the 70% tier.
    """
    if event.max_points <= 0:
        return 0
    for minimum, share in XP_REWARD_TIERS:
        if event.earned_points * 100 >= minimum * event.max_points:
            return int(event.xp_reward * share)
    return 0


def level_for_xp(total_xp: int) -> int:
    return total_xp // XP_PER_LEVEL + 1


class XpRewardDispatcher:
    """Consumes completion events and accumulates the learner's XP."""

    def __init__(self, starting_xp: int = 0) -> None:
        if starting_xp < 0:
            raise ValueError("Starting XP must not be negative.")
        self._total_xp = starting_xp
        self._grants: list[RewardGrant] = []

    def deliver(self, event: CompletionEvent) -> RewardGrant:
        """Grant XP for a completed attempt and return the recorded grant."""
        previous_level = level_for_xp(self._total_xp)
        xp_earned = xp_for_attempt(event)
        self._total_xp += xp_earned
        level = level_for_xp(self._total_xp)
        achieved = scorer.percentage(
            ScoreResult(earned_points=event.earned_points, max_points=event.max_points)
        )

        if xp_earned > 0:
            message = f"Quiz completed! +{xp_earned} XP earned!"
        else:
            message = "Quiz completed. Score at least 50% to earn XP."
        if level > previous_level:
            message += f" Level {level} achieved!"

        grant = RewardGrant(
            quiz_id=event.quiz_id,
            percentage=achieved,
            xp_earned=xp_earned,
            total_xp=self._total_xp,
            level=level,
            leveled_up=level > previous_level,
            message=message,
        )
        self._grants.append(grant)
        logger.info("Quiz '%s' scored %d%%: +%d XP (total %d)", event.quiz_id, achieved, xp_earned, self._total_xp)
        return grant

    def get_summary(self) -> RewardSummary:
        return RewardSummary(
            total_xp=self._total_xp,
            level=level_for_xp(self._total_xp),
            quizzes_completed=len(self._grants),
            last_grant=self._grants[-1] if self._grants else None,
        )

    def get_grants(self) -> list[RewardGrant]:
        return list(self._grants)
