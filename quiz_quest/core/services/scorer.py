"""Scoring helpers for completed quiz attempts.

All functions here are pure: the same quiz and answers always produce the
same result, and none of them raise for missing or unexpected answers.
"""

from __future__ import annotations

from collections.abc import Mapping

from quiz_quest.constants.quiz_constants import CELEBRATION_THRESHOLD
from quiz_quest.core.models import Quiz, ScoreResult


def score(quiz: Quiz, answers: Mapping[str, int]) -> ScoreResult:
    """Sum points for correctly answered questions against the quiz maximum.

    Unanswered questions count as incorrect. Entries for question ids that are
    not part of the quiz are ignored.
    """
    earned = 0
    maximum = 0
    for question in quiz.questions:
        maximum += question.points
        if answers.get(question.id) == question.correct_option_index:
            earned += question.points
    return ScoreResult(earned_points=earned, max_points=maximum)


def percentage(result: ScoreResult) -> int:
    """Whole-number percentage for display; a zero-point quiz reports 0."""
    if result.max_points <= 0:
        return 0
    # Half-up rounding in integer arithmetic, so 12.5% displays as 13%.
    return (result.earned_points * 200 + result.max_points) // (2 * result.max_points)


def is_celebration(result: ScoreResult) -> bool:
    """True when the attempt scored above the celebration threshold."""
    if result.max_points <= 0:
        return False
    return result.earned_points > result.max_points * CELEBRATION_THRESHOLD
