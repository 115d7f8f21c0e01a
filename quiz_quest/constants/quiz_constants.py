"""Quiz-related constants shared across UI and core layers."""

from pathlib import Path

CLOCK_TICK_SECONDS: float = 1.0
LOW_TIME_WARNING_SECONDS: int = 60
DEFAULT_QUESTION_POINTS: int = 10

# Scores strictly above this fraction of the maximum earn a celebration.
CELEBRATION_THRESHOLD: float = 0.8

# (minimum percentage, share of the quiz XP reward) checked top-down.
XP_REWARD_TIERS: tuple[tuple[int, float], ...] = (
    (90, 1.0),
    (70, 0.8),
    (50, 0.5),
)
XP_PER_LEVEL: int = 1000

QUIZ_LIBRARY_ENV_VAR: str = "QUIZ_QUEST_LIBRARY"
DEFAULT_QUIZ_LIBRARY_PATH: Path = Path(__file__).resolve().parent.parent / "data" / "quizzes"
QUIZ_FILE_PATTERN: str = "*.txt"
