"""Domain models for the quiz attempt engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Difficulty(str, Enum):
    """Authoring difficulty label carried by a quiz."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    """Multiple-choice question with a single correct option."""

    id: str
    prompt: str
    options: tuple[str, ...]
    correct_option_index: int
    points: int = 10
    order: int = 0
    explanation: str | None = None
    hint: str | None = None

    @property
    def hint_text(self) -> str | None:
        # Without a dedicated hint the explanation doubles as the hint.
        return self.hint or self.explanation


@dataclass(frozen=True, slots=True)
class Quiz:
    """Fully resolved, read-only quiz handed to an attempt session."""

    id: str
    title: str
    questions: tuple[QuizQuestion, ...]
    time_limit_seconds: int | None = None
    xp_reward: int = 0
    description: str | None = None
    difficulty: Difficulty = Difficulty.BEGINNER

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def total_points(self) -> int:
        return sum(question.points for question in self.questions)

    def find_question(self, question_id: str) -> QuizQuestion | None:
        return next((q for q in self.questions if q.id == question_id), None)


class SessionPhase(str, Enum):
    """Coarse lifecycle state of an attempt."""

    NOT_STARTED = "NOT_STARTED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class FinishReason(str, Enum):
    """What caused an attempt to complete."""

    MANUAL = "MANUAL"
    LAST_QUESTION = "LAST_QUESTION"
    TIME_EXPIRED = "TIME_EXPIRED"


@dataclass(frozen=True, slots=True)
class RevealState:
    """Disclosure flags for the current question."""

    hint_shown: bool = False
    explanation_shown: bool = False


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Points earned against the maximum available for a quiz."""

    earned_points: int
    max_points: int


@dataclass(frozen=True, slots=True)
class CompletionEvent:
    """Emitted exactly once when an attempt completes."""

    quiz_id: str
    earned_points: int
    max_points: int
    time_spent_seconds: int
    hints_used: int
    xp_reward: int
    finish_reason: FinishReason


class RejectionKind(str, Enum):
    """Why an operation was refused."""

    INVALID_PHASE = "INVALID_PHASE"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    AT_BOUNDARY = "AT_BOUNDARY"


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a session operation. Rejections never mutate the session."""

    accepted: bool
    kind: RejectionKind | None = None
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(accepted=True)

    @classmethod
    def rejected(cls, kind: RejectionKind, reason: str) -> "OperationResult":
        return cls(accepted=False, kind=kind, reason=reason)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Immutable read model of an attempt for UI and API consumers."""

    quiz_id: str
    quiz_title: str
    phase: SessionPhase
    current_index: int
    question_count: int
    current_question: QuizQuestion | None
    selected_option_index: int | None
    reveal: RevealState
    hints_used: int
    remaining_seconds: int | None
    answered_count: int
    result: ScoreResult | None = None
    percentage: int | None = None
    finish_reason: FinishReason | None = None
    completion_notice: str | None = None

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.question_count - 1

    @property
    def can_reveal_explanation(self) -> bool:
        return self.phase is SessionPhase.ACTIVE and self.selected_option_index is not None
