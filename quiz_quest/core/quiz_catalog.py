"""Service for managing the collection of playable quizzes."""

from __future__ import annotations

from dataclasses import replace

from quiz_quest.core.models import Quiz, QuizQuestion


class QuizCatalog:
    """Validates quizzes and keeps them in load order, keyed by id."""

    def __init__(self) -> None:
        self._quizzes: dict[str, Quiz] = {}

    def load_quizzes(self, quizzes: list[Quiz]) -> None:
        """Replace the current catalog with a new list of quizzes."""
        if not quizzes:
            raise ValueError("Catalog must contain at least one quiz.")

        prepared: dict[str, Quiz] = {}
        for quiz in quizzes:
            ready = self._prepare_quiz(quiz)
            if ready.id in prepared:
                raise ValueError(f"Duplicate quiz id '{ready.id}'.")
            prepared[ready.id] = ready
        self._quizzes = prepared

    def add_quiz(self, quiz: Quiz) -> Quiz:
        prepared = self._prepare_quiz(quiz)
        if prepared.id in self._quizzes:
            raise ValueError(f"Duplicate quiz id '{prepared.id}'.")
        self._quizzes[prepared.id] = prepared
        return prepared

    def get_quizzes(self) -> list[Quiz]:
        """Return all loaded quizzes in load order."""
        return list(self._quizzes.values())

    def get_quiz(self, quiz_id: str) -> Quiz:
        quiz = self._quizzes.get(quiz_id)
        if quiz is None:
            raise KeyError(f"Unknown quiz '{quiz_id}'")
        return quiz

    def has_quiz(self, quiz_id: str) -> bool:
        return quiz_id in self._quizzes

    def has_quizzes(self) -> bool:
        return bool(self._quizzes)

    def _prepare_quiz(self, quiz: Quiz) -> Quiz:
        """Validate and normalize a quiz before storage."""
        quiz_id = quiz.id.strip()
        if not quiz_id:
            raise ValueError("Quiz id must not be empty.")
        title = quiz.title.strip()
        if not title:
            raise ValueError("Quiz title must not be empty.")
        if not quiz.questions:
            raise ValueError(f"Quiz '{quiz_id}' must contain at least one question.")
        if quiz.xp_reward < 0:
            raise ValueError("XP reward must not be negative.")

        questions = [self._prepare_question(question) for question in quiz.questions]
        seen: set[str] = set()
        for question in questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question id '{question.id}' in quiz '{quiz_id}'.")
            seen.add(question.id)

        # sorted() is stable, so equal order values keep their array position.
        ordered = tuple(sorted(questions, key=lambda q: q.order))

        return replace(
            quiz,
            id=quiz_id,
            title=title,
            questions=ordered,
            time_limit_seconds=self._normalize_time_limit(quiz.time_limit_seconds),
        )

    def _prepare_question(self, question: QuizQuestion) -> QuizQuestion:
        question_id = question.id.strip()
        if not question_id:
            raise ValueError("Question id must not be empty.")

        prompt = question.prompt.strip()
        if not prompt:
            raise ValueError(f"Question '{question_id}' text must not be empty.")

        options = self._validate_options(question.options)
        correct = question.correct_option_index
        if isinstance(correct, bool) or not isinstance(correct, int) or not 0 <= correct < len(options):
            raise ValueError(
                f"Correct option index for '{question_id}' must be between 0 and {len(options) - 1}."
            )
        if isinstance(question.points, bool) or not isinstance(question.points, int) or question.points < 1:
            raise ValueError(f"Question '{question_id}' must be worth at least one point.")

        return replace(
            question,
            id=question_id,
            prompt=prompt,
            options=options,
            explanation=(question.explanation or "").strip() or None,
            hint=(question.hint or "").strip() or None,
        )

    @staticmethod
    def _validate_options(options: tuple[str, ...] | list[str]) -> tuple[str, ...]:
        if len(options) < 2:
            raise ValueError("Each question must have at least two options.")
        cleaned = tuple(option.strip() for option in options)
        if any(not option for option in cleaned):
            raise ValueError("Option text cannot be empty.")
        return cleaned

    @staticmethod
    def _normalize_time_limit(time_limit_seconds: int | None) -> int | None:
        if time_limit_seconds is None:
            return None
        if isinstance(time_limit_seconds, bool) or not isinstance(time_limit_seconds, int):
            raise ValueError("Time limit must be provided as an integer number of seconds.")
        if time_limit_seconds <= 0:
            raise ValueError("Time limit must be a positive integer.")
        return time_limit_seconds
