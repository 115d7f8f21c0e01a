"""Record of the option selected for each answered question."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from quiz_quest.core.models import Quiz


class AnswerLedger(Mapping[str, int]):
    """Maps question id to selected option index for one attempt.

    Entries are added or overwritten, never removed. Only questions that
    belong to the bound quiz and in-range option indices are accepted.
    """

    def __init__(self, quiz: Quiz) -> None:
        self._option_counts = {q.id: len(q.options) for q in quiz.questions}
        self._answers: dict[str, int] = {}

    def __getitem__(self, question_id: str) -> int:
        return self._answers[question_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def knows_question(self, question_id: str) -> bool:
        return question_id in self._option_counts

    def is_valid_option(self, question_id: str, option_index: int) -> bool:
        option_count = self._option_counts.get(question_id)
        if option_count is None:
            return False
        if isinstance(option_index, bool) or not isinstance(option_index, int):
            return False
        return 0 <= option_index < option_count

    def record(self, question_id: str, option_index: int) -> bool:
        """Upsert an answer. Returns True if it's a new answer, False if update."""
        if not self.knows_question(question_id):
            raise KeyError(f"Question '{question_id}' is not part of this quiz")
        if not self.is_valid_option(question_id, option_index):
            raise ValueError(f"Option {option_index!r} is out of range for '{question_id}'")
        is_new = question_id not in self._answers
        self._answers[question_id] = option_index
        return is_new

    def as_dict(self) -> dict[str, int]:
        return dict(self._answers)
