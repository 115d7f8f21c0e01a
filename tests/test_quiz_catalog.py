from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import make_quiz

from quiz_quest.core.models import QuizQuestion
from quiz_quest.core.quiz_catalog import QuizCatalog


def test_load_keeps_order_and_looks_up_by_id():
    catalog = QuizCatalog()
    catalog.load_quizzes([make_quiz(quiz_id="b"), make_quiz(quiz_id="a")])
    assert [quiz.id for quiz in catalog.get_quizzes()] == ["b", "a"]
    assert catalog.get_quiz("a").title == "Sample Quiz"


def test_unknown_quiz_raises_key_error():
    catalog = QuizCatalog()
    with pytest.raises(KeyError):
        catalog.get_quiz("missing")


def test_questions_are_sorted_by_order_stably():
    quiz = make_quiz()
    q1, q2, q3 = quiz.questions
    shuffled = replace(
        quiz,
        questions=(replace(q1, order=5), replace(q2, order=1), replace(q3, order=1)),
    )
    prepared = QuizCatalog().add_quiz(shuffled)
    assert [q.id for q in prepared.questions] == ["q2", "q3", "q1"]


def test_text_fields_are_trimmed():
    quiz = make_quiz()
    question = replace(quiz.questions[0], prompt="  Trim me  ", options=(" a ", "b"), correct_option_index=0, hint="   ")
    prepared = QuizCatalog().add_quiz(replace(quiz, title="  Spaced  ", questions=(question,)))
    assert prepared.title == "Spaced"
    assert prepared.questions[0].prompt == "Trim me"
    assert prepared.questions[0].options == ("a", "b")
    assert prepared.questions[0].hint is None


@pytest.mark.parametrize(
    "changes",
    [
        {"options": ("only",)},
        {"options": ("a", " ")},
        {"correct_option_index": 3},
        {"correct_option_index": -1},
        {"points": 0},
        {"prompt": "   "},
    ],
)
def test_invalid_questions_are_rejected(changes):
    quiz = make_quiz()
    broken = replace(quiz.questions[0], **changes)
    with pytest.raises(ValueError):
        QuizCatalog().add_quiz(replace(quiz, questions=(broken,) + quiz.questions[1:]))


def test_invalid_quizzes_are_rejected():
    quiz = make_quiz()
    catalog = QuizCatalog()
    with pytest.raises(ValueError):
        catalog.add_quiz(replace(quiz, questions=()))
    with pytest.raises(ValueError):
        catalog.add_quiz(replace(quiz, id=" "))
    with pytest.raises(ValueError):
        catalog.add_quiz(replace(quiz, xp_reward=-1))
    with pytest.raises(ValueError):
        catalog.add_quiz(replace(quiz, time_limit_seconds=0))
    duplicate = QuizQuestion(id="q1", prompt="Again?", options=("y", "n"), correct_option_index=0)
    with pytest.raises(ValueError):
        catalog.add_quiz(replace(quiz, questions=quiz.questions + (duplicate,)))


def test_duplicate_quiz_ids_are_rejected():
    catalog = QuizCatalog()
    with pytest.raises(ValueError):
        catalog.load_quizzes([make_quiz(), make_quiz()])
    catalog.add_quiz(make_quiz())
    with pytest.raises(ValueError):
        catalog.add_quiz(make_quiz())


def test_empty_load_is_rejected():
    with pytest.raises(ValueError):
        QuizCatalog().load_quizzes([])
