from __future__ import annotations

from pathlib import Path

import pytest

from quiz_quest.constants.quiz_constants import DEFAULT_QUIZ_LIBRARY_PATH
from quiz_quest.core.models import Difficulty
from quiz_quest.core.quiz_catalog import QuizCatalog
from quiz_quest.core.quiz_importer import (
    QuizImportError,
    load_quiz_from_file,
    load_quizzes_from_directory,
    parse_quiz_text,
)

SAMPLE = """\
TITLE: Arithmetic
DESCRIPTION: Warm-up sums
DIFFICULTY: advanced
TIMELIMIT: 90
XP: 40

# comments are ignored
Q: What is $2 + 2$?
   Show your working.
A: 3
B: 4
CORRECT: B
POINTS: 5
HINT: Count on your fingers.
EXPLANATION: Two plus two
  is four.

---
ID: last
Q: Pick the odd one.
A: 2
B: 4
C: 7
CORRECT: c
"""


def test_parse_full_quiz():
    quiz = parse_quiz_text(SAMPLE, quiz_id="arith")
    assert quiz.id == "arith"
    assert quiz.title == "Arithmetic"
    assert quiz.description == "Warm-up sums"
    assert quiz.difficulty is Difficulty.ADVANCED
    assert quiz.time_limit_seconds == 90
    assert quiz.xp_reward == 40

    first, second = quiz.questions
    assert first.id == "q1"
    assert first.prompt == "What is $2 + 2$?\nShow your working."
    assert first.options == ("3", "4")
    assert first.correct_option_index == 1
    assert first.points == 5
    assert first.hint == "Count on your fingers."
    assert first.explanation == "Two plus two\nis four."

    assert second.id == "last"
    assert second.correct_option_index == 2
    assert second.points == 10
    assert second.order == 2
    assert second.explanation is None


def test_header_is_optional():
    quiz = parse_quiz_text("Q: Yes?\nA: yes\nB: no\nCORRECT: A\n", quiz_id="yes_or_no")
    assert quiz.title == "Yes Or No"
    assert quiz.time_limit_seconds is None
    assert quiz.xp_reward == 0
    assert quiz.difficulty is Difficulty.BEGINNER


@pytest.mark.parametrize(
    "text",
    [
        "",
        "TITLE: Only a header\n",
        "Q: Missing correct\nA: a\nB: b\n",
        "Q: One option\nA: a\nCORRECT: A\n",
        "Q: Gap\nA: a\nC: c\nCORRECT: A\n",
        "Q: Bad letter\nA: a\nB: b\nCORRECT: D\n",
        "Q: Bad points\nA: a\nB: b\nCORRECT: A\nPOINTS: zero\n",
        "TIMELIMIT: -5\n\nQ: x\nA: a\nB: b\nCORRECT: A\n",
        "DIFFICULTY: impossible\n\nQ: x\nA: a\nB: b\nCORRECT: A\n",
        "COLOR: blue\n\nQ: x\nA: a\nB: b\nCORRECT: A\n",
        "Q: stray\nA: a\nB: b\nCORRECT: A\nstray text\n",
    ],
)
def test_malformed_text_raises(text):
    with pytest.raises(QuizImportError):
        parse_quiz_text(text, quiz_id="broken")


def test_file_errors_name_the_file(tmp_path: Path):
    path = tmp_path / "broken.txt"
    path.write_text("Q: x\nA: a\n", encoding="utf-8")
    with pytest.raises(QuizImportError, match="broken.txt"):
        load_quiz_from_file(path)


def test_directory_import_is_sorted_by_file_name(tmp_path: Path):
    (tmp_path / "b_quiz.txt").write_text("Q: b\nA: 1\nB: 2\nCORRECT: A\n", encoding="utf-8")
    (tmp_path / "a_quiz.txt").write_text("Q: a\nA: 1\nB: 2\nCORRECT: B\n", encoding="utf-8")
    (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")
    quizzes = load_quizzes_from_directory(tmp_path)
    assert [quiz.id for quiz in quizzes] == ["a_quiz", "b_quiz"]


def test_missing_directory_raises(tmp_path: Path):
    with pytest.raises(QuizImportError):
        load_quizzes_from_directory(tmp_path / "missing")


def test_bundled_library_loads_into_catalog():
    quizzes = load_quizzes_from_directory(DEFAULT_QUIZ_LIBRARY_PATH)
    catalog = QuizCatalog()
    catalog.load_quizzes(quizzes)
    javascript = catalog.get_quiz("javascript_basics")
    assert javascript.time_limit_seconds == 600
    assert javascript.total_points == 40
    assert javascript.questions[1].hint is not None
    assert catalog.get_quiz("python_fundamentals").time_limit_seconds is None
