"""Utilities for importing quizzes from a human-friendly text file.

File format (blocks separated by blank lines or '---'):

    TITLE: Quiz title                (optional header block, must come first)
    DESCRIPTION: One-line summary    (optional)
    DIFFICULTY: BEGINNER             (optional, default BEGINNER)
    TIMELIMIT: seconds               (optional, omit for an untimed quiz)
    XP: reward points                (optional, default 0)

    Q: Question text (supports markdown + LaTeX). Additional lines until the
       next marker are treated as part of the question.
    A: First option text
    B: Second option text
    ...                              (at least two options, contiguous from A)
    CORRECT: letter                  (required)
    POINTS: integer                  (optional, default 10)
    EXPLANATION: text                (optional, continuation lines allowed)
    HINT: text                       (optional, continuation lines allowed)
    ID: identifier                   (optional, default q1, q2, ...)

Example:

    TITLE: JavaScript Basics
    TIMELIMIT: 600
    XP: 100

    Q: Which method adds an element to the end of an array?
    A: push()
    B: pop()
    CORRECT: A
    EXPLANATION: push() appends one or more elements.

The quiz id is the file name without its extension. Catalog-level checks
(duplicate ids, option count, point values) are repeated by ``QuizCatalog``
when the quiz is loaded.
"""

from __future__ import annotations

from pathlib import Path
import string

from quiz_quest.constants.quiz_constants import DEFAULT_QUESTION_POINTS, QUIZ_FILE_PATTERN
from quiz_quest.core.models import Difficulty, Quiz, QuizQuestion


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


_OPTION_ORDER = list(string.ascii_uppercase)
_HEADER_KEYS = ("TITLE", "DESCRIPTION", "DIFFICULTY", "TIMELIMIT", "XP")
_TEXT_SECTIONS = ("Q", "EXPLANATION", "HINT")


def load_quiz_from_file(file_path: Path) -> Quiz:
    text = file_path.read_text(encoding="utf-8")
    quiz_id = file_path.name.split(".", 1)[0]
    try:
        return parse_quiz_text(text, quiz_id=quiz_id)
    except QuizImportError as exc:
        raise QuizImportError(f"{file_path.name}: {exc}") from exc


def load_quizzes_from_directory(directory: Path) -> list[Quiz]:
    """Import every quiz file in a directory, sorted by file name."""
    if not directory.is_dir():
        raise QuizImportError(f"Quiz library '{directory}' is not a directory.")
    return [load_quiz_from_file(path) for path in sorted(directory.glob(QUIZ_FILE_PATTERN))]


def parse_quiz_text(text: str, quiz_id: str) -> Quiz:
    blocks = _split_blocks(text)
    if not blocks:
        raise QuizImportError("Quiz file did not contain any questions.")

    header: dict[str, str] = {}
    if not _is_question_block(blocks[0]):
        header = _parse_header(blocks[0])
        blocks = blocks[1:]

    questions = [_parse_block(block, position) for position, block in enumerate(blocks, start=1)]
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")

    difficulty_text = header.get("DIFFICULTY", Difficulty.BEGINNER.value).upper()
    try:
        difficulty = Difficulty(difficulty_text)
    except ValueError as exc:
        raise QuizImportError(f"Unknown DIFFICULTY '{difficulty_text}'.") from exc

    time_limit = None
    if "TIMELIMIT" in header:
        time_limit = _parse_positive_int(header["TIMELIMIT"], "TIMELIMIT")
    xp_reward = 0
    if "XP" in header:
        xp_reward = _parse_int(header["XP"], "XP")
        if xp_reward < 0:
            raise QuizImportError("XP must not be negative.")

    return Quiz(
        id=quiz_id,
        title=header.get("TITLE") or quiz_id.replace("_", " ").title(),
        questions=tuple(questions),
        time_limit_seconds=time_limit,
        xp_reward=xp_reward,
        description=header.get("DESCRIPTION") or None,
        difficulty=difficulty,
    )


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped.startswith("#"):
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            # Blank line encountered after content - finalize current block
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return [block for block in blocks if block]


def _is_question_block(block: str) -> bool:
    return any(line.strip().upper().startswith("Q:") for line in block.splitlines())


def _parse_header(block: str) -> dict[str, str]:
    header: dict[str, str] = {}
    for raw_line in block.splitlines():
        line = raw_line.strip()
        key, separator, value = line.partition(":")
        key = key.strip().upper()
        if not separator or key not in _HEADER_KEYS:
            raise QuizImportError(f"Encountered text outside of a known header field: '{line}'.")
        header[key] = value.strip()
    return header


def _parse_block(block: str, position: int) -> QuizQuestion:
    sections: dict[str, list[str]] = {}
    options: dict[str, str] = {}
    correct_letter: str | None = None
    points = DEFAULT_QUESTION_POINTS
    question_id = f"q{position}"
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        key, separator, value = line.partition(":")
        key = key.strip().upper()

        if separator and key in _TEXT_SECTIONS:
            sections[key] = [value.strip()]
            current_section = key
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = value.strip().upper()
            current_section = None
            continue

        if upper.startswith("POINTS:"):
            points = _parse_positive_int(value, "POINTS")
            current_section = None
            continue

        if upper.startswith("ID:"):
            question_id = value.strip()
            if not question_id:
                raise QuizImportError("ID must not be empty.")
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_ORDER and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section in _TEXT_SECTIONS:
            sections[current_section].append(line)
        elif current_section in _OPTION_ORDER:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_text = "\n".join(sections.get("Q", [])).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    letters = _OPTION_ORDER[: len(options)]
    if len(options) < 2 or sorted(options) != letters:
        raise QuizImportError("Each question must define at least two options, lettered from A without gaps.")
    option_list = tuple(options[letter].strip() for letter in letters)
    if any(not opt for opt in option_list):
        raise QuizImportError("Option text cannot be empty.")

    if correct_letter is None:
        raise QuizImportError(f"Question '{question_id}' is missing its CORRECT answer.")
    if correct_letter not in letters:
        raise QuizImportError(f"CORRECT must be one of {', '.join(letters)}.")

    return QuizQuestion(
        id=question_id,
        prompt=question_text,
        options=option_list,
        correct_option_index=letters.index(correct_letter),
        points=points,
        order=position,
        explanation="\n".join(sections.get("EXPLANATION", [])).strip() or None,
        hint="\n".join(sections.get("HINT", [])).strip() or None,
    )


def _parse_int(raw_value: str, field_name: str) -> int:
    raw_value = raw_value.strip()
    if not raw_value:
        raise QuizImportError(f"{field_name} must include an integer value.")
    try:
        return int(raw_value)
    except ValueError as exc:  # pragma: no cover - conversion error details unnecessary
        raise QuizImportError(f"{field_name} must be an integer.") from exc


def _parse_positive_int(raw_value: str, field_name: str) -> int:
    parsed_value = _parse_int(raw_value, field_name)
    if parsed_value <= 0:
        raise QuizImportError(f"{field_name} must be a positive integer.")
    return parsed_value
