from __future__ import annotations

from pathlib import Path

from quiz_quest.constants.quiz_constants import DEFAULT_QUIZ_LIBRARY_PATH, QUIZ_LIBRARY_ENV_VAR
from quiz_quest.utils.library_path import resolve_library_path


def test_defaults_to_bundled_library():
    assert resolve_library_path({}) == DEFAULT_QUIZ_LIBRARY_PATH
    assert resolve_library_path({QUIZ_LIBRARY_ENV_VAR: "  "}) == DEFAULT_QUIZ_LIBRARY_PATH


def test_environment_overrides_library(tmp_path: Path):
    assert resolve_library_path({QUIZ_LIBRARY_ENV_VAR: str(tmp_path)}) == tmp_path
