"""Resolve where the quiz library lives."""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path

from quiz_quest.constants.quiz_constants import DEFAULT_QUIZ_LIBRARY_PATH, QUIZ_LIBRARY_ENV_VAR


def resolve_library_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the library directory from the environment, else the bundled quizzes."""
    environ = os.environ if environ is None else environ
    configured = environ.get(QUIZ_LIBRARY_ENV_VAR, "").strip()
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_QUIZ_LIBRARY_PATH
