"""Qt UI components for the learner application."""

from .dialog_helpers import (
    confirm_leave_quiz,
    show_error,
    show_info,
    show_warning,
)
from .question_renderer import render_question_document
from .learner_main_window import LearnerMainWindow

__all__ = [
    "LearnerMainWindow",
    "confirm_leave_quiz",
    "show_error",
    "show_info",
    "show_warning",
    "render_question_document",
]
