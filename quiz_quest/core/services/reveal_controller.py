"""Hint and explanation disclosure state for the current question."""

from __future__ import annotations

from quiz_quest.core.models import RevealState


class RevealController:
    """Tracks per-question reveal flags and the session-wide hint counter."""

    def __init__(self) -> None:
        self._hint_shown: bool = False
        self._explanation_shown: bool = False
        self._hints_used: int = 0

    @property
    def state(self) -> RevealState:
        return RevealState(hint_shown=self._hint_shown, explanation_shown=self._explanation_shown)

    @property
    def hints_used(self) -> int:
        return self._hints_used

    def show_hint(self) -> bool:
        """Reveal the hint. Returns True only when this counted as a new reveal."""
        if self._hint_shown:
            return False
        self._hint_shown = True
        self._hints_used += 1
        return True

    def hide_hint(self) -> None:
        self._hint_shown = False

    def show_explanation(self) -> None:
        self._explanation_shown = True

    def hide_explanation(self) -> None:
        self._explanation_shown = False

    def reset_for_navigation(self) -> None:
        """Clear both flags; the hint counter is never reset mid-session."""
        self._hint_shown = False
        self._explanation_shown = False
