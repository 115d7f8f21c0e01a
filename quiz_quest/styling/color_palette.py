"""Color palette for QuizQuest supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#111827", dark="#F5F5F5")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_SECONDARY = ThemeColors(light="#F5F5F5", dark="#2D2D2D")

    BORDER_PRIMARY = ThemeColors(light="#D1D1D1", dark="#555555")

    BUTTON_PRIMARY_BG = ThemeColors(light="#0078D4", dark="#4A9EFF")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")
    BUTTON_SECONDARY_BG = ThemeColors(light="#F5F5F5", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#E8E8E8", dark="#505050")

    # Answer feedback
    OPTION_SELECTED = ThemeColors(light="#DBEAFE", dark="#1E3A8A")
    OPTION_CORRECT = ThemeColors(light="#DCFCE7", dark="#14532D")
    OPTION_WRONG = ThemeColors(light="#FEE2E2", dark="#7F1D1D")

    # Countdown
    TIMER_NORMAL = ThemeColors(light="#0078D4", dark="#4A9EFF")
    TIMER_LOW = ThemeColors(light="#D13438", dark="#FF6B6B")
    XP_BADGE = ThemeColors(light="#107C10", dark="#6FCF6F")
