"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QListWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
            }}
            QProgressBar {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_option_button_style(
        font_size: int,
        selected: bool = False,
        correct: bool = False,
        wrong: bool = False,
        theme: Theme = Theme.LIGHT,
    ) -> str:
        background = ColorPalette.BUTTON_SECONDARY_BG.get(theme)
        if correct:
            background = ColorPalette.OPTION_CORRECT.get(theme)
        elif wrong:
            background = ColorPalette.OPTION_WRONG.get(theme)
        elif selected:
            background = ColorPalette.OPTION_SELECTED.get(theme)
        return (
            f"QPushButton {{ font-size: {font_size}pt; text-align: left; padding: 10px 14px; "
            f"background-color: {background}; }}"
        )

    @staticmethod
    def get_timer_style(font_size: int, low_time: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.TIMER_LOW.get(theme) if low_time else ColorPalette.TIMER_NORMAL.get(theme)
        return f"font-size: {font_size}pt; font-weight: bold; color: {color};"

    @staticmethod
    def get_xp_badge_style(font_size: int, theme: Theme = Theme.LIGHT) -> str:
        return f"font-size: {font_size}pt; font-weight: bold; color: {ColorPalette.XP_BADGE.get(theme)};"
