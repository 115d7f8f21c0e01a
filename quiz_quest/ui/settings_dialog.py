"""Settings dialog for configuring QuizQuest preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QSpinBox,
    QPushButton,
    QGroupBox,
)

from quiz_quest.constants.quiz_constants import LOW_TIME_WARNING_SECONDS


class SettingsDialog(QDialog):
    """Dialog for configuring application settings."""

    def __init__(
        self,
        parent=None,
        ui_font_size: int = 10,
        game_font_size: int = 14,
        low_time_warning_seconds: int = LOW_TIME_WARNING_SECONDS,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(400)

        self._ui_font_size = ui_font_size
        self._game_font_size = game_font_size
        self._low_time_warning_seconds = max(0, min(600, low_time_warning_seconds))

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        font_group = QGroupBox("Font Sizes")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)

        ui_font_row = QHBoxLayout()
        ui_font_label = QLabel("UI Font Size (buttons, menus):")
        self.ui_font_spinbox = QSpinBox()
        self.ui_font_spinbox.setRange(8, 24)
        self.ui_font_spinbox.setValue(self._ui_font_size)
        self.ui_font_spinbox.setSuffix(" pt")
        ui_font_row.addWidget(ui_font_label)
        ui_font_row.addStretch()
        ui_font_row.addWidget(self.ui_font_spinbox)
        font_layout.addLayout(ui_font_row)

        game_font_row = QHBoxLayout()
        game_font_label = QLabel("Quiz Font Size (questions, options):")
        self.game_font_spinbox = QSpinBox()
        self.game_font_spinbox.setRange(10, 32)
        self.game_font_spinbox.setValue(self._game_font_size)
        self.game_font_spinbox.setSuffix(" pt")
        game_font_row.addWidget(game_font_label)
        game_font_row.addStretch()
        game_font_row.addWidget(self.game_font_spinbox)
        font_layout.addLayout(game_font_row)

        layout.addWidget(font_group)

        timer_group = QGroupBox("Timer")
        timer_layout = QVBoxLayout()
        timer_group.setLayout(timer_layout)

        warning_row = QHBoxLayout()
        warning_label = QLabel("Highlight the countdown below:")
        warning_label.setToolTip("The timer turns red once fewer than this many seconds remain.")
        self.warning_spinbox = QSpinBox()
        self.warning_spinbox.setRange(0, 600)
        self.warning_spinbox.setSingleStep(10)
        self.warning_spinbox.setValue(self._low_time_warning_seconds)
        self.warning_spinbox.setSuffix(" s")
        warning_row.addWidget(warning_label)
        warning_row.addStretch()
        warning_row.addWidget(self.warning_spinbox)
        timer_layout.addLayout(warning_row)

        layout.addWidget(timer_group)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def get_ui_font_size(self) -> int:
        """Get the selected UI font size."""
        return self.ui_font_spinbox.value()

    def get_game_font_size(self) -> int:
        """Get the selected quiz font size."""
        return self.game_font_spinbox.value()

    def get_low_time_warning_seconds(self) -> int:
        """Get the countdown threshold below which the timer is highlighted."""
        return self.warning_spinbox.value()
