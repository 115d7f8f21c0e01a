"""Component summarising a finished attempt."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from quiz_quest.constants.ui_constants import (
    RESULTS_BACK_BUTTON,
    RESULTS_CELEBRATION,
    RESULTS_RETAKE_BUTTON,
    RESULTS_TIME_EXPIRED,
)
from quiz_quest.core.models import FinishReason, SessionSnapshot
from quiz_quest.core.services import scorer
from quiz_quest.core.services.rewards import RewardGrant
from quiz_quest.styling.styles import Styles


class ResultsPanel(QWidget):
    """UI component displaying score, XP and follow-up actions."""

    def __init__(
        self,
        on_retake: Callable[[], None],
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_retake = on_retake
        self.on_back = on_back
        self._font_size: int = 14
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        self.title_label = QLabel("", self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.score_label)

        self.celebration_label = QLabel(RESULTS_CELEBRATION, self)
        self.celebration_label.setAlignment(Qt.AlignCenter)
        self.celebration_label.setVisible(False)
        layout.addWidget(self.celebration_label)

        self.details_label = QLabel("", self)
        self.details_label.setAlignment(Qt.AlignCenter)
        self.details_label.setWordWrap(True)
        layout.addWidget(self.details_label)

        self.reward_label = QLabel("", self)
        self.reward_label.setAlignment(Qt.AlignCenter)
        self.reward_label.setWordWrap(True)
        layout.addWidget(self.reward_label)

        layout.addStretch()

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.retake_button = QPushButton(RESULTS_RETAKE_BUTTON, self)
        self.retake_button.clicked.connect(self.on_retake)
        button_row.addWidget(self.retake_button)

        self.back_button = QPushButton(RESULTS_BACK_BUTTON, self)
        self.back_button.clicked.connect(self.on_back)
        button_row.addWidget(self.back_button)
        button_row.addStretch()
        layout.addLayout(button_row)

    def apply_font_size(self, font_size: int) -> None:
        self._font_size = font_size
        self.score_label.setStyleSheet(f"font-size: {font_size + 8}pt; font-weight: bold;")
        self.celebration_label.setStyleSheet(Styles.get_xp_badge_style(font_size))
        self.details_label.setStyleSheet(f"font-size: {font_size}pt;")
        self.reward_label.setStyleSheet(Styles.get_xp_badge_style(font_size))

    def show_results(self, snapshot: SessionSnapshot, grant: RewardGrant | None) -> None:
        result = snapshot.result
        if result is None:
            return
        self.title_label.setText(snapshot.quiz_title)
        self.score_label.setText(
            f"{result.earned_points} / {result.max_points} points ({snapshot.percentage}%)"
        )
        self.celebration_label.setVisible(scorer.is_celebration(result))

        details = [
            f"Answered {snapshot.answered_count} of {snapshot.question_count} questions.",
            f"Hints used: {snapshot.hints_used}.",
        ]
        if snapshot.finish_reason is FinishReason.TIME_EXPIRED:
            details.append(RESULTS_TIME_EXPIRED)
        self.details_label.setText("\n".join(details))

        messages = []
        if grant is not None:
            messages.append(grant.message)
        if snapshot.completion_notice:
            messages.append(snapshot.completion_notice)
        self.reward_label.setText("\n".join(messages))
        self.reward_label.setVisible(bool(messages))
