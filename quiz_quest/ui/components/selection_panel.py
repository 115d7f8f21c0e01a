"""Component listing the quiz library and the learner's XP progress."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_quest.constants.ui_constants import (
    SELECTION_DESCRIPTION,
    SELECTION_EMPTY_STATE,
    SELECTION_PROGRESS_TEMPLATE,
    SELECTION_START_BUTTON,
)
from quiz_quest.core.models import Quiz
from quiz_quest.core.quiz_manager import QuizManager
from quiz_quest.styling.styles import Styles


def _describe_quiz(quiz: Quiz) -> str:
    details = [f"{quiz.question_count} questions", quiz.difficulty.value.title()]
    if quiz.time_limit_seconds:
        details.append(f"{quiz.time_limit_seconds // 60} min")
    if quiz.xp_reward:
        details.append(f"{quiz.xp_reward} XP")
    return f"{quiz.title}  ({' · '.join(details)})"


class SelectionPanel(QWidget):
    """UI component for choosing which quiz to start."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_start_quiz: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_start_quiz = on_start_quiz
        self._font_size: int = 14

        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.description_label = QLabel(SELECTION_DESCRIPTION, self)
        self.description_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.description_label)
        header_row.addStretch()

        self.progress_label = QLabel("", self)
        header_row.addWidget(self.progress_label)
        layout.addLayout(header_row)

        self.quiz_list = QListWidget(self)
        self.quiz_list.itemDoubleClicked.connect(self._handle_item_activated)
        self.quiz_list.currentRowChanged.connect(self._update_start_button)
        layout.addWidget(self.quiz_list, stretch=1)

        self.empty_label = QLabel(SELECTION_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setVisible(False)
        layout.addWidget(self.empty_label)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.start_button = QPushButton(SELECTION_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start)
        self.start_button.setEnabled(False)
        button_row.addWidget(self.start_button)
        layout.addLayout(button_row)

    def refresh(self) -> None:
        """Rebuild the quiz list and the XP summary."""
        selected_id = self.selected_quiz_id()
        self.quiz_list.clear()
        for quiz in self.quiz_manager.get_quizzes():
            item = QListWidgetItem(_describe_quiz(quiz))
            item.setData(Qt.UserRole, quiz.id)
            if quiz.description:
                item.setToolTip(quiz.description)
            self.quiz_list.addItem(item)
            if quiz.id == selected_id:
                self.quiz_list.setCurrentItem(item)

        has_quizzes = self.quiz_manager.has_quizzes()
        self.quiz_list.setVisible(has_quizzes)
        self.empty_label.setVisible(not has_quizzes)
        if has_quizzes and self.quiz_list.currentRow() < 0:
            self.quiz_list.setCurrentRow(0)
        self._update_start_button()
        self.refresh_progress()

    def refresh_progress(self) -> None:
        summary = self.quiz_manager.get_reward_summary()
        self.progress_label.setText(
            SELECTION_PROGRESS_TEMPLATE.format(level=summary.level, xp=summary.total_xp)
        )

    def selected_quiz_id(self) -> str | None:
        item = self.quiz_list.currentItem()
        if item is None:
            return None
        return item.data(Qt.UserRole)

    def apply_font_size(self, font_size: int) -> None:
        self._font_size = font_size
        self.quiz_list.setStyleSheet(f"font-size: {font_size}pt;")
        self.progress_label.setStyleSheet(Styles.get_xp_badge_style(font_size))

    def _update_start_button(self, *_args) -> None:
        self.start_button.setEnabled(self.selected_quiz_id() is not None)

    def _handle_item_activated(self, item: QListWidgetItem) -> None:
        self.on_start_quiz(item.data(Qt.UserRole))

    def _handle_start(self) -> None:
        quiz_id = self.selected_quiz_id()
        if quiz_id is not None:
            self.on_start_quiz(quiz_id)
