"""Component for answering the questions of an active attempt."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_quest.constants.quiz_constants import LOW_TIME_WARNING_SECONDS
from quiz_quest.constants.ui_constants import (
    QUIZ_BACK_BUTTON,
    QUIZ_FINISH_BUTTON,
    QUIZ_HIDE_EXPLANATION,
    QUIZ_HIDE_HINT_TEMPLATE,
    QUIZ_NEXT_BUTTON,
    QUIZ_POSITION_TEMPLATE,
    QUIZ_PREV_BUTTON,
    QUIZ_SHOW_EXPLANATION,
    QUIZ_SHOW_HINT_TEMPLATE,
)
from quiz_quest.core.models import OperationResult, SessionPhase, SessionSnapshot
from quiz_quest.core.quiz_manager import QuizManager
from quiz_quest.styling.styles import Styles
from quiz_quest.ui.question_renderer import render_question_document


def format_remaining(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class QuizPanel(QWidget):
    """UI component showing one question at a time with navigation."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_leave: Callable[[], None],
        on_rejected: Callable[[OperationResult], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_leave = on_leave
        self.on_rejected = on_rejected

        self._game_font_size: int = 14
        self._low_time_warning_seconds: int = LOW_TIME_WARNING_SECONDS
        self._rendered_key: tuple | None = None
        self.option_buttons: list[QPushButton] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Header: position, timer and back button
        header_row = QHBoxLayout()
        self.position_label = QLabel("", self)
        self.position_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.position_label)
        header_row.addStretch()

        self.timer_label = QLabel("", self)
        self.timer_label.setVisible(False)
        header_row.addWidget(self.timer_label)

        self.back_button = QPushButton(QUIZ_BACK_BUTTON, self)
        self.back_button.clicked.connect(self.on_leave)
        header_row.addWidget(self.back_button)
        layout.addLayout(header_row)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setTextVisible(False)
        layout.addWidget(self.progress_bar)

        self.question_view = QWebEngineView(self)
        layout.addWidget(self.question_view, stretch=1)

        self.options_layout = QVBoxLayout()
        layout.addLayout(self.options_layout)

        # Reveal controls
        reveal_row = QHBoxLayout()
        self.hint_button = QPushButton(QUIZ_SHOW_HINT_TEMPLATE.format(count=0), self)
        self.hint_button.clicked.connect(self._handle_toggle_hint)
        reveal_row.addWidget(self.hint_button)

        self.explanation_button = QPushButton(QUIZ_SHOW_EXPLANATION, self)
        self.explanation_button.clicked.connect(self._handle_toggle_explanation)
        reveal_row.addWidget(self.explanation_button)
        reveal_row.addStretch()
        layout.addLayout(reveal_row)

        # Navigation
        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(QUIZ_PREV_BUTTON, self)
        self.prev_button.clicked.connect(lambda: self._apply(self.quiz_manager.previous_question()))
        nav_row.addWidget(self.prev_button)
        nav_row.addStretch()

        self.finish_button = QPushButton(QUIZ_FINISH_BUTTON, self)
        self.finish_button.clicked.connect(lambda: self._apply(self.quiz_manager.finish_quiz()))
        nav_row.addWidget(self.finish_button)

        self.next_button = QPushButton(QUIZ_NEXT_BUTTON, self)
        self.next_button.clicked.connect(lambda: self._apply(self.quiz_manager.next_question()))
        nav_row.addWidget(self.next_button)
        layout.addLayout(nav_row)

    def set_game_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        self._rendered_key = None

    def set_low_time_warning(self, seconds: int) -> None:
        self._low_time_warning_seconds = seconds

    def reset_state(self) -> None:
        self._rendered_key = None
        self._rebuild_option_buttons(0)

    def update_from_snapshot(self, snapshot: SessionSnapshot) -> None:
        """Synchronise every widget with the given session state."""
        if snapshot.phase is not SessionPhase.ACTIVE or snapshot.current_question is None:
            return
        question = snapshot.current_question

        self.position_label.setText(
            QUIZ_POSITION_TEMPLATE.format(number=snapshot.current_index + 1, total=snapshot.question_count)
        )
        self.progress_bar.setRange(0, snapshot.question_count)
        self.progress_bar.setValue(snapshot.answered_count)
        self._update_timer(snapshot.remaining_seconds)

        # Re-render only when the visible content changes; reloading the web
        # view on every poll would restart MathJax.
        render_key = (
            question.id,
            snapshot.reveal.hint_shown,
            snapshot.reveal.explanation_shown,
            self._game_font_size,
        )
        if render_key != self._rendered_key:
            self.question_view.setHtml(render_question_document(snapshot, self._game_font_size))
            self._rendered_key = render_key

        if len(self.option_buttons) != len(question.options):
            self._rebuild_option_buttons(len(question.options))
        for index, (button, text) in enumerate(zip(self.option_buttons, question.options)):
            button.setText(f"{chr(ord('A') + index)}: {text}")
            revealed = snapshot.reveal.explanation_shown
            button.setStyleSheet(
                Styles.get_option_button_style(
                    self._game_font_size,
                    selected=index == snapshot.selected_option_index,
                    correct=revealed and index == question.correct_option_index,
                    wrong=revealed
                    and index == snapshot.selected_option_index
                    and index != question.correct_option_index,
                )
            )

        hint_template = QUIZ_HIDE_HINT_TEMPLATE if snapshot.reveal.hint_shown else QUIZ_SHOW_HINT_TEMPLATE
        self.hint_button.setText(hint_template.format(count=snapshot.hints_used))
        self.hint_button.setEnabled(question.hint_text is not None)
        self.explanation_button.setText(
            QUIZ_HIDE_EXPLANATION if snapshot.reveal.explanation_shown else QUIZ_SHOW_EXPLANATION
        )
        self.explanation_button.setEnabled(
            snapshot.can_reveal_explanation and question.explanation is not None
        )

        self.prev_button.setEnabled(snapshot.current_index > 0)
        self.next_button.setText(QUIZ_FINISH_BUTTON if snapshot.is_last_question else QUIZ_NEXT_BUTTON)
        self.finish_button.setVisible(not snapshot.is_last_question)

    def _update_timer(self, remaining_seconds: int | None) -> None:
        if remaining_seconds is None:
            self.timer_label.setVisible(False)
            return
        self.timer_label.setVisible(True)
        self.timer_label.setText(f"⏱ {format_remaining(remaining_seconds)}")
        self.timer_label.setStyleSheet(
            Styles.get_timer_style(
                self._game_font_size,
                low_time=remaining_seconds <= self._low_time_warning_seconds,
            )
        )

    def _rebuild_option_buttons(self, count: int) -> None:
        for button in self.option_buttons:
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self.option_buttons = []
        for index in range(count):
            button = QPushButton("", self)
            button.setCursor(Qt.PointingHandCursor)
            button.clicked.connect(lambda _checked=False, idx=index: self._handle_select(idx))
            self.options_layout.addWidget(button)
            self.option_buttons.append(button)

    def _handle_select(self, option_index: int) -> None:
        self._apply(self.quiz_manager.answer_current_question(option_index))

    def _handle_toggle_hint(self) -> None:
        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is None:
            return
        if snapshot.reveal.hint_shown:
            self._apply(self.quiz_manager.hide_hint())
        else:
            self._apply(self.quiz_manager.show_hint())

    def _handle_toggle_explanation(self) -> None:
        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is None:
            return
        if snapshot.reveal.explanation_shown:
            self._apply(self.quiz_manager.hide_explanation())
        else:
            self._apply(self.quiz_manager.show_explanation())

    def _apply(self, result: OperationResult) -> None:
        if not result:
            self.on_rejected(result)
            return
        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is not None:
            self.update_from_snapshot(snapshot)
