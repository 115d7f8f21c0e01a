"""Qt main window implementing the quiz selection, play and results modes."""

from __future__ import annotations

from enum import Enum, auto
import logging

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quiz_quest.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from quiz_quest.constants.quiz_constants import LOW_TIME_WARNING_SECONDS
from quiz_quest.constants.ui_constants import (
    NO_QUIZ_SELECTED_MESSAGE,
    SESSION_REFRESH_INTERVAL_MS,
    WINDOW_TITLE,
)
from quiz_quest.core.models import OperationResult, SessionPhase
from quiz_quest.core.quiz_manager import QuizManager
from quiz_quest.ui.dialog_helpers import confirm_leave_quiz, show_info, show_warning
from quiz_quest.ui.settings_dialog import SettingsDialog
from quiz_quest.ui.components.quiz_panel import QuizPanel
from quiz_quest.ui.components.results_panel import ResultsPanel
from quiz_quest.ui.components.selection_panel import SelectionPanel
from quiz_quest.styling.styles import Styles

logger = logging.getLogger(__name__)


class LearnerMode(Enum):
    """High-level UI mode for the learner window."""

    QUIZ_SELECTION = auto()
    QUIZ_ACTIVE = auto()
    QUIZ_RESULTS = auto()


class LearnerMainWindow(QMainWindow):
    """Main Qt window mirroring the shared quiz session.

    The window never keeps its own copy of the session: a timer polls the
    manager's snapshot, so attempts driven from the browser page show up here
    as well.
    """

    def __init__(self, quiz_manager: QuizManager, learner_url: str | None = None) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.quiz_manager = quiz_manager
        self.learner_url = learner_url

        self._mode = LearnerMode.QUIZ_SELECTION
        self._ui_font_size: int = 10
        self._game_font_size: int = 14
        self._low_time_warning_seconds: int = LOW_TIME_WARNING_SECONDS

        self._build_ui()
        self._configure_refresh_timer()
        self._apply_styles()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_top_row(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.selection_panel = SelectionPanel(
            self.quiz_manager,
            on_start_quiz=self._handle_start_quiz,
            parent=self,
        )
        self.quiz_panel = QuizPanel(
            self.quiz_manager,
            on_leave=self._handle_leave_quiz,
            on_rejected=self._handle_rejected,
            parent=self,
        )
        self.results_panel = ResultsPanel(
            on_retake=self._handle_retake,
            on_back=self._handle_back_to_selection,
            parent=self,
        )
        self.mode_stack.addWidget(self.selection_panel)
        self.mode_stack.addWidget(self.quiz_panel)
        self.mode_stack.addWidget(self.results_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(LearnerMode.QUIZ_SELECTION)

    def _build_top_row(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.url_label = QLabel(
            f"Browser access: {self.learner_url}" if self.learner_url else "",
            self,
        )
        button_row.addWidget(self.url_label)
        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        layout.addLayout(button_row)

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(SESSION_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _refresh_state(self) -> None:
        snapshot, grant = self.quiz_manager.get_snapshot_and_grant()
        if snapshot is None:
            if self._mode != LearnerMode.QUIZ_SELECTION:
                self._set_mode(LearnerMode.QUIZ_SELECTION)
            return

        if snapshot.phase is SessionPhase.ACTIVE:
            if self._mode != LearnerMode.QUIZ_ACTIVE:
                self.quiz_panel.reset_state()
                self._set_mode(LearnerMode.QUIZ_ACTIVE)
            self.quiz_panel.update_from_snapshot(snapshot)
        elif snapshot.phase is SessionPhase.COMPLETED and self._mode != LearnerMode.QUIZ_RESULTS:
            self.results_panel.show_results(snapshot, grant)
            self.selection_panel.refresh_progress()
            self._set_mode(LearnerMode.QUIZ_RESULTS)

    def _set_mode(self, mode: LearnerMode) -> None:
        self._mode = mode
        index_map = {
            LearnerMode.QUIZ_SELECTION: 0,
            LearnerMode.QUIZ_ACTIVE: 1,
            LearnerMode.QUIZ_RESULTS: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])
        if mode == LearnerMode.QUIZ_SELECTION:
            self.selection_panel.refresh()

    def _handle_start_quiz(self, quiz_id: str | None) -> None:
        if not quiz_id:
            show_warning(self, "No quiz", NO_QUIZ_SELECTED_MESSAGE)
            return

        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is not None and snapshot.phase is SessionPhase.COMPLETED:
            self.quiz_manager.clear_session()

        result = self.quiz_manager.start_quiz(quiz_id)
        if not result:
            self._handle_rejected(result)
            return
        self._refresh_state()

    def _handle_leave_quiz(self) -> None:
        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is not None and snapshot.phase is SessionPhase.ACTIVE:
            if not confirm_leave_quiz(self):
                return
        self.quiz_manager.clear_session()
        self._set_mode(LearnerMode.QUIZ_SELECTION)

    def _handle_retake(self) -> None:
        result = self.quiz_manager.retake_quiz()
        if not result:
            self._handle_rejected(result)
            return
        self._refresh_state()

    def _handle_back_to_selection(self) -> None:
        self.quiz_manager.clear_session()
        self._set_mode(LearnerMode.QUIZ_SELECTION)

    def _handle_rejected(self, result: OperationResult) -> None:
        logger.debug("UI action rejected: %s", result.reason)
        show_warning(self, "Not allowed", result.reason or "That action is not available right now.")

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details, font_point_size=self._ui_font_size)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT, font_point_size=self._ui_font_size)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self._ui_font_size,
            self._game_font_size,
            self._low_time_warning_seconds,
        )
        if dialog.exec():
            self._ui_font_size = dialog.get_ui_font_size()
            self._game_font_size = dialog.get_game_font_size()
            self._low_time_warning_seconds = dialog.get_low_time_warning_seconds()
            self._apply_styles()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        for widget in (self.url_label, self.about_button, self.help_button, self.settings_button):
            widget.setStyleSheet(ui_style)

        self.selection_panel.apply_font_size(self._game_font_size)
        self.quiz_panel.set_game_font_size(self._game_font_size)
        self.quiz_panel.set_low_time_warning(self._low_time_warning_seconds)
        self.results_panel.apply_font_size(self._game_font_size)
