"""Application entry point for QuizQuest."""

from __future__ import annotations

import socket
import sys

from PySide6.QtWidgets import QApplication

from quiz_quest.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_quest.core.quiz_importer import QuizImportError
from quiz_quest.core.quiz_manager import QuizManager
from quiz_quest.server.api_server import start_api_server
from quiz_quest.ui.dialog_helpers import show_error
from quiz_quest.ui.learner_main_window import LearnerMainWindow
from quiz_quest.utils.library_path import resolve_library_path
from quiz_quest.utils.logging_config import configure_logging


def _determine_learner_url(port: int) -> str:
    """Best-effort determination of the local IP for the browser URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging, load the library, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting QuizQuest…")

    quiz_manager = QuizManager()
    library_path = resolve_library_path()
    load_error: str | None = None
    try:
        quiz_manager.load_library(library_path)
    except (OSError, QuizImportError, ValueError) as exc:
        logger.error("Could not load quiz library %s: %s", library_path, exc)
        load_error = str(exc)

    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    learner_url = _determine_learner_url(DEFAULT_PORT)
    logger.info("Browser page available at %s", learner_url)

    app = QApplication(sys.argv)
    window = LearnerMainWindow(quiz_manager=quiz_manager, learner_url=learner_url)
    window.show()
    if load_error is not None:
        show_error(window, "Quiz library", load_error)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
