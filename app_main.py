"""Application entry point for QuizArena."""

from __future__ import annotations

import socket
import sys

from PySide6.QtWidgets import QApplication

from quiz_arena.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_arena.core.quiz_importer import QuizImportError, load_default_catalog
from quiz_arena.core.quiz_manager import QuizManager
from quiz_arena.core.services.result_history import ResultHistory
from quiz_arena.server.api_server import start_api_server
from quiz_arena.ui.quiz_main_window import QuizMainWindow
from quiz_arena.utils.logging_config import configure_logging


def _determine_player_url(port: int) -> str:
    """Best-effort determination of the local IP for the browser client URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging, load the question bank, start the API server and the Qt UI."""
    logger = configure_logging()
    logger.info("Starting QuizArena…")

    try:
        catalog = load_default_catalog()
    except (OSError, QuizImportError) as exc:
        logger.error("Could not load the question bank: %s", exc)
        sys.exit(1)

    history = ResultHistory()
    # One session per client: the desktop window and the browser page never share state.
    desktop_manager = QuizManager(catalog=catalog, history=history)
    browser_manager = QuizManager(catalog=catalog, history=history)

    start_api_server(browser_manager, history, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Browser client available at %s", _determine_player_url(DEFAULT_PORT))

    app = QApplication(sys.argv)
    window = QuizMainWindow(quiz_manager=desktop_manager, history=history)
    window.resize(960, 720)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
