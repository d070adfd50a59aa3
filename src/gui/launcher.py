"""Dedicated launcher module for `python -m gui` or external callers.

Configures logging from settings, creates the QApplication and shows the
seeded board. The board view-model is unmounted before the process exits.
"""

from __future__ import annotations

import logging
import sys

from config import settings


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():  # pragma: no cover - runtime
    configure_logging()
    from PyQt6.QtWidgets import QApplication

    from gui.design.animator import trigger_post_move_flash
    from gui.viewmodels.board_viewmodel import BoardViewModel
    from gui.views.board_view import BoardView

    app = QApplication.instance() or QApplication(sys.argv)
    view = BoardView(BoardViewModel(flash=trigger_post_move_flash))
    view.setWindowTitle("Board")
    view.resize(900, 420)
    view.show()
    code = app.exec()
    view.unmount()
    sys.exit(code)


if __name__ == "__main__":  # pragma: no cover
    main()
