"""Allow running Exercise Timer as a module: python -m exercisetimer."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .settings import load_settings
from .app import ExerciseTimerApp


def configure_logging(level: str = "INFO") -> None:
    """Route all ``exercisetimer`` loggers to stderr at *level*."""
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    logging.getLogger(__name__).info("Exercise Timer ready!")

    app = QApplication(sys.argv)
    app.setApplicationName("Exercise Timer")
    app.setOrganizationName("ExerciseTimer")

    window = ExerciseTimerApp(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
