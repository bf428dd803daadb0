import logging
import os
import sys

from PyQt6 import QtWidgets

from .bridge import SelectionBridge
from .config import InspectorSettings
from .inspector import InspectorStore
from .projects import ProjectStore
from .ui.main_window import MainWindow


def configure_logging() -> None:
    level = os.getenv("STYLECRAFT_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    configure_logging()
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("Stylecraft")

    settings = InspectorSettings.from_env()
    store = InspectorStore(settings)
    bridge = SelectionBridge()
    win = MainWindow(store, bridge, ProjectStore())
    win.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
