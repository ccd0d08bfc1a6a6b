# main.py
import sys
from PyQt6.QtWidgets import QApplication
from PyQt6.QtGui import QIcon

from config import Config
from logging_config import LoggingConfig

# (Windows only) makes the taskbar show the app icon when started from Python
if sys.platform.startswith("win"):
    import ctypes
    try:
        ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID("layoutlens.LayoutLens")
    except (AttributeError, OSError):
        pass

from View.gui import LayoutLensGUI


def main():
    LoggingConfig.setup_logging(Config.LOG_DIR)
    logger = LoggingConfig.get_logger(__name__)
    logger.info("Starting %s %s", Config.APP_NAME, Config.APP_VERSION)

    app = QApplication(sys.argv)
    app.setApplicationName(Config.APP_NAME)

    icon_path = Config.RESOURCES_DIR / "Icon.ico"
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))

    win = LayoutLensGUI()
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
