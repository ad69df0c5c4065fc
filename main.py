"""
main.py
Entry point for PocketNotes. Sets up logging and crash diagnostics, opens the
notes database, and shows the main window.
"""
import logging
import os
import sys
import warnings

from PyQt5 import QtWidgets

from app_logging import configure_logging
from backup_service import make_auto_backup
from db_notes import migrate_database_if_needed
from main_screen import MainScreen
from navigator import StackNavigator
from notes_source import NotesSource
from settings_manager import (
    get_auto_backup_dir,
    get_backup_on_exit_enabled,
    get_backups_to_keep,
    get_default_db_path,
    get_last_db,
    get_last_tab_index,
    get_settings_dir,
    get_window_geometry,
    get_window_maximized,
    set_last_db,
    set_last_tab_index,
    set_window_geometry,
    set_window_maximized,
)

logger = logging.getLogger("pocketnotes")


def _install_global_excepthook():
    """Log unhandled exceptions and show them in a dialog instead of closing silently."""
    import traceback

    def _handler(exctype, value, tb):
        logger.critical("Unhandled exception", exc_info=(exctype, value, tb))
        msg = "".join(traceback.format_exception(exctype, value, tb))
        try:
            QtWidgets.QMessageBox.critical(None, "Unexpected Error", msg)
        except Exception:
            pass

    sys.excepthook = _handler


def _enable_faulthandler(log_path: str):
    """Dump native tracebacks (e.g., segfaults) for all threads into log_path."""
    import faulthandler

    try:
        f = open(log_path, "a", encoding="utf-8")
    except OSError:
        logger.warning("Could not open %s for native crash dumps", log_path)
        return
    # Keep the file open for the lifetime of the process
    globals()["_native_crash_log_file"] = f
    faulthandler.enable(all_threads=True, file=f)


def _install_qt_message_handler():
    """Route Qt's own warnings and errors into the logging system."""
    from PyQt5.QtCore import QtMsgType, qInstallMessageHandler

    qt_logger = logging.getLogger("pocketnotes.qt")
    level_map = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _qt_handler(msg_type, context, message):
        where = ""
        if getattr(context, "file", None):
            where = f" ({context.file}:{context.line})"
        qt_logger.log(level_map.get(msg_type, logging.WARNING), "%s%s", message, where)

    qInstallMessageHandler(_qt_handler)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, source: NotesSource, initial_index: int = 0, parent=None):
        super().__init__(parent)
        self.source = source
        self.setWindowTitle(f"PocketNotes — {source.db_path}")
        self.navigator = StackNavigator()
        self.main_screen = MainScreen(source, navigator=self.navigator, initial_index=initial_index)
        self.navigator.addWidget(self.main_screen)
        self.setCentralWidget(self.navigator)
        self.resize(420, 720)

    def save_state(self):
        g = self.geometry()
        set_window_geometry(g.x(), g.y(), g.width(), g.height())
        set_window_maximized(self.isMaximized())
        set_last_tab_index(self.main_screen.selected_index)

    def restore_geometry(self):
        geom = get_window_geometry()
        if geom and all(k in geom for k in ("x", "y", "w", "h")):
            self.setGeometry(int(geom["x"]), int(geom["y"]), int(geom["w"]), int(geom["h"]))


def run_exit_backup(source: NotesSource):
    """Write the automatic backup if enabled in settings."""
    if not get_backup_on_exit_enabled():
        return None
    records = [n.to_record() for n in source.notes]
    return make_auto_backup(records, get_auto_backup_dir(), keep=get_backups_to_keep())


def _try_migrate(db_path: str) -> bool:
    try:
        migrate_database_if_needed(db_path)
        return True
    except Exception:
        logger.error("Could not open notes database %s", db_path, exc_info=True)
        return False


def open_notes_database() -> str:
    """Return the database to use: the last one if it opens, else the default one.

    If neither opens, the path is still returned and the notes source reports
    the failure as its error state.
    """
    db_path = get_last_db() or get_default_db_path()
    if not _try_migrate(db_path):
        fallback = get_default_db_path()
        if os.path.abspath(fallback) == os.path.abspath(db_path) or not _try_migrate(fallback):
            return db_path
        logger.warning("Falling back to %s", fallback)
        db_path = fallback
    set_last_db(db_path)
    logger.info("Using notes database %s", db_path)
    return db_path


def main():
    # Suppress noisy SIP deprecation warning from PyQt5 about sipPyTypeDict
    warnings.filterwarnings("ignore", category=DeprecationWarning, message=".*sipPyTypeDict.*")
    configure_logging()
    _install_global_excepthook()

    from PyQt5.QtCore import Qt

    QtWidgets.QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    QtWidgets.QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("PocketNotes")
    _enable_faulthandler(os.path.join(get_settings_dir(), "native_crash.log"))
    _install_qt_message_handler()

    db_path = open_notes_database()

    source = NotesSource(db_path)
    window = MainWindow(source, initial_index=get_last_tab_index())
    window.restore_geometry()
    if get_window_maximized():
        window.showMaximized()
    else:
        window.show()
    source.reload()

    def _on_quit():
        window.save_state()
        run_exit_backup(source)

    app.aboutToQuit.connect(_on_quit)
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
