"""
app_logging.py
Logging setup for the application: console output plus a rotating log file
in the settings directory. Modules log through logging.getLogger(__name__);
nothing is configured at import time so tests keep pytest's own capture.
"""

import logging
import logging.handlers
import os
from typing import Optional

LOG_FILE_NAME = "pocketnotes.log"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> logging.Logger:
    """Attach console and file handlers to the root logger once.

    level defaults to settings_manager.get_log_level(); log_dir to the settings
    directory. A log file that cannot be opened only disables file output.
    """
    global _configured
    root = logging.getLogger()
    if level is None:
        from settings_manager import get_log_level

        level = get_log_level()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if _configured:
        return root

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    try:
        if log_dir is None:
            from settings_manager import get_settings_dir

            log_dir = get_settings_dir()
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME),
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    except OSError:
        root.warning("File logging disabled; could not open a log file in %s", log_dir, exc_info=True)

    _configured = True
    return root
