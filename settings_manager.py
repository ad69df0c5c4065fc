"""
settings_manager.py
Loads and saves PocketNotes settings (database path, window state, backup and
logging options) in a per-user JSON file.
"""

import json
import logging
import os
import shutil
import sys

logger = logging.getLogger(__name__)

# Settings live in a per-user configuration directory:
#   Windows: %LOCALAPPDATA%/PocketNotes/settings.json
#   macOS:   ~/Library/Application Support/PocketNotes/settings.json
#   Linux:   ~/.config/PocketNotes/settings.json
# A pointer file (settings.loc) in that directory may redirect to another
# settings.json. A legacy ./settings.json is moved over on first use.

APP_NAME = "PocketNotes"
_LEGACY_SETTINGS_FILE = "settings.json"
_SETTINGS_BASENAME = "settings.json"
_POINTER_BASENAME = "settings.loc"
_CACHED_SETTINGS_PATH = None

LOG_LEVEL_ENV = "POCKETNOTES_LOG_LEVEL"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_settings_dir() -> str:
    """Return the platform-specific default settings directory (no overrides)."""
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.path.expanduser("~")
        return os.path.join(base, APP_NAME)
    if sys.platform == "darwin":
        return os.path.join(os.path.expanduser("~"), "Library", "Application Support", APP_NAME)
    return os.path.join(os.path.expanduser("~"), ".config", APP_NAME)


def _pointer_file_path() -> str:
    return os.path.join(_default_settings_dir(), _POINTER_BASENAME)


def _read_settings_pointer():
    """Return the absolute settings.json path from the pointer file, or None."""
    p = _pointer_file_path()
    try:
        if os.path.exists(p):
            with open(p, "r", encoding="utf-8") as f:
                line = f.readline().strip()
                if line:
                    return line
    except OSError:
        logger.warning("Could not read settings pointer %s", p)
    return None


def get_settings_dir() -> str:
    """Return the active settings directory, creating it if needed."""
    override_path = _read_settings_pointer()
    d = os.path.dirname(override_path) if override_path else _default_settings_dir()
    try:
        os.makedirs(d, exist_ok=True)
    except OSError:
        logger.warning("Could not create settings directory %s", d)
    return d


def _resolve_settings_path() -> str:
    """Compute the settings file path, migrating a legacy file if present."""
    global _CACHED_SETTINGS_PATH
    if _CACHED_SETTINGS_PATH:
        return _CACHED_SETTINGS_PATH
    override_path = _read_settings_pointer()
    if override_path:
        new_path = os.path.abspath(override_path)
        os.makedirs(os.path.dirname(new_path), exist_ok=True)
    else:
        new_path = os.path.join(get_settings_dir(), _SETTINGS_BASENAME)
    if not os.path.exists(new_path) and os.path.exists(_LEGACY_SETTINGS_FILE):
        try:
            shutil.move(_LEGACY_SETTINGS_FILE, new_path)
            logger.info("Migrated legacy settings file to %s", new_path)
        except OSError:
            logger.warning("Could not migrate legacy settings file", exc_info=True)
    _CACHED_SETTINGS_PATH = new_path
    return new_path


def get_settings_file_path() -> str:
    return os.path.abspath(_resolve_settings_path())


def set_settings_file_path(full_path: str):
    """Use full_path as the settings file from now on (in memory only; tests and overrides)."""
    global _CACHED_SETTINGS_PATH
    _CACHED_SETTINGS_PATH = os.path.abspath(full_path) if full_path else None


def load_settings() -> dict:
    path = _resolve_settings_path()
    try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
                return data if isinstance(data, dict) else {}
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable settings file %s", path, exc_info=True)
    return {}


def save_settings(settings: dict):
    path = _resolve_settings_path()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
    except OSError:
        logger.error("Could not save settings to %s", path, exc_info=True)


def _set(key, value):
    s = load_settings()
    s[key] = value
    save_settings(s)


# --- Database ---
def get_last_db():
    return load_settings().get("last_db")


def set_last_db(db_path):
    _set("last_db", db_path)


def get_default_db_path() -> str:
    return os.path.join(get_settings_dir(), "notes.db")


# --- Window state ---
def get_window_geometry():
    return load_settings().get("window_geometry")  # dict with x, y, w, h


def set_window_geometry(x, y, w, h):
    _set("window_geometry", {"x": int(x), "y": int(y), "w": int(w), "h": int(h)})


def get_window_maximized():
    return bool(load_settings().get("window_maximized", False))


def set_window_maximized(is_maximized: bool):
    _set("window_maximized", bool(is_maximized))


def get_last_tab_index() -> int:
    val = load_settings().get("last_tab_index", 0)
    if isinstance(val, bool) or not isinstance(val, int):
        return 0
    return val if val in (0, 1) else 0


def set_last_tab_index(index: int):
    if index in (0, 1):
        _set("last_tab_index", int(index))


# --- Backups ---
def get_backup_on_exit_enabled() -> bool:
    """Return True if an automatic backup should be written when the app exits."""
    return bool(load_settings().get("backup_on_exit", False))


def set_backup_on_exit_enabled(enabled: bool):
    _set("backup_on_exit", bool(enabled))


def get_auto_backup_dir() -> str:
    """Folder for automatic backups; defaults to <settings dir>/backups."""
    val = load_settings().get("auto_backup_dir")
    if isinstance(val, str) and val:
        return val
    return os.path.join(get_settings_dir(), "backups")


def set_auto_backup_dir(path: str):
    if not isinstance(path, str):
        return
    _set("auto_backup_dir", path)


def get_backups_to_keep() -> int:
    """Return how many automatic backups to keep. Default 5; clamped [1, 999]."""
    try:
        val = int(load_settings().get("backups_to_keep", 5))
    except (TypeError, ValueError):
        val = 5
    return min(max(val, 1), 999)


def set_backups_to_keep(n: int):
    try:
        val = int(n)
    except (TypeError, ValueError):
        return
    _set("backups_to_keep", min(max(val, 1), 999))


# --- Logging ---
def get_log_level() -> str:
    """Return the configured log level name; the environment variable wins over the file."""
    for candidate in (os.environ.get(LOG_LEVEL_ENV), load_settings().get("log_level")):
        if isinstance(candidate, str) and candidate.strip().upper() in _LOG_LEVELS:
            return candidate.strip().upper()
    return "INFO"


def set_log_level(level: str):
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        _set("log_level", level.upper())
