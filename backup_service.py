"""
backup_service.py
Back up notes to a user-chosen JSON file, restore them from one, and keep
timestamped automatic backups with a keep-N retention policy.

Backup file format:
- A JSON array of objects, each a flat mapping of string keys to string values
- UTF-8 encoded
- Suggested name: notes_backup_YYYY-MM-DD.json

The file dialogs are reached through small callables (a "save prompt" and an
"open prompt") so the helpers can run without a Qt host. QtSavePrompt and
QtOpenPrompt are the default implementations.
"""

from __future__ import annotations

import datetime
import json
import logging
import os
import time
from typing import Callable, Iterable, List, Optional, Sequence

from note_model import BackupFormatError, validate_record

logger = logging.getLogger(__name__)

DIALOG_TITLE = "Save Notes Backup"
RESTORE_DIALOG_TITLE = "Restore Notes Backup"
ALLOWED_EXTENSIONS = ["json"]

# (dialog_title, file_name, allowed_extensions, data) -> chosen path or None
SavePrompt = Callable[[str, str, List[str], bytes], Optional[str]]
# (dialog_title, allowed_extensions) -> file contents or None
OpenPrompt = Callable[[str, List[str]], Optional[bytes]]


def suggested_backup_filename(today: Optional[datetime.date] = None) -> str:
    day = today or datetime.date.today()
    return f"notes_backup_{day.isoformat()}.json"


def _timestamp(now: Optional[float] = None) -> str:
    return time.strftime("%Y%m%d-%H%M%S", time.localtime(now))


def write_bytes_atomically(path: str, data: bytes):
    """Write data to path via a temp file so a failed write never leaves a partial file."""
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except Exception:
        try:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        except OSError:
            pass
        raise


def _filter_for(extensions: Sequence[str]) -> str:
    patterns = " ".join(f"*.{ext}" for ext in extensions)
    return f"JSON Files ({patterns});;All Files (*)"


class QtSavePrompt:
    """Save prompt backed by QFileDialog; writes the payload to the chosen path."""

    def __init__(self, parent=None):
        self._parent = parent

    def __call__(self, dialog_title: str, file_name: str, allowed_extensions: List[str], data: bytes) -> Optional[str]:
        from PyQt5 import QtWidgets

        try:
            from settings_manager import get_auto_backup_dir

            initial = os.path.join(get_auto_backup_dir(), file_name)
        except Exception:
            initial = file_name
        out_path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self._parent,
            dialog_title,
            initial,
            _filter_for(allowed_extensions),
        )
        if not out_path:
            return None
        if allowed_extensions and not any(out_path.lower().endswith("." + ext) for ext in allowed_extensions):
            out_path = f"{out_path}.{allowed_extensions[0]}"
        write_bytes_atomically(out_path, data)
        return out_path


class QtOpenPrompt:
    """Open prompt backed by QFileDialog; returns the chosen file's bytes."""

    def __init__(self, parent=None):
        self._parent = parent

    def __call__(self, dialog_title: str, allowed_extensions: List[str]) -> Optional[bytes]:
        from PyQt5 import QtWidgets

        file_path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self._parent,
            dialog_title,
            "",
            _filter_for(allowed_extensions),
        )
        if not file_path:
            return None
        with open(file_path, "rb") as f:
            return f.read()


def encode_notes(notes: Sequence[dict]) -> bytes:
    return json.dumps(list(notes)).encode("utf-8")


def backup_notes(
    notes: Sequence[dict],
    save_prompt: Optional[SavePrompt] = None,
    today: Optional[datetime.date] = None,
) -> bool:
    """Serialize notes to JSON and hand the bytes to the save prompt.

    Returns True once the prompt reports a chosen path. An empty notes list, a
    cancelled prompt, or any exception while encoding or saving returns False;
    the cause is logged, never raised.
    """
    logger.info("Starting notes backup process...")
    if not notes:
        logger.warning("No notes available to backup.")
        return False

    try:
        file_bytes = encode_notes(notes)
        suggested_file_name = suggested_backup_filename(today)
        prompt = save_prompt if save_prompt is not None else QtSavePrompt()

        output_file = prompt(DIALOG_TITLE, suggested_file_name, list(ALLOWED_EXTENSIONS), file_bytes)

        if output_file is None:
            logger.info("Backup cancelled by user.")
            return False

        logger.info("Backup successful. Notes saved to: %s", output_file)
        return True
    except Exception:
        logger.error("Error during backup process", exc_info=True)
        return False


def read_backup(data: bytes) -> List[dict]:
    """Decode a backup payload and return its note records.

    Raises BackupFormatError if the payload is not a JSON array of flat string mappings.
    """
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BackupFormatError(f"not a JSON backup: {e}") from e
    if not isinstance(payload, list):
        raise BackupFormatError("backup must be a JSON array of notes")
    return [validate_record(item) for item in payload]


def restore_notes(
    open_prompt: Optional[OpenPrompt] = None,
    insert: Optional[Callable[[List[dict]], int]] = None,
) -> Optional[int]:
    """Ask for a backup file and pass its records to insert.

    Returns the number of restored notes, 0 if the dialog was cancelled, or
    None if the file could not be read or inserted.
    """
    logger.info("Starting notes restore process...")
    try:
        prompt = open_prompt if open_prompt is not None else QtOpenPrompt()
        data = prompt(RESTORE_DIALOG_TITLE, list(ALLOWED_EXTENSIONS))
        if data is None:
            logger.info("Restore cancelled by user.")
            return 0
        records = read_backup(data)
        if insert is None:
            return len(records)
        restored = insert(records)
        logger.info("Restore successful. %d notes restored.", restored)
        return restored
    except BackupFormatError as e:
        logger.warning("Backup file rejected: %s", e)
        return None
    except Exception:
        logger.error("Error during restore process", exc_info=True)
        return None


# -------------------- Automatic backups --------------------
def _list_existing_backups(dest_dir: str) -> List[str]:
    try:
        return [
            os.path.join(dest_dir, name)
            for name in os.listdir(dest_dir)
            if name.startswith("notes_backup_") and name.endswith(".json")
        ]
    except OSError:
        return []


def _retention_prune(dest_dir: str, keep: int):
    if keep is None or keep <= 0:
        return
    backups = _list_existing_backups(dest_dir)
    # Newest first; names embed the timestamp so they break mtime ties
    backups.sort(key=lambda p: (os.path.getmtime(p), os.path.basename(p)), reverse=True)
    for old in backups[keep:]:
        try:
            os.remove(old)
        except OSError:
            logger.warning("Could not remove old backup %s", old)


def _cleanup_stale_tmp_backups(dest_dir: str, *, min_age_seconds: int = 24 * 60 * 60):
    """Remove temp files left behind by backups that were interrupted before the rename."""
    now = time.time()
    for name in os.listdir(dest_dir or "."):
        if not name.lower().endswith(".json.tmp"):
            continue
        p = os.path.join(dest_dir, name)
        try:
            if (now - os.path.getmtime(p)) >= min_age_seconds:
                os.remove(p)
        except OSError:
            pass


def make_auto_backup(
    notes: Iterable[dict],
    dest_dir: str,
    keep: int = 5,
    now: Optional[float] = None,
) -> Optional[str]:
    """Write a timestamped backup of notes into dest_dir and prune to the newest keep.

    Returns the full path of the new backup, or None if there was nothing to
    back up or the write failed.
    """
    notes = list(notes)
    if not notes or not dest_dir:
        return None
    try:
        os.makedirs(dest_dir, exist_ok=True)
        _cleanup_stale_tmp_backups(dest_dir)
        path = os.path.join(dest_dir, f"notes_backup_{_timestamp(now)}.json")
        write_bytes_atomically(path, encode_notes(notes))
    except Exception:
        logger.error("Automatic backup to %s failed", dest_dir, exc_info=True)
        return None
    _retention_prune(dest_dir, int(keep) if keep is not None else 5)
    logger.info("Automatic backup written to %s", path)
    return path
