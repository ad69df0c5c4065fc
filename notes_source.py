"""
notes_source.py
Asynchronous notes collection watched by the main screen.

NotesSource exposes the notes of one database as a NotesState that is either
loading, data (a list of Note) or error (the exception that stopped loading).
Loading runs on the next turn of the Qt event loop so the caller can render
the loading state first.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

import db_notes
from note_model import Note

logger = logging.getLogger(__name__)

LOADING = "loading"
DATA = "data"
ERROR = "error"


class NotesState:
    """Immutable snapshot of the notes collection."""

    __slots__ = ("status", "notes", "error")

    def __init__(self, status: str, notes: Optional[List[Note]] = None, error: Optional[BaseException] = None):
        self.status = status
        self.notes = list(notes) if notes is not None else []
        self.error = error

    @classmethod
    def loading(cls) -> "NotesState":
        return cls(LOADING)

    @classmethod
    def data(cls, notes: List[Note]) -> "NotesState":
        return cls(DATA, notes=notes)

    @classmethod
    def failed(cls, error: BaseException) -> "NotesState":
        return cls(ERROR, error=error)

    @property
    def is_loading(self) -> bool:
        return self.status == LOADING

    @property
    def has_data(self) -> bool:
        return self.status == DATA

    def when(self, data: Callable, loading: Callable, error: Callable):
        if self.status == DATA:
            return data(self.notes)
        if self.status == ERROR:
            return error(self.error)
        return loading()

    def __repr__(self):
        if self.status == DATA:
            return f"NotesState(data, {len(self.notes)} notes)"
        if self.status == ERROR:
            return f"NotesState(error, {self.error!r})"
        return "NotesState(loading)"


class NotesSource(QObject):
    stateChanged = pyqtSignal(object)

    def __init__(self, db_path: str, parent=None):
        super().__init__(parent)
        self.db_path = db_path
        self._state = NotesState.loading()
        self._pending = False

    @property
    def state(self) -> NotesState:
        return self._state

    @property
    def notes(self) -> List[Note]:
        return list(self._state.notes) if self._state.has_data else []

    def _set_state(self, state: NotesState):
        self._state = state
        self.stateChanged.emit(state)

    def reload(self):
        """Switch to loading and fetch the notes on the next event-loop turn."""
        if self._pending:
            return
        self._pending = True
        self._set_state(NotesState.loading())
        QTimer.singleShot(0, self.load_now)

    def load_now(self):
        """Fetch the notes synchronously and publish data or error."""
        self._pending = False
        try:
            notes = db_notes.get_notes(self.db_path)
        except Exception as e:
            logger.error("Error loading notes from %s", self.db_path, exc_info=True)
            self._set_state(NotesState.failed(e))
            return
        logger.debug("Loaded %d notes", len(notes))
        self._set_state(NotesState.data(notes))

    def get_note(self, note_id: int) -> Optional[Note]:
        return db_notes.get_note_by_id(note_id, self.db_path)

    def add_note(self, title: str, content: str) -> int:
        note_id = db_notes.create_note(title, content, self.db_path)
        logger.info("Created note %s", note_id)
        self.reload()
        return note_id

    def update_note(self, note_id: int, title: str, content: str):
        db_notes.update_note(note_id, title, content, self.db_path)
        logger.info("Updated note %s", note_id)
        self.reload()

    def delete_note(self, note_id: int):
        db_notes.delete_note(note_id, self.db_path)
        logger.info("Deleted note %s", note_id)
        self.reload()

    def restore_records(self, records: List[dict]) -> int:
        count = db_notes.insert_records(records, self.db_path)
        self.reload()
        return count
