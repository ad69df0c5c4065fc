"""
home_screen.py
Home tab: a searchable list of notes. Activating a row opens the note through
the on_note_tap callback supplied by the main screen.
"""
import logging
from typing import Callable, List, Optional

from PyQt5 import QtWidgets
from PyQt5.QtCore import Qt

from note_model import Note

logger = logging.getLogger(__name__)

NOTE_ROLE = Qt.UserRole


class HomeScreen(QtWidgets.QWidget):
    def __init__(self, notes: List[Note], on_note_tap: Optional[Callable[[Note], None]] = None, parent=None):
        super().__init__(parent)
        self.setObjectName("homeScreen")
        self._notes: List[Note] = []
        self._on_note_tap = on_note_tap

        self.search_edit = QtWidgets.QLineEdit(self)
        self.search_edit.setObjectName("searchEdit")
        self.search_edit.setPlaceholderText("Search notes")
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.textChanged.connect(self._refresh_list)

        self.note_list = QtWidgets.QListWidget(self)
        self.note_list.setObjectName("noteList")
        self.note_list.setUniformItemSizes(True)
        self.note_list.itemClicked.connect(self._on_item_activated)

        self.empty_label = QtWidgets.QLabel("No notes yet. Tap + to add one.", self)
        self.empty_label.setObjectName("emptyLabel")
        self.empty_label.setAlignment(Qt.AlignCenter)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.search_edit)
        layout.addWidget(self.note_list, 1)
        layout.addWidget(self.empty_label, 1)

        self.set_notes(notes)

    @property
    def notes(self) -> List[Note]:
        return list(self._notes)

    def set_notes(self, notes: List[Note]):
        self._notes = list(notes or [])
        self._refresh_list()

    def visible_notes(self) -> List[Note]:
        query = self.search_edit.text()
        return [n for n in self._notes if n.matches(query)]

    def _refresh_list(self, *_):
        self.note_list.clear()
        shown = self.visible_notes()
        for note in shown:
            item = QtWidgets.QListWidgetItem(note.display_title)
            item.setData(NOTE_ROLE, note)
            item.setToolTip(note.modified_at)
            self.note_list.addItem(item)
        if not self._notes:
            self.empty_label.setText("No notes yet. Tap + to add one.")
        else:
            self.empty_label.setText("No notes match your search.")
        self.empty_label.setVisible(not shown)
        self.note_list.setVisible(bool(shown))

    def _on_item_activated(self, item: QtWidgets.QListWidgetItem):
        note = item.data(NOTE_ROLE)
        if note is None or self._on_note_tap is None:
            return
        logger.debug("Note tapped: %s", note.id)
        self._on_note_tap(note)
