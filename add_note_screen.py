"""
add_note_screen.py
Transient screen for writing a new note.
"""
import logging

from PyQt5 import QtWidgets

from note_editor import NoteEditorScreen

logger = logging.getLogger(__name__)


class AddNoteScreen(NoteEditorScreen):
    heading = "New Note"

    def __init__(self, source, parent=None):
        super().__init__(source, parent)
        self.setObjectName("addNoteScreen")
        self.title_edit.setFocus()

    def save(self):
        if self.is_done:
            return
        if self.is_blank():
            QtWidgets.QMessageBox.information(self, "Add Note", "Please enter a title or some text.")
            return
        try:
            self.source.add_note(self.title(), self.content())
        except Exception as e:
            logger.error("Could not save new note", exc_info=True)
            QtWidgets.QMessageBox.warning(self, "Add Note", f"Could not save the note:\n{e}")
            return
        self.finish()
