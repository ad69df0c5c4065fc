"""
edit_note_screen.py
Transient screen for editing or deleting an existing note.
"""
import logging

from PyQt5 import QtWidgets

from note_editor import NoteEditorScreen

logger = logging.getLogger(__name__)


class EditNoteScreen(NoteEditorScreen):
    heading = "Edit Note"

    def __init__(self, source, note_id: int, hero_tag: str = "", parent=None):
        super().__init__(source, parent)
        self.note_id = note_id
        self.hero_tag = hero_tag
        self.setObjectName("editNoteScreen")
        # The hero tag ties this screen to the list row it was opened from
        self.setAccessibleName(hero_tag)

        self.delete_button = QtWidgets.QPushButton("Delete", self)
        self.delete_button.setObjectName("deleteButton")
        self.delete_button.clicked.connect(lambda: self.delete())
        self.button_row.insertWidget(0, self.delete_button)

        self.note = None
        try:
            self.note = source.get_note(note_id)
        except Exception:
            logger.error("Could not load note %s", note_id, exc_info=True)
        if self.note is None:
            self.heading_label.setText("Note not found")
            for w in (self.title_edit, self.content_edit, self.save_button, self.delete_button):
                w.setEnabled(False)
        else:
            self.title_edit.setText(self.note.title)
            self.content_edit.setPlainText(self.note.content)

    def is_modified(self) -> bool:
        if self.note is None:
            return False
        return self.title() != self.note.title.strip() or self.content() != self.note.content

    def save(self):
        if self.note is None or self.is_done:
            return
        if self.is_blank():
            QtWidgets.QMessageBox.information(self, "Edit Note", "A note needs a title or some text.")
            return
        if self.is_modified():
            try:
                self.source.update_note(self.note_id, self.title(), self.content())
            except Exception as e:
                logger.error("Could not save note %s", self.note_id, exc_info=True)
                QtWidgets.QMessageBox.warning(self, "Edit Note", f"Could not save the note:\n{e}")
                return
        self.finish()

    def delete(self, confirmed: bool = False):
        if self.note is None or self.is_done:
            return
        if not confirmed:
            resp = QtWidgets.QMessageBox.question(
                self,
                "Delete Note",
                f"Delete \"{self.note.display_title}\"?",
                QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No,
            )
            if resp != QtWidgets.QMessageBox.Yes:
                return
        try:
            self.source.delete_note(self.note_id)
        except Exception as e:
            logger.error("Could not delete note %s", self.note_id, exc_info=True)
            QtWidgets.QMessageBox.warning(self, "Delete Note", f"Could not delete the note:\n{e}")
            return
        self.finish()
