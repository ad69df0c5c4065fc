"""
note_editor.py
Shared form for the transient add/edit note screens: title, content, and a
button row. Emits `closed` when the screen should be dismissed.
"""
from PyQt5 import QtWidgets
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QKeySequence


class NoteEditorScreen(QtWidgets.QWidget):
    closed = pyqtSignal()

    heading = "Note"

    def __init__(self, source, parent=None):
        super().__init__(parent)
        self.source = source
        self._done = False
        self.setAutoFillBackground(True)

        self.heading_label = QtWidgets.QLabel(self.heading, self)
        font = self.heading_label.font()
        font.setPointSize(font.pointSize() + 4)
        font.setBold(True)
        self.heading_label.setFont(font)

        self.title_edit = QtWidgets.QLineEdit(self)
        self.title_edit.setObjectName("titleEdit")
        self.title_edit.setPlaceholderText("Title")

        self.content_edit = QtWidgets.QPlainTextEdit(self)
        self.content_edit.setObjectName("contentEdit")
        self.content_edit.setPlaceholderText("Write your note here")

        self.save_button = QtWidgets.QPushButton("Save", self)
        self.save_button.setObjectName("saveButton")
        self.save_button.setDefault(True)
        self.save_button.clicked.connect(self.save)
        self.cancel_button = QtWidgets.QPushButton("Cancel", self)
        self.cancel_button.setObjectName("cancelButton")
        self.cancel_button.clicked.connect(self.cancel)

        self.button_row = QtWidgets.QHBoxLayout()
        self.button_row.addStretch(1)
        self.button_row.addWidget(self.cancel_button)
        self.button_row.addWidget(self.save_button)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.heading_label)
        layout.addWidget(self.title_edit)
        layout.addWidget(self.content_edit, 1)
        layout.addLayout(self.button_row)

        # Escape acts as the back gesture
        back = QtWidgets.QShortcut(QKeySequence(Qt.Key_Escape), self)
        back.activated.connect(self.cancel)
        save = QtWidgets.QShortcut(QKeySequence(QKeySequence.Save), self)
        save.activated.connect(self.save)

    def title(self) -> str:
        return self.title_edit.text().strip()

    def content(self) -> str:
        return self.content_edit.toPlainText()

    def is_blank(self) -> bool:
        return not self.title() and not self.content().strip()

    @property
    def is_done(self) -> bool:
        return self._done

    def finish(self):
        """Close the screen once; later save/delete/cancel calls are ignored."""
        if self._done:
            return
        self._done = True
        self.setEnabled(False)
        self.closed.emit()

    def save(self):
        raise NotImplementedError

    def cancel(self):
        self.finish()
