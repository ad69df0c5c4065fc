"""
settings_screen.py
Settings tab: manual backup and restore of notes, automatic backup on exit,
and where the notes database lives.
"""
import logging
from typing import Optional

from PyQt5 import QtWidgets

from backup_service import OpenPrompt, QtOpenPrompt, QtSavePrompt, SavePrompt, backup_notes, restore_notes
from settings_manager import (
    get_auto_backup_dir,
    get_backup_on_exit_enabled,
    get_backups_to_keep,
    set_auto_backup_dir,
    set_backup_on_exit_enabled,
    set_backups_to_keep,
)
from ui_toast import show_toast

logger = logging.getLogger(__name__)


class SettingsScreen(QtWidgets.QWidget):
    def __init__(
        self,
        source,
        save_prompt: Optional[SavePrompt] = None,
        open_prompt: Optional[OpenPrompt] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.setObjectName("settingsScreen")
        self.source = source
        self._save_prompt = save_prompt
        self._open_prompt = open_prompt

        # Backup & restore
        backup_box = QtWidgets.QGroupBox("Backup", self)
        self.backup_button = QtWidgets.QPushButton("Back Up Notes…", backup_box)
        self.backup_button.setObjectName("backupButton")
        self.backup_button.clicked.connect(lambda: self.run_backup())
        self.restore_button = QtWidgets.QPushButton("Restore From Backup…", backup_box)
        self.restore_button.setObjectName("restoreButton")
        self.restore_button.clicked.connect(lambda: self.run_restore())

        self.backup_on_exit_check = QtWidgets.QCheckBox("Back up automatically on exit", backup_box)
        self.backup_on_exit_check.setChecked(get_backup_on_exit_enabled())
        self.backup_on_exit_check.toggled.connect(set_backup_on_exit_enabled)

        self.backup_dir_edit = QtWidgets.QLineEdit(get_auto_backup_dir(), backup_box)
        self.backup_dir_edit.setReadOnly(True)
        browse = QtWidgets.QPushButton("Browse…", backup_box)
        browse.clicked.connect(self._choose_backup_dir)
        dir_row = QtWidgets.QHBoxLayout()
        dir_row.addWidget(self.backup_dir_edit, 1)
        dir_row.addWidget(browse)

        self.keep_spin = QtWidgets.QSpinBox(backup_box)
        self.keep_spin.setRange(1, 999)
        self.keep_spin.setValue(get_backups_to_keep())
        self.keep_spin.valueChanged.connect(set_backups_to_keep)

        form = QtWidgets.QFormLayout(backup_box)
        form.addRow(self.backup_button)
        form.addRow(self.restore_button)
        form.addRow(self.backup_on_exit_check)
        form.addRow("Backup folder", dir_row)
        form.addRow("Backups to keep", self.keep_spin)

        # Storage
        storage_box = QtWidgets.QGroupBox("Storage", self)
        db_label = QtWidgets.QLabel(getattr(source, "db_path", ""), storage_box)
        db_label.setWordWrap(True)
        storage_form = QtWidgets.QFormLayout(storage_box)
        storage_form.addRow("Database", db_label)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(backup_box)
        layout.addWidget(storage_box)
        layout.addStretch(1)

    def run_backup(self) -> bool:
        records = [n.to_record() for n in self.source.notes]
        prompt = self._save_prompt or QtSavePrompt(self)
        ok = backup_notes(records, save_prompt=prompt)
        if ok:
            show_toast(self, "Notes backed up.")
        elif not records:
            show_toast(self, "There are no notes to back up.")
        else:
            show_toast(self, "Backup was not saved.", kind="error")
        return ok

    def run_restore(self) -> Optional[int]:
        prompt = self._open_prompt or QtOpenPrompt(self)
        restored = restore_notes(open_prompt=prompt, insert=self.source.restore_records)
        if restored is None:
            show_toast(self, "The backup could not be restored.", kind="error")
        elif restored == 0:
            show_toast(self, "Nothing was restored.")
        else:
            show_toast(self, f"Restored {restored} note(s).")
        return restored

    def _choose_backup_dir(self):
        path = QtWidgets.QFileDialog.getExistingDirectory(self, "Backup Folder", self.backup_dir_edit.text())
        if not path:
            return
        set_auto_backup_dir(path)
        self.backup_dir_edit.setText(path)
        logger.info("Automatic backup folder set to %s", path)
