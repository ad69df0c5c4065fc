"""
Tests for main.py: choosing the notes database at startup.
"""

import os

import main
import settings_manager as sm
from db_notes import get_notes


class TestOpenNotesDatabase:
    def test_uses_last_database(self, tmp_path):
        path = str(tmp_path / "mine.db")
        sm.set_last_db(path)
        assert main.open_notes_database() == path
        assert get_notes(path) == []

    def test_first_run_uses_default(self):
        path = main.open_notes_database()
        assert path == sm.get_default_db_path()
        assert sm.get_last_db() == path
        assert os.path.exists(path)

    def test_unopenable_last_database_falls_back_to_default(self, tmp_path):
        sm.set_last_db(str(tmp_path / "gone" / "notes.db"))
        path = main.open_notes_database()
        assert path == sm.get_default_db_path()
        assert sm.get_last_db() == path
        assert get_notes(path) == []

    def test_nothing_opens_returns_last_path(self, tmp_path, monkeypatch):
        broken = str(tmp_path / "gone" / "notes.db")
        sm.set_last_db(broken)
        monkeypatch.setattr(main, "get_default_db_path", lambda: str(tmp_path / "also_gone" / "notes.db"))
        assert main.open_notes_database() == broken
        assert sm.get_last_db() == broken
