"""
Tests for db_notes.py and note_model.py.
"""

import sqlite3

import pytest

import db_notes
from note_model import BackupFormatError, Note, validate_record


class TestNoteModel:
    def test_record_is_flat_strings(self):
        note = Note(id=7, title="T", content="C", created_at="a", modified_at="b")
        rec = note.to_record()
        assert rec == {"id": "7", "title": "T", "content": "C", "created_at": "a", "modified_at": "b"}
        assert all(isinstance(v, str) for v in rec.values())

    def test_hero_tag(self):
        assert Note(id=3, title="x").hero_tag == "note-3"

    def test_display_title_falls_back_to_content(self):
        assert Note(id=1, title="  ", content="first line\nsecond").display_title == "first line"
        assert Note(id=1, title="", content="").display_title == "Untitled"

    def test_matches_is_case_insensitive(self):
        note = Note(id=1, title="Shopping", content="Buy MILK")
        assert note.matches("milk")
        assert note.matches("shop")
        assert note.matches("")
        assert not note.matches("bread")

    def test_validate_record(self):
        assert validate_record({"a": "b"}) == {"a": "b"}
        with pytest.raises(BackupFormatError):
            validate_record({"a": 1})
        with pytest.raises(BackupFormatError):
            validate_record("a")


class TestNotesStore:
    def test_schema_version(self, db_path):
        assert db_notes.get_db_version(db_path) == db_notes.SCHEMA_VERSION

    def test_migrate_is_idempotent(self, db_path):
        db_notes.migrate_database_if_needed(db_path)
        assert db_notes.get_notes(db_path) == []

    def test_crud(self, db_path):
        note_id = db_notes.create_note("Title", "Body", db_path)
        note = db_notes.get_note_by_id(note_id, db_path)
        assert note.title == "Title"
        assert note.content == "Body"
        assert note.created_at

        db_notes.update_note(note_id, "New", "Changed", db_path)
        note = db_notes.get_note_by_id(note_id, db_path)
        assert (note.title, note.content) == ("New", "Changed")

        db_notes.delete_note(note_id, db_path)
        assert db_notes.get_note_by_id(note_id, db_path) is None

    def test_get_notes_newest_first(self, db_path):
        first = db_notes.create_note("first", "", db_path)
        second = db_notes.create_note("second", "", db_path)
        ids = [n.id for n in db_notes.get_notes(db_path)]
        assert ids == [second, first]

    def test_insert_records_keeps_timestamps(self, db_path):
        count = db_notes.insert_records(
            [
                {"id": "99", "title": "Old", "content": "x", "created_at": "2020-01-01 10:00:00", "modified_at": "2020-01-02 10:00:00"},
                {"title": "No dates"},
            ],
            db_path,
        )
        assert count == 2
        notes = {n.title: n for n in db_notes.get_notes(db_path)}
        assert notes["Old"].created_at == "2020-01-01 10:00:00"
        assert notes["Old"].modified_at == "2020-01-02 10:00:00"
        assert notes["Old"].id != 99
        assert notes["No dates"].created_at

    def test_insert_records_is_all_or_nothing(self, db_path):
        with pytest.raises(sqlite3.Error):
            db_notes.insert_records([{"title": "ok"}, {"title": ["not", "a", "string"]}], db_path)
        assert db_notes.get_notes(db_path) == []

    def test_missing_table_raises(self, tmp_path):
        with pytest.raises(sqlite3.OperationalError):
            db_notes.get_notes(str(tmp_path / "empty.db"))
