"""
Tests for the home, settings and note editor screens.
"""

import json
from unittest.mock import Mock

import pytest

from add_note_screen import AddNoteScreen
from edit_note_screen import EditNoteScreen
from home_screen import HomeScreen
from note_model import Note
from notes_source import NotesSource
from settings_screen import SettingsScreen

NOTES = [
    Note(id=1, title="Groceries", content="milk"),
    Note(id=2, title="Ideas", content="a notes app"),
]


@pytest.fixture
def source(qapp, seeded_db):
    src = NotesSource(seeded_db)
    src.load_now()
    return src


class TestHomeScreen:
    def test_lists_notes(self, qapp):
        home = HomeScreen(NOTES)
        assert home.note_list.count() == 2
        assert home.empty_label.isHidden()

    def test_search_filters(self, qapp):
        home = HomeScreen(NOTES)
        home.search_edit.setText("NOTES")
        assert [n.id for n in home.visible_notes()] == [2]
        assert home.note_list.count() == 1

    def test_empty_state(self, qapp):
        home = HomeScreen([])
        assert not home.empty_label.isHidden()
        assert home.note_list.isHidden()

    def test_click_calls_back_with_note(self, qapp):
        on_tap = Mock()
        home = HomeScreen(NOTES, on_note_tap=on_tap)
        home.note_list.itemClicked.emit(home.note_list.item(1))
        on_tap.assert_called_once_with(NOTES[1])


class TestNoteEditors:
    def test_add_saves_and_closes(self, source):
        add = AddNoteScreen(source)
        closed = Mock()
        add.closed.connect(closed)
        add.title_edit.setText("New one")
        add.content_edit.setPlainText("body")
        add.save()
        closed.assert_called_once_with()
        source.load_now()
        assert "New one" in {n.title for n in source.notes}

    def test_add_cancel_closes_without_saving(self, source):
        add = AddNoteScreen(source)
        closed = Mock()
        add.closed.connect(closed)
        add.title_edit.setText("Discard me")
        add.cancel()
        closed.assert_called_once_with()
        source.load_now()
        assert "Discard me" not in {n.title for n in source.notes}

    def test_edit_loads_and_updates(self, source):
        note = source.notes[0]
        edit = EditNoteScreen(source, note.id, note.hero_tag)
        assert edit.title_edit.text() == note.title
        edit.content_edit.setPlainText("changed")
        edit.save()
        assert source.get_note(note.id).content == "changed"

    def test_edit_delete_confirmed(self, source):
        note = source.notes[0]
        edit = EditNoteScreen(source, note.id, note.hero_tag)
        closed = Mock()
        edit.closed.connect(closed)
        edit.delete(confirmed=True)
        closed.assert_called_once_with()
        assert source.get_note(note.id) is None

    def test_second_save_is_ignored(self, source):
        add = AddNoteScreen(source)
        closed = Mock()
        add.closed.connect(closed)
        add.title_edit.setText("Once")
        add.save()
        add.save()
        add.cancel()
        closed.assert_called_once_with()
        assert add.is_done
        assert not add.isEnabled()
        source.load_now()
        assert [n.title for n in source.notes].count("Once") == 1

    def test_edit_delete_after_save_is_ignored(self, source):
        note = source.notes[0]
        edit = EditNoteScreen(source, note.id, note.hero_tag)
        edit.content_edit.setPlainText("kept")
        edit.save()
        edit.delete(confirmed=True)
        assert source.get_note(note.id).content == "kept"

    def test_edit_missing_note_disables_form(self, source):
        edit = EditNoteScreen(source, 12345, "note-12345")
        assert edit.note is None
        assert not edit.save_button.isEnabled()
        assert not edit.delete_button.isEnabled()


class TestSettingsScreen:
    def test_backup_uses_note_records(self, source):
        prompt = Mock(return_value="/tmp/backup.json")
        settings = SettingsScreen(source, save_prompt=prompt)
        assert settings.run_backup() is True
        data = prompt.call_args[0][3]
        assert json.loads(data.decode("utf-8")) == [n.to_record() for n in source.notes]

    def test_backup_with_no_notes(self, qapp, db_path):
        src = NotesSource(db_path)
        src.load_now()
        prompt = Mock()
        assert SettingsScreen(src, save_prompt=prompt).run_backup() is False
        prompt.assert_not_called()

    def test_restore_inserts_notes(self, source):
        payload = json.dumps([{"title": "Restored", "content": "from file"}]).encode("utf-8")
        settings = SettingsScreen(source, open_prompt=Mock(return_value=payload))
        assert settings.run_restore() == 1
        source.load_now()
        assert "Restored" in {n.title for n in source.notes}

    def test_restore_cancelled_inserts_nothing(self, source):
        settings = SettingsScreen(source, open_prompt=Mock(return_value=None))
        assert settings.run_restore() == 0
        source.load_now()
        assert len(source.notes) == 2
