"""
Tests for navigator.py.
"""

from unittest.mock import Mock

from PyQt5 import QtWidgets
from PyQt5.QtCore import pyqtSignal

from add_note_screen import AddNoteScreen
from navigator import TRANSITION_PLAIN, TRANSITION_SLIDE, StackNavigator
from notes_source import NotesSource


class ClosableScreen(QtWidgets.QWidget):
    closed = pyqtSignal()


class TestStackNavigator:
    def test_push_shows_screen(self, qapp):
        root = QtWidgets.QWidget()
        nav = StackNavigator(root)
        screen = ClosableScreen()
        nav.push(screen, TRANSITION_PLAIN)
        assert nav.currentWidget() is screen
        assert nav.depth == 1
        assert nav.top() is screen

    def test_closed_signal_dismisses_and_notifies(self, qapp):
        root = QtWidgets.QWidget()
        nav = StackNavigator(root)
        on_dismissed = Mock()
        screen = ClosableScreen()
        nav.push(screen, TRANSITION_PLAIN, on_dismissed=on_dismissed)

        on_dismissed.assert_not_called()
        screen.closed.emit()

        on_dismissed.assert_called_once_with()
        assert nav.depth == 0
        assert nav.currentWidget() is root

    def test_dismiss_only_once(self, qapp):
        nav = StackNavigator(QtWidgets.QWidget())
        on_dismissed = Mock()
        screen = ClosableScreen()
        nav.push(screen, TRANSITION_PLAIN, on_dismissed=on_dismissed)
        screen.closed.emit()
        screen.closed.emit()
        nav.pop()
        on_dismissed.assert_called_once_with()

    def test_slide_push_and_pop_when_hidden(self, qapp):
        root = QtWidgets.QWidget()
        nav = StackNavigator(root)
        on_dismissed = Mock()
        nav.push(ClosableScreen(), TRANSITION_SLIDE, on_dismissed=on_dismissed)
        assert nav.depth == 1
        nav.pop()
        on_dismissed.assert_called_once_with()
        assert nav.currentWidget() is root

    def test_pop_on_empty_stack_is_noop(self, qapp):
        nav = StackNavigator(QtWidgets.QWidget())
        nav.pop()
        assert nav.depth == 0

    def test_screen_sliding_out_takes_no_second_save(self, qapp, db_path):
        """Saving twice while the slide-out runs stores the note once."""
        source = NotesSource(db_path)
        nav = StackNavigator(QtWidgets.QWidget())
        nav.resize(300, 200)
        nav.show()
        screen = AddNoteScreen(source)
        nav.push(screen, TRANSITION_SLIDE)

        screen.title_edit.setText("Once")
        screen.save()
        assert nav.depth == 1
        assert not screen.isEnabled()
        screen.save()

        source.load_now()
        assert [n.title for n in source.notes] == ["Once"]
        nav.hide()
