"""
Shared fixtures: headless Qt, an isolated settings directory, and temp databases.
"""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(scope="session")
def qapp():
    from PyQt5 import QtWidgets

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Point the settings file and settings directory at a temp folder."""
    import settings_manager

    cfg = tmp_path_factory.mktemp("config")
    monkeypatch.setattr(settings_manager, "_default_settings_dir", lambda: str(cfg))
    monkeypatch.setattr(settings_manager, "_CACHED_SETTINGS_PATH", None)
    monkeypatch.delenv(settings_manager.LOG_LEVEL_ENV, raising=False)
    return cfg


@pytest.fixture
def db_path(tmp_path):
    from db_notes import migrate_database_if_needed

    path = str(tmp_path / "notes.db")
    migrate_database_if_needed(path)
    return path


@pytest.fixture
def seeded_db(db_path):
    from db_notes import create_note

    create_note("Groceries", "milk, eggs", db_path)
    create_note("Ideas", "write a notes app", db_path)
    return db_path


class FakeNavigator:
    """Records pushes; dismiss() plays the role of the pushed screen closing."""

    def __init__(self):
        self.pushed = []

    def push(self, screen, transition="plain", on_dismissed=None):
        self.pushed.append((screen, transition, on_dismissed))

    def dismiss(self):
        screen, _transition, on_dismissed = self.pushed.pop()
        if on_dismissed is not None:
            on_dismissed()
        return screen


@pytest.fixture
def navigator():
    return FakeNavigator()
