"""
Tests for app_logging.py.
"""

import logging
import os

import pytest

import app_logging


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    app_logging._configured = False
    yield root
    for h in root.handlers:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    app_logging._configured = False


def test_configure_logging_writes_log_file(clean_root, tmp_path):
    app_logging.configure_logging("DEBUG", log_dir=str(tmp_path))
    assert clean_root.level == logging.DEBUG
    logging.getLogger("pocketnotes.test").info("hello file")
    for h in clean_root.handlers:
        h.flush()
    with open(os.path.join(str(tmp_path), app_logging.LOG_FILE_NAME), encoding="utf-8") as f:
        assert "hello file" in f.read()


def test_configure_logging_is_idempotent(clean_root, tmp_path):
    app_logging.configure_logging("INFO", log_dir=str(tmp_path))
    count = len(clean_root.handlers)
    app_logging.configure_logging("WARNING", log_dir=str(tmp_path))
    assert len(clean_root.handlers) == count
    assert clean_root.level == logging.WARNING
