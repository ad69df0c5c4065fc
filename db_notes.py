"""
db_notes.py
Provides functions to create, read, update and delete notes in the SQLite database.
"""
import logging
import sqlite3
from typing import Iterable, List, Optional

from note_model import Note

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _connect(db_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path, timeout=10.0)
    conn.row_factory = sqlite3.Row
    return conn


def get_db_version(db_path: str) -> int:
    conn = sqlite3.connect(db_path)
    try:
        return int(conn.execute("PRAGMA user_version").fetchone()[0])
    finally:
        conn.close()


def set_db_version(version: int, db_path: str):
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(f"PRAGMA user_version = {int(version)}")
        conn.commit()
    finally:
        conn.close()


def ensure_schema(db_path: str):
    conn = sqlite3.connect(db_path)
    try:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS notes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL DEFAULT '',
                content TEXT NOT NULL DEFAULT '',
                created_at TEXT NOT NULL DEFAULT (datetime('now')),
                modified_at TEXT NOT NULL DEFAULT (datetime('now'))
            );
            CREATE INDEX IF NOT EXISTS idx_notes_modified ON notes(modified_at);
            """
        )
        conn.commit()
    finally:
        conn.close()


def migrate_database_if_needed(db_path: str):
    """Bring the database at db_path up to SCHEMA_VERSION, creating it if missing."""
    ensure_schema(db_path)
    current_version = get_db_version(db_path)
    if current_version < 1:
        # baseline
        set_db_version(1, db_path)
        current_version = 1
    if current_version != SCHEMA_VERSION:
        logger.warning("Database %s has schema version %s (expected %s)", db_path, current_version, SCHEMA_VERSION)


def get_notes(db_path: str) -> List[Note]:
    conn = _connect(db_path)
    try:
        rows = conn.execute(
            "SELECT id, title, content, created_at, modified_at FROM notes ORDER BY modified_at DESC, id DESC"
        ).fetchall()
        return [Note.from_row(r) for r in rows]
    finally:
        conn.close()


def get_note_by_id(note_id: int, db_path: str) -> Optional[Note]:
    conn = _connect(db_path)
    try:
        row = conn.execute(
            "SELECT id, title, content, created_at, modified_at FROM notes WHERE id = ?",
            (int(note_id),),
        ).fetchone()
        return Note.from_row(row) if row else None
    finally:
        conn.close()


def create_note(title: str, content: str, db_path: str) -> int:
    """Create a new note and return its id."""
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO notes (title, content) VALUES (?, ?)",
            (title or "", content or ""),
        )
        conn.commit()
        return cur.lastrowid
    finally:
        conn.close()


def update_note(note_id: int, title: str, content: str, db_path: str):
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            "UPDATE notes SET title = ?, content = ?, modified_at = datetime('now') WHERE id = ?",
            (title or "", content or "", int(note_id)),
        )
        conn.commit()
    finally:
        conn.close()


def delete_note(note_id: int, db_path: str):
    conn = sqlite3.connect(db_path)
    try:
        conn.execute("DELETE FROM notes WHERE id = ?", (int(note_id),))
        conn.commit()
    finally:
        conn.close()


def insert_records(records: Iterable[dict], db_path: str) -> int:
    """Insert restored note records as new notes in a single transaction.

    Ids in the records are ignored; timestamps are kept when present. Either every
    record is inserted or none is. Returns the number of notes inserted.
    """
    conn = sqlite3.connect(db_path)
    count = 0
    try:
        with conn:
            for rec in records:
                created = rec.get("created_at") or None
                modified = rec.get("modified_at") or created
                conn.execute(
                    """
                    INSERT INTO notes (title, content, created_at, modified_at)
                    VALUES (?, ?, COALESCE(?, datetime('now')), COALESCE(?, datetime('now')))
                    """,
                    (rec.get("title", ""), rec.get("content", ""), created, modified),
                )
                count += 1
    finally:
        conn.close()
    return count
