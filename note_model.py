"""
note_model.py
The Note type shared by the store, the screens and the backup helper.

A note is persisted as a row in the notes table and exported as a flat
"record": a dict mapping string keys to string values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

RECORD_FIELDS = ("id", "title", "content", "created_at", "modified_at")


class BackupFormatError(ValueError):
    """Raised when backup data is not a list of flat string mappings."""


@dataclass(frozen=True)
class Note:
    id: int
    title: str
    content: str = ""
    created_at: str = ""
    modified_at: str = ""

    @property
    def hero_tag(self) -> str:
        # Correlates the list row with the editor opened for it
        return f"note-{self.id}"

    @property
    def display_title(self) -> str:
        title = (self.title or "").strip()
        if title:
            return title
        first_line = (self.content or "").strip().splitlines()
        return first_line[0][:60] if first_line else "Untitled"

    def to_record(self) -> Dict[str, str]:
        return {
            "id": str(self.id),
            "title": self.title or "",
            "content": self.content or "",
            "created_at": self.created_at or "",
            "modified_at": self.modified_at or "",
        }

    @classmethod
    def from_row(cls, row) -> "Note":
        """Build a Note from a sqlite3.Row (or any mapping with the record fields)."""
        return cls(
            id=int(row["id"]),
            title=row["title"] or "",
            content=row["content"] or "",
            created_at=row["created_at"] or "",
            modified_at=row["modified_at"] or "",
        )

    def matches(self, query: str) -> bool:
        q = (query or "").strip().lower()
        if not q:
            return True
        return q in (self.title or "").lower() or q in (self.content or "").lower()


def validate_record(obj) -> Dict[str, str]:
    """Return obj unchanged if it is a flat str -> str mapping, else raise BackupFormatError."""
    if not isinstance(obj, dict):
        raise BackupFormatError(f"expected an object, got {type(obj).__name__}")
    for key, value in obj.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise BackupFormatError(f"field {key!r} is not a string value")
    return obj
