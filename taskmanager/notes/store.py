"""
Notes store.

Notes live in a single JSON file holding an array of ``{"title", "body"}``
objects. Titles are unique. Every mutation rewrites the whole file; a missing
or unreadable file is treated as an empty notebook.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from taskmanager.core.logging_config import get_logger

logger = get_logger(__name__)


class Note(BaseModel):
    title: str
    body: str


_NOTES_ADAPTER = TypeAdapter(List[Note])


class DuplicateNoteError(Exception):
    """Raised when adding a note whose title is already taken."""


class NoteNotFoundError(Exception):
    """Raised when no note has the requested title."""


class NotesStore:
    """Read and write notes kept in a JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load_notes(self) -> List[Note]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        try:
            return _NOTES_ADAPTER.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable notes file {self.path}: {e}")
            return []

    def save_notes(self, notes: List[Note]) -> None:
        self.path.write_text(json.dumps([note.model_dump() for note in notes]), encoding="utf-8")

    def add_note(self, title: str, body: str) -> Note:
        """Append a note.

        Raises:
            DuplicateNoteError: If a note with this title already exists.
        """
        notes = self.load_notes()
        if any(note.title == title for note in notes):
            raise DuplicateNoteError(title)
        note = Note(title=title, body=body)
        notes.append(note)
        self.save_notes(notes)
        logger.debug(f"Added note {title!r}")
        return note

    def remove_note(self, title: str) -> Note:
        """Remove the note with this title and return it.

        Raises:
            NoteNotFoundError: If no note has this title.
        """
        notes = self.load_notes()
        notes_to_keep = [note for note in notes if note.title != title]
        if len(notes_to_keep) == len(notes):
            raise NoteNotFoundError(title)
        self.save_notes(notes_to_keep)
        logger.debug(f"Removed note {title!r}")
        return next(note for note in notes if note.title == title)

    def read_note(self, title: str) -> Note:
        for note in self.load_notes():
            if note.title == title:
                return note
        raise NoteNotFoundError(title)

    def list_notes(self) -> List[Note]:
        return self.load_notes()
