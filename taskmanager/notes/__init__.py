"""JSON-file-backed notes used by the ``taskmanager notes`` commands."""

from .store import DuplicateNoteError, Note, NoteNotFoundError, NotesStore

__all__ = ["DuplicateNoteError", "Note", "NoteNotFoundError", "NotesStore"]
