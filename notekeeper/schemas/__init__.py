"""
Schemas Module.

Pydantic models for notes, note forms and drafts.
"""

from notekeeper.schemas.note import (
    DEFAULT_COLOR,
    Draft,
    ImageUpload,
    Note,
    NoteForm,
    NoteInput,
    SortMode,
)

__all__ = [
    "DEFAULT_COLOR",
    "Draft",
    "ImageUpload",
    "Note",
    "NoteForm",
    "NoteInput",
    "SortMode",
]
