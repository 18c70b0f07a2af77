"""
Note Schemas.

Pydantic schemas for notes read from the remote store, the payload sent
on create/update, the editable form state and the unsaved draft.

The remote store names the identifier `_id` and the creation time
`createdAt`. Both spellings are accepted on input; dumps with
`by_alias=True` use the remote spelling.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_COLOR = "#ffffff"
HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Note(BaseModel):
    """A note as held by the remote store."""

    id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
        description="Identifier assigned by the remote store",
    )
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    tag: str | None = Field(default=None, description="Free-text label")
    color: str = Field(default=DEFAULT_COLOR, description="Display color as hex string")
    reminder: datetime | None = Field(default=None, description="Local reminder time")
    image: str | None = Field(default=None, description="URL of an uploaded image")
    pinned: bool = Field(default=False, description="Whether the note is pinned")
    created_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
        description="Creation timestamp assigned by the remote store",
    )

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("tag", "reminder", "image", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("color", mode="before")
    @classmethod
    def _default_color(cls, value: Any) -> Any:
        return _blank_to_none(value) or DEFAULT_COLOR

    @field_validator("pinned", mode="before")
    @classmethod
    def _default_pinned(cls, value: Any) -> Any:
        return False if value is None else value


class NoteInput(BaseModel):
    """
    Payload for create and update.

    Update is a full-field replace, so every field is always sent.
    """

    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    tag: str | None = None
    reminder: datetime | None = None
    color: str = Field(default=DEFAULT_COLOR, pattern=HEX_COLOR_PATTERN)
    image: str | None = None
    pinned: bool = False

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the request body."""
        return self.model_dump(mode="json")


class ImageUpload(BaseModel):
    """Raw image bytes attached to a form, uploaded before the note is saved."""

    data: bytes
    filename: str = "image"
    content_type: str = "application/octet-stream"


class NoteForm(BaseModel):
    """
    Editable state of the create/edit form.

    Nothing is validated here; NoteRepository.save checks the form
    before any network call.
    """

    title: str = ""
    content: str = ""
    tag: str = ""
    reminder: datetime | None = None
    color: str = DEFAULT_COLOR
    pinned: bool = False
    image_url: str | None = None
    image: ImageUpload | None = None

    @field_validator("reminder", "image_url", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @classmethod
    def from_note(cls, note: Note) -> "NoteForm":
        """Pre-fill the form from an existing note for editing."""
        return cls(
            title=note.title,
            content=note.content,
            tag=note.tag or "",
            reminder=note.reminder,
            color=note.color,
            pinned=note.pinned,
            image_url=note.image,
        )


class Draft(BaseModel):
    """Unsaved title/content pair mirrored to the local cache."""

    title: str = ""
    content: str = ""


class SortMode(str, Enum):
    """Sort orders understood by the note query."""

    NEWEST = "newest"
    OLDEST = "oldest"
    PINNED_FIRST = "pinnedFirst"

    @classmethod
    def parse(cls, value: "str | SortMode | None") -> "SortMode | None":
        """Resolve a sort mode name. Unknown names return None (insertion order)."""
        if isinstance(value, SortMode):
            return value
        if not value:
            return None
        return _SORT_ALIASES.get(value.strip().lower())


_SORT_ALIASES = {
    "newest": SortMode.NEWEST,
    "oldest": SortMode.OLDEST,
    "pinnedfirst": SortMode.PINNED_FIRST,
    "pinned_first": SortMode.PINNED_FIRST,
    "pinned-first": SortMode.PINNED_FIRST,
    "pinned": SortMode.PINNED_FIRST,
}
