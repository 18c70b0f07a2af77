"""
Unit Tests for Note Schemas.

Reading remote payloads, building forms and resolving sort modes.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from notekeeper.schemas.note import DEFAULT_COLOR, Note, NoteForm, NoteInput, SortMode


class TestNote:
    """Tests for notes read from the remote store."""

    def test_reads_remote_field_names(self):
        note = Note.model_validate({
            "_id": "abc",
            "title": "T",
            "content": "C",
            "createdAt": "2025-03-01T10:00:00Z",
        })

        assert note.id == "abc"
        assert note.created_at == datetime.fromisoformat("2025-03-01T10:00:00+00:00")

    def test_accepts_python_field_names(self):
        note = Note(id="abc", title="T", content="C", created_at=datetime(2025, 3, 1))

        assert note.id == "abc"
        assert note.created_at == datetime(2025, 3, 1)

    def test_defaults(self):
        note = Note.model_validate({"title": "T", "content": "C", "color": None, "pinned": None})

        assert note.id is None
        assert note.color == DEFAULT_COLOR
        assert note.pinned is False
        assert note.tag is None

    def test_blank_optional_fields_are_absent(self):
        note = Note.model_validate({
            "title": "T", "content": "C", "tag": "", "reminder": "", "image": " ",
        })

        assert note.tag is None
        assert note.reminder is None
        assert note.image is None

    def test_reads_datetime_local_reminder(self):
        note = Note.model_validate({"title": "T", "content": "C", "reminder": "2025-10-19T18:30"})

        assert note.reminder == datetime(2025, 10, 19, 18, 30)

    def test_dump_by_alias_uses_remote_names(self):
        dumped = Note(id="abc", title="T", content="C").model_dump(mode="json", by_alias=True)

        assert dumped["_id"] == "abc"
        assert "createdAt" in dumped

    def test_is_frozen(self):
        note = Note(title="T", content="C")

        with pytest.raises(ValidationError):
            note.title = "changed"


class TestNoteInput:
    """Tests for the create/update payload."""

    def test_payload_contains_every_field(self):
        payload = NoteInput(title="T", content="C").to_payload()

        assert set(payload) == {"title", "content", "tag", "reminder", "color", "image", "pinned"}

    @pytest.mark.parametrize("color", ["#fff", "#A0b1C2"])
    def test_accepts_hex_colors(self, color):
        assert NoteInput(title="T", content="C", color=color).color == color

    @pytest.mark.parametrize("color", ["red", "#12345", "ffffff"])
    def test_rejects_other_colors(self, color):
        with pytest.raises(ValidationError):
            NoteInput(title="T", content="C", color=color)


class TestNoteForm:
    """Tests for the editable form."""

    def test_from_note_prefills_every_field(self, make_note):
        note = make_note(
            "n1", title="T", content="C", tag="Work", color="#abcdef",
            reminder="2025-10-19T18:30", image="https://x/y.png", pinned=True,
        )

        form = NoteForm.from_note(note)

        assert form.title == "T"
        assert form.tag == "Work"
        assert form.color == "#abcdef"
        assert form.reminder == datetime(2025, 10, 19, 18, 30)
        assert form.image_url == "https://x/y.png"
        assert form.pinned is True
        assert form.image is None

    def test_from_note_without_tag(self, make_note):
        assert NoteForm.from_note(make_note("n1")).tag == ""

    def test_blank_reminder_is_none(self):
        assert NoteForm(reminder="").reminder is None


class TestSortMode:
    """Tests for sort mode names."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("newest", SortMode.NEWEST),
            ("oldest", SortMode.OLDEST),
            ("pinnedFirst", SortMode.PINNED_FIRST),
            ("pinned", SortMode.PINNED_FIRST),
            (SortMode.OLDEST, SortMode.OLDEST),
        ],
    )
    def test_known_modes(self, value, expected):
        assert SortMode.parse(value) is expected

    @pytest.mark.parametrize("value", ["", None, "random"])
    def test_unknown_modes(self, value):
        assert SortMode.parse(value) is None
