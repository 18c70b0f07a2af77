"""
Note Query.

Pure search and sort over an in-memory note list. Nothing here touches
the network or the cache, and the input sequence is never modified.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from notekeeper.core.utils import as_utc
from notekeeper.schemas.note import Note, SortMode

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def matches(note: Note, search: str) -> bool:
    """Case-insensitive substring match over title, content and tag."""
    if not search:
        return True
    term = search.lower()
    return (
        term in note.title.lower()
        or term in note.content.lower()
        or term in (note.tag or "").lower()
    )


def _created_key(note: Note) -> datetime:
    # Notes without a creation time sort as the earliest instant
    return as_utc(note.created_at) if note.created_at else _EARLIEST


def sort_notes(notes: Iterable[Note], sort: "str | SortMode | None") -> list[Note]:
    """
    Order notes by sort mode.

    newest and oldest order by creation time; pinnedFirst is a stable
    partition with pinned notes first. Unknown modes keep insertion order.
    """
    mode = SortMode.parse(sort)
    ordered = list(notes)
    if mode is SortMode.NEWEST:
        ordered.sort(key=_created_key, reverse=True)
    elif mode is SortMode.OLDEST:
        ordered.sort(key=_created_key)
    elif mode is SortMode.PINNED_FIRST:
        ordered.sort(key=lambda note: not note.pinned)
    return ordered


def query_notes(
    notes: Sequence[Note],
    search: str = "",
    sort: "str | SortMode | None" = SortMode.NEWEST,
) -> list[Note]:
    """Filter by search term, then sort. Returns a new list."""
    return sort_notes((note for note in notes if matches(note, search)), sort)
