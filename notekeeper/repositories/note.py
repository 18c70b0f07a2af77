"""
Note Repository.

Reconciliation layer between the remote store and the local cache.
Owns the in-memory note list and is its only writer.

- refresh() fetches the list; on success it replaces the list and
  mirrors it to the cache, on RemoteUnavailable it serves the cached
  snapshot in DEGRADED state.
- save() and remove() never touch the list directly: after a
  successful write the authoritative list comes from a refresh().
- query() is a pure view over the current list.

Concurrent refreshes: the last completed response wins, whatever the
issue order.
"""

import asyncio
from collections import Counter
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from notekeeper.cache.local import LocalCache
from notekeeper.core.exceptions import (
    CacheError,
    NotFoundError,
    RemoteUnavailable,
    UploadFailed,
    ValidationError,
)
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.remote.client import NotesAPIClient
from notekeeper.repositories.query import query_notes
from notekeeper.repositories.state import RepositoryState
from notekeeper.schemas.note import Draft, Note, NoteForm, NoteInput, SortMode

logger = get_logger(__name__)


class NoteRepository:
    """
    Client-side note state manager.

    Usage:
        repo = NoteRepository(NotesAPIClient(), LocalCache(path))
        state = await repo.refresh()
        note = await repo.save(NoteForm(title="Plan", content="..."))
        view = repo.query("plan", "newest")
    """

    def __init__(
        self,
        remote: NotesAPIClient,
        cache: LocalCache,
        max_content_length: int | None = None,
    ) -> None:
        """
        Args:
            remote: Remote store adapter
            cache: Local cache for snapshots and drafts
            max_content_length: Content beyond this length is truncated on
                save and on draft writes. None means unbounded.
        """
        self.remote = remote
        self.cache = cache
        self.max_content_length = max_content_length
        self._state = RepositoryState()
        self._completions = 0
        self._snapshot_lock = asyncio.Lock()
        self._save_locks: dict[str, asyncio.Lock] = {}
        self._save_lock_users: Counter[str] = Counter()

    @property
    def state(self) -> RepositoryState:
        """Current immutable state."""
        return self._state

    @property
    def notes(self) -> tuple[Note, ...]:
        """Notes currently held in memory."""
        return self._state.notes

    def get(self, note_id: str) -> Note | None:
        """Look up a note in the current list."""
        for note in self._state.notes:
            if note.id == note_id:
                return note
        return None

    # -------------------------------------------------------------------------
    # Fetch cycle
    # -------------------------------------------------------------------------

    async def refresh(self) -> RepositoryState:
        """
        Fetch the note list from the remote store.

        Never raises RemoteUnavailable: a failed fetch degrades to the
        cached snapshot (or an empty list) and is reported through the
        returned state. Any other exception releases the fetch slot
        before propagating.
        """
        self._state = self._state.fetch_started()
        settled = False
        try:
            try:
                notes = await self.remote.list_notes()
            except RemoteUnavailable as e:
                ticket = self._complete()
                snapshot = await self._load_snapshot_or_none()
                settled = True
                if ticket != self._completions:
                    self._state = self._state.fetch_superseded()
                    return self._state

                self._state = self._state.fetch_failed(snapshot, e.message)
                log_with_source(
                    logger,
                    "repository",
                    "warning",
                    "Remote store unavailable, serving cached notes",
                    cached=snapshot is not None,
                    count=len(self._state.notes),
                    error=e.message,
                )
                return self._state

            ticket = self._complete()
            self._state = self._state.fetch_succeeded(notes)
            settled = True
        except BaseException as e:
            if not settled:
                self._state = self._state.fetch_aborted(str(e) or type(e).__name__)
                log_with_source(
                    logger, "repository", "error", "Note fetch aborted", error=repr(e)
                )
            raise

        log_with_source(logger, "repository", "debug", "Notes loaded", count=len(notes))
        await self._mirror_snapshot(notes, ticket)
        return self._state

    def _complete(self) -> int:
        self._completions += 1
        return self._completions

    async def _mirror_snapshot(self, notes: list[Note], ticket: int) -> None:
        # Writes are ordered; a completion that has been overtaken is not written
        async with self._snapshot_lock:
            if ticket != self._completions:
                return
            try:
                await self.cache.save_snapshot(notes)
            except CacheError as e:
                log_with_source(
                    logger, "repository", "error", "Could not mirror notes to cache", error=e.message
                )

    async def _load_snapshot_or_none(self) -> list[Note] | None:
        try:
            return await self.cache.load_snapshot()
        except CacheError as e:
            log_with_source(
                logger, "repository", "error", "Could not read cached notes", error=e.message
            )
            return None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def _truncate(self, content: str) -> str:
        if self.max_content_length is None:
            return content
        return content[: self.max_content_length]

    def _validate_required(self, fields: dict[str, Any], field_names: list[str]) -> None:
        """
        Validate that required fields are present and not blank.

        Raises:
            ValidationError: If any required field is missing or empty
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            raise ValidationError(
                "Title and content are both required",
                details={"missing_fields": missing},
            )

    def _build_input(self, form: NoteForm, image_url: str | None) -> NoteInput:
        try:
            return NoteInput(
                title=form.title,
                content=self._truncate(form.content),
                tag=form.tag or None,
                reminder=form.reminder,
                color=form.color,
                image=image_url,
                pinned=form.pinned,
            )
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid note",
                details={
                    ".".join(str(part) for part in error["loc"]): error["msg"]
                    for error in e.errors()
                },
            ) from e

    async def save(self, form: NoteForm, existing_id: str | None = None) -> Note:
        """
        Create a note, or fully replace `existing_id`.

        Validation happens before any network call. An attached image is
        uploaded first; its failure aborts the save. On success the list is
        refreshed from the remote store.

        Raises:
            ValidationError: Blank title/content or malformed field
            UploadFailed: The image upload failed; nothing was written
            RemoteUnavailable: Create/update failed; the list is unchanged
        """
        self._validate_required(
            {"title": form.title, "content": form.content},
            ["title", "content"],
        )
        # Checks color and the other fields before uploading anything
        self._build_input(form, form.image_url)

        if existing_id is None:
            return await self._write(form, None)
        async with self._note_lock(existing_id):
            return await self._write(form, existing_id)

    @asynccontextmanager
    async def _note_lock(self, note_id: str) -> AsyncIterator[None]:
        """Serialize writes to one note; the lock is dropped once unused."""
        lock = self._save_locks.setdefault(note_id, asyncio.Lock())
        self._save_lock_users[note_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._save_lock_users[note_id] -= 1
            if not self._save_lock_users[note_id]:
                del self._save_lock_users[note_id]
                del self._save_locks[note_id]

    async def _write(self, form: NoteForm, existing_id: str | None) -> Note:
        image_url = form.image_url
        if form.image is not None:
            try:
                image_url = await self.remote.upload_image(
                    form.image.data,
                    filename=form.image.filename,
                    content_type=form.image.content_type,
                )
            except RemoteUnavailable as e:
                log_with_source(
                    logger, "repository", "warning", "Image upload failed", error=e.message
                )
                raise UploadFailed(f"Image upload failed: {e.message}") from e

        data = self._build_input(form, image_url)

        if existing_id is None:
            log_with_source(logger, "repository", "info", "Creating note", title=data.title)
            note = await self.remote.create_note(data)
        else:
            log_with_source(logger, "repository", "info", "Updating note", note_id=existing_id)
            note = await self.remote.update_note(existing_id, data)

        await self.refresh()
        return note

    async def remove(self, note_id: str) -> None:
        """
        Delete a note, then refresh.

        Callers are expected to have asked the user for confirmation.

        Raises:
            RemoteUnavailable: The delete failed; the list is unchanged
        """
        log_with_source(logger, "repository", "info", "Deleting note", note_id=note_id)
        await self.remote.delete_note(note_id)
        await self.refresh()

    async def set_pinned(self, note_id: str, pinned: bool = True) -> Note:
        """
        Pin or unpin a note held in the current list.

        Implemented as a full-field update of the note as currently held.

        Raises:
            NotFoundError: The id is not in the current list
            RemoteUnavailable: The update failed
        """
        note = self.get(note_id)
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        form = NoteForm.from_note(note).model_copy(update={"pinned": pinned})
        return await self.save(form, existing_id=note_id)

    # -------------------------------------------------------------------------
    # Draft
    # -------------------------------------------------------------------------

    async def set_draft(self, title: str, content: str) -> Draft:
        """Write the form's title and content through to the cache."""
        draft = Draft(title=title, content=self._truncate(content))
        await self.cache.save_draft(draft.title, draft.content)
        return draft

    async def load_draft(self) -> Draft | None:
        """Restore the draft saved by a previous run, if any."""
        return await self.cache.load_draft()

    async def clear_draft(self) -> None:
        """Reset the draft, as the form is reset after a successful save."""
        await self.cache.save_draft("", "")

    # -------------------------------------------------------------------------
    # Query
    # -------------------------------------------------------------------------

    def query(
        self,
        search: str = "",
        sort: "str | SortMode | None" = SortMode.NEWEST,
    ) -> list[Note]:
        """Filtered, sorted view of the current list. Never mutates state."""
        return query_notes(self._state.notes, search, sort)
