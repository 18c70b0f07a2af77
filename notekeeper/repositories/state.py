"""
Repository State.

Immutable snapshot of what the note repository holds. Every change goes
through a transition method returning a new instance; nothing is mutated
in place.

Fetch cycle:
    IDLE -> LOADING -> LOADED | DEGRADED
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from notekeeper.schemas.note import Note


class LoadStatus(str, Enum):
    """Where the repository is in the list-fetch cycle."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    DEGRADED = "degraded"


class RepositoryState(BaseModel):
    """
    Note list plus fetch status.

    `pending` counts list requests still in flight. The status only
    leaves LOADING once every request has completed; the note list is
    replaced by each completion as it lands.
    """

    status: LoadStatus = LoadStatus.IDLE
    notes: tuple[Note, ...] = ()
    pending: int = Field(default=0, ge=0)
    from_cache: bool = False
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_degraded(self) -> bool:
        return self.status is LoadStatus.DEGRADED

    def fetch_started(self) -> "RepositoryState":
        return self.model_copy(update={
            "status": LoadStatus.LOADING,
            "pending": self.pending + 1,
        })

    def _completed(self, outcome: LoadStatus) -> LoadStatus:
        return LoadStatus.LOADING if self.pending > 1 else outcome

    def fetch_succeeded(self, notes: list[Note]) -> "RepositoryState":
        return self.model_copy(update={
            "status": self._completed(LoadStatus.LOADED),
            "notes": tuple(notes),
            "pending": max(self.pending - 1, 0),
            "from_cache": False,
            "error": None,
        })

    def fetch_failed(self, snapshot: list[Note] | None, error: str) -> "RepositoryState":
        """Serve the cached snapshot, or nothing when there is no snapshot."""
        return self.model_copy(update={
            "status": self._completed(LoadStatus.DEGRADED),
            "notes": tuple(snapshot or ()),
            "pending": max(self.pending - 1, 0),
            "from_cache": snapshot is not None,
            "error": error,
        })

    def fetch_superseded(self) -> "RepositoryState":
        """A completion that lost to a later one still releases its slot."""
        pending = max(self.pending - 1, 0)
        update: dict = {"pending": pending}
        if pending == 0 and self.status is LoadStatus.LOADING:
            update["status"] = LoadStatus.DEGRADED if self.error else LoadStatus.LOADED
        return self.model_copy(update=update)

    def fetch_aborted(self, error: str) -> "RepositoryState":
        """
        Release the slot of a fetch that ended without an outcome.

        The list is kept as it is. Once nothing else is in flight the
        repository settles DEGRADED with the error.
        """
        pending = max(self.pending - 1, 0)
        update: dict = {"pending": pending}
        if pending == 0:
            update["status"] = LoadStatus.DEGRADED
            update["error"] = error
        return self.model_copy(update=update)
