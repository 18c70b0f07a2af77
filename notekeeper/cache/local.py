"""
Local Cache.

Durable key-value persistence for the last known note list, the unsaved
draft and the session flag, stored in a SQLite file through SQLAlchemy's
asyncio extension. Uses lazy initialization: the engine and table are
created on first use.

Absence of a stored value is not an error; readers get None.

Usage:
    cache = LocalCache(get_cache_path())
    await cache.save_snapshot(notes)
    snapshot = await cache.load_snapshot()
    await cache.close()
"""

import asyncio
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from notekeeper.cache.models import Base, CacheEntry
from notekeeper.core.exceptions import CacheError
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.core.utils import utc_now
from notekeeper.schemas.note import Draft, Note

logger = get_logger(__name__)

NOTES_KEY = "notes"
DRAFT_KEY = "draft"
SESSION_KEY = "sessionAuthenticated"

_NOTE_LIST = TypeAdapter(list[Note])


class LocalCache:
    """
    Keyed, last-write-wins local storage.

    One instance per cache file. Instances opened on the same file see
    each other's writes, which is what makes drafts and snapshots survive
    a process restart.
    """

    def __init__(self, path: str | Path, echo: bool = False) -> None:
        """
        Args:
            path: SQLite database file. Parent directories are created on first use.
            echo: Echo SQL statements (debugging only).
        """
        self.path = Path(path)
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._init_lock = asyncio.Lock()

    async def _get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            async with self._init_lock:
                if self._session_factory is None:
                    await self._open()
        return self._session_factory

    async def _open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log_with_source(
                logger, "cache", "error", "Cache directory unavailable",
                path=str(self.path.parent), error=str(e),
            )
            raise CacheError(f"Could not create cache directory {self.path.parent}") from e

        engine = create_async_engine(
            f"sqlite+aiosqlite:///{self.path}",
            echo=self.echo,
        )
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            await engine.dispose()
            log_with_source(
                logger, "cache", "error", "Cache open failed", path=str(self.path), error=str(e)
            )
            raise CacheError(f"Could not open local cache at {self.path}") from e

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        log_with_source(logger, "cache", "debug", "Local cache opened", path=str(self.path))

    async def close(self) -> None:
        """Dispose of the engine. The instance can be reopened by using it again."""
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    # -------------------------------------------------------------------------
    # Generic key-value access
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Read a value. Returns None when the key was never written."""
        factory = await self._get_session_factory()
        try:
            async with factory() as session:
                result = await session.execute(
                    select(CacheEntry.value).where(CacheEntry.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            log_with_source(logger, "cache", "error", "Cache read failed", key=key, error=str(e))
            raise CacheError(f"Could not read {key!r} from local cache") from e

    async def set(self, key: str, value: Any) -> None:
        """Write a value, replacing whatever was stored under the key."""
        factory = await self._get_session_factory()
        try:
            async with factory() as session:
                await session.merge(CacheEntry(key=key, value=value, updated_at=utc_now()))
                await session.commit()
        except SQLAlchemyError as e:
            log_with_source(logger, "cache", "error", "Cache write failed", key=key, error=str(e))
            raise CacheError(f"Could not write {key!r} to local cache") from e

    async def delete(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""
        factory = await self._get_session_factory()
        try:
            async with factory() as session:
                await session.execute(delete(CacheEntry).where(CacheEntry.key == key))
                await session.commit()
        except SQLAlchemyError as e:
            log_with_source(logger, "cache", "error", "Cache delete failed", key=key, error=str(e))
            raise CacheError(f"Could not delete {key!r} from local cache") from e

    # -------------------------------------------------------------------------
    # Note snapshot
    # -------------------------------------------------------------------------

    async def save_snapshot(self, notes: list[Note]) -> None:
        """Store the full note list as last fetched from the remote store."""
        await self.set(
            NOTES_KEY,
            [note.model_dump(mode="json", by_alias=True) for note in notes],
        )
        log_with_source(logger, "cache", "debug", "Snapshot saved", count=len(notes))

    async def load_snapshot(self) -> list[Note] | None:
        """Return the last stored note list, or None if there is none."""
        raw = await self.get(NOTES_KEY)
        if raw is None:
            return None
        try:
            return _NOTE_LIST.validate_python(raw)
        except PydanticValidationError as e:
            log_with_source(
                logger, "cache", "warning", "Ignoring unreadable snapshot", error=str(e)
            )
            return None

    # -------------------------------------------------------------------------
    # Draft
    # -------------------------------------------------------------------------

    async def save_draft(self, title: str, content: str) -> None:
        """Store the unsaved form title and content."""
        await self.set(DRAFT_KEY, Draft(title=title, content=content).model_dump())

    async def load_draft(self) -> Draft | None:
        """Return the stored draft, or None if there is none."""
        raw = await self.get(DRAFT_KEY)
        if raw is None:
            return None
        try:
            return Draft.model_validate(raw)
        except PydanticValidationError as e:
            log_with_source(logger, "cache", "warning", "Ignoring unreadable draft", error=str(e))
            return None
