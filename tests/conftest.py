"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Local Cache Configuration:
    Tests use a real SQLite file under pytest's tmp_path, so every test
    starts from an empty cache. Opening a second LocalCache on the same
    file simulates a process restart.
"""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from notekeeper.cache.local import LocalCache
from notekeeper.schemas.note import Note

BASE_TIME = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


# =============================================================================
# Local Cache Fixtures
# =============================================================================


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    """Path of a fresh cache database for a single test."""
    return tmp_path / "cache" / "local_cache.db"


@pytest.fixture
async def local_cache(cache_path: Path) -> AsyncGenerator[LocalCache, None]:
    """
    Provide a LocalCache backed by a temporary SQLite file.

    The engine is disposed after the test.
    """
    cache = LocalCache(cache_path)
    yield cache
    await cache.close()


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """
    Factory for notes as the remote store returns them.

    `hours` offsets createdAt from a fixed base time.

    Usage:
        def test_something(make_note):
            note = make_note("n1", title="Work plan", hours=2, pinned=True)
    """

    def _make(
        note_id: str,
        title: str = "Title",
        content: str = "Content",
        hours: int = 0,
        **fields: Any,
    ) -> Note:
        return Note.model_validate({
            "_id": note_id,
            "title": title,
            "content": content,
            "createdAt": (BASE_TIME + timedelta(hours=hours)).isoformat(),
            **fields,
        })

    return _make


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
