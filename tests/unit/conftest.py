"""
Unit Test Fixtures.

Fixtures for unit tests - the remote store is always mocked.
Unit tests never touch the network.
"""

from unittest.mock import AsyncMock

import pytest

from notekeeper.cache.local import LocalCache
from notekeeper.remote.client import NotesAPIClient
from notekeeper.repositories.note import NoteRepository


# =============================================================================
# Remote Store Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_remote() -> AsyncMock:
    """
    Mock remote store adapter.

    Every operation is an AsyncMock; list_notes returns an empty list
    unless a test configures it.

    Usage:
        def test_refresh(mock_remote: AsyncMock):
            mock_remote.list_notes.return_value = [note]
    """
    remote = AsyncMock(spec=NotesAPIClient)
    remote.list_notes.return_value = []
    return remote


@pytest.fixture
def repository(mock_remote: AsyncMock, local_cache: LocalCache) -> NoteRepository:
    """NoteRepository over the mocked remote store and a real temporary cache."""
    return NoteRepository(mock_remote, local_cache, max_content_length=300)
