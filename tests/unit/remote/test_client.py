"""Unit tests for the remote store adapter."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from notekeeper.core.exceptions import RemoteUnavailable
from notekeeper.remote.client import NotesAPIClient
from notekeeper.schemas.note import NoteInput

NOTE_BODY = {
    "_id": "65f0c2",
    "title": "Work plan",
    "content": "Steps",
    "tag": "Work",
    "reminder": "",
    "color": "#ffeeaa",
    "createdAt": "2025-01-01T09:00:00.000Z",
    "__v": 0,
}


class TestNotesAPIClient:
    """Tests for client setup."""

    @pytest.fixture
    def client(self) -> NotesAPIClient:
        """Create a test client."""
        return NotesAPIClient(base_url="http://test:5000")

    @pytest.mark.asyncio
    async def test_client_initialization(self, client: NotesAPIClient) -> None:
        """Test client keeps base URL and leaves timeout to the transport."""
        assert client.base_url == "http://test:5000"
        assert client.timeout is None
        assert client.notes_path == "/api/notes"
        assert client.upload_path == "/api/upload"

    @pytest.mark.asyncio
    async def test_client_strips_trailing_slash(self) -> None:
        """Test client strips trailing slash from base URL."""
        client = NotesAPIClient(base_url="http://test:5000/")
        assert client.base_url == "http://test:5000"

    @pytest.mark.asyncio
    async def test_client_reads_configuration(self) -> None:
        """Without arguments the client should use application.yaml / NOTES_API_URL."""
        with patch(
            "notekeeper.remote.client.get_remote_base_url",
            return_value=("https://notes.example.com", 12.0),
        ):
            client = NotesAPIClient()

        assert client.base_url == "https://notes.example.com"
        assert client.timeout == 12.0

    @pytest.mark.asyncio
    async def test_explicit_timeout_is_applied(self) -> None:
        client = NotesAPIClient(base_url="http://test:5000", timeout=3.0)

        internal = await client._get_client()

        assert internal.timeout == httpx.Timeout(3.0)
        await client.close()

    @pytest.mark.asyncio
    async def test_close_client(self, client: NotesAPIClient) -> None:
        """Test client closes properly."""
        await client._get_client()
        assert client._client is not None

        await client.close()
        assert client._client is None


class TestOperations:
    """Tests for the note operations and error mapping."""

    @pytest.fixture
    async def client(self):
        client = NotesAPIClient(base_url="http://test:5000")
        yield client
        await client.close()

    @pytest.mark.asyncio
    async def test_list_notes(self, client: NotesAPIClient) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(200, json=[NOTE_BODY])

            notes = await client.list_notes()

            mock_request.assert_awaited_once_with("GET", "/api/notes")

        assert len(notes) == 1
        note = notes[0]
        assert note.id == "65f0c2"
        assert note.reminder is None
        assert note.color == "#ffeeaa"
        assert note.pinned is False
        assert note.created_at.year == 2025

    @pytest.mark.asyncio
    async def test_create_note_sends_full_payload(self, client: NotesAPIClient) -> None:
        data = NoteInput(title="Work plan", content="Steps", tag="Work")

        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(201, json=NOTE_BODY)

            note = await client.create_note(data)

            method, path = mock_request.call_args.args
            payload = mock_request.call_args.kwargs["json"]

        assert (method, path) == ("POST", "/api/notes")
        assert payload["title"] == "Work plan"
        assert payload["color"] == "#ffffff"
        assert payload["pinned"] is False
        assert "image" in payload
        assert note.id == "65f0c2"

    @pytest.mark.asyncio
    async def test_update_note(self, client: NotesAPIClient) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(200, json=NOTE_BODY)

            await client.update_note("65f0c2", NoteInput(title="a", content="b"))

            method, path = mock_request.call_args.args

        assert (method, path) == ("PUT", "/api/notes/65f0c2")

    @pytest.mark.asyncio
    async def test_delete_note(self, client: NotesAPIClient) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(204)

            await client.delete_note("65f0c2")

            mock_request.assert_awaited_once_with("DELETE", "/api/notes/65f0c2")

    @pytest.mark.asyncio
    async def test_upload_image_returns_url(self, client: NotesAPIClient) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(
                200, json={"imageUrl": "https://cdn.example.com/a.png"}
            )

            url = await client.upload_image(b"\x89PNG", filename="a.png", content_type="image/png")

            files = mock_request.call_args.kwargs["files"]

        assert url == "https://cdn.example.com/a.png"
        assert files == {"image": ("a.png", b"\x89PNG", "image/png")}

    @pytest.mark.asyncio
    async def test_upload_without_url_fails(self, client: NotesAPIClient) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(200, json={"ok": True})

            with pytest.raises(RemoteUnavailable) as exc_info:
                await client.upload_image(b"data")

        assert exc_info.value.operation == "upload"

    @pytest.mark.asyncio
    async def test_transport_error_is_remote_unavailable(self, client: NotesAPIClient) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.side_effect = httpx.ConnectError("Connection refused")

            with pytest.raises(RemoteUnavailable) as exc_info:
                await client.list_notes()

        assert exc_info.value.operation == "list"
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    async def test_error_status_is_remote_unavailable(
        self, client: NotesAPIClient, status: int
    ) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(status, json={"error": "nope"})

            with pytest.raises(RemoteUnavailable) as exc_info:
                await client.delete_note("65f0c2")

        assert exc_info.value.operation == "delete"
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_invalid_json_is_remote_unavailable(self, client: NotesAPIClient) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(200, content=b"<html>502</html>")

            with pytest.raises(RemoteUnavailable):
                await client.list_notes()

    @pytest.mark.asyncio
    async def test_unexpected_shape_is_remote_unavailable(self, client: NotesAPIClient) -> None:
        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = httpx.Response(200, json={"notes": []})

            with pytest.raises(RemoteUnavailable) as exc_info:
                await client.list_notes()

        assert exc_info.value.operation == "list"
