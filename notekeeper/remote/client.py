"""
Remote Store Adapter.

Async HTTP client for the notes REST backend. Wraps the four note
operations and the image upload. Each call is a single request/response
exchange: no retries, no validation, no caching.

Every failure (transport error, non-2xx status, unreadable body) is
raised as RemoteUnavailable carrying the attempted operation name.

Endpoints:
    list    GET    /api/notes
    create  POST   /api/notes
    update  PUT    /api/notes/{id}
    delete  DELETE /api/notes/{id}
    upload  POST   /api/upload  -> {"imageUrl": "..."}
"""

from typing import Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from notekeeper.core.config import get_app_config, get_remote_base_url
from notekeeper.core.exceptions import RemoteUnavailable
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.schemas.note import Note, NoteInput

logger = get_logger(__name__)

_NOTE_LIST = TypeAdapter(list[Note])


class NotesAPIClient:
    """
    HTTP client for the notes REST backend.

    Features:
    - Base URL and timeout from application.yaml (NOTES_API_URL overrides)
    - Structured logging of requests/responses
    - Uniform RemoteUnavailable errors tagged with the operation name

    Usage:
        client = NotesAPIClient()
        notes = await client.list_notes()
        note = await client.create_note(NoteInput(title="a", content="b"))
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        notes_path: str | None = None,
        upload_path: str | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Backend base URL. If None, read from configuration.
            timeout: Request timeout in seconds. If None, the configured
                value is used, falling back to the httpx default.
            notes_path: Path of the notes collection. Defaults to configuration.
            upload_path: Path of the image upload endpoint. Defaults to configuration.
        """
        if base_url is None:
            base_url, configured_timeout = get_remote_base_url()
            remote = get_app_config().application.remote
            timeout = timeout if timeout is not None else configured_timeout
            notes_path = notes_path or remote.notes_path
            upload_path = upload_path or remote.upload_path

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.notes_path = (notes_path or "/api/notes").rstrip("/")
        self.upload_path = upload_path or "/api/upload"
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            options: dict[str, Any] = {"base_url": self.base_url}
            if self.timeout is not None:
                options["timeout"] = self.timeout
            self._client = httpx.AsyncClient(**options)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Send one request and require a 2xx response.

        Raises:
            RemoteUnavailable: On transport failure or non-2xx status
        """
        client = await self._get_client()

        log_with_source(
            logger,
            "remote",
            "debug",
            "API request",
            operation=operation,
            method=method,
            path=path,
        )

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "remote",
                "error",
                "API request failed",
                operation=operation,
                method=method,
                path=path,
                error=str(e),
            )
            raise RemoteUnavailable(operation, f"Request failed: {e}") from e

        log_with_source(
            logger,
            "remote",
            "debug",
            "API response",
            operation=operation,
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if not response.is_success:
            raise RemoteUnavailable(
                operation,
                f"Unexpected status {response.status_code}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(operation: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteUnavailable(operation, "Response body is not valid JSON") from e

    @staticmethod
    def _note(operation: str, body: Any) -> Note:
        try:
            return Note.model_validate(body)
        except PydanticValidationError as e:
            raise RemoteUnavailable(operation, "Response body is not a note") from e

    def _item_path(self, note_id: str) -> str:
        return f"{self.notes_path}/{note_id}"

    async def list_notes(self) -> list[Note]:
        """Fetch every note from the remote store."""
        response = await self._send("list", "GET", self.notes_path)
        body = self._json("list", response)
        try:
            return _NOTE_LIST.validate_python(body)
        except PydanticValidationError as e:
            raise RemoteUnavailable("list", "Response body is not a list of notes") from e

    async def create_note(self, data: NoteInput) -> Note:
        """Create a note. Returns the note as stored, with its new id."""
        response = await self._send("create", "POST", self.notes_path, json=data.to_payload())
        return self._note("create", self._json("create", response))

    async def update_note(self, note_id: str, data: NoteInput) -> Note:
        """Replace every field of an existing note."""
        response = await self._send(
            "update", "PUT", self._item_path(note_id), json=data.to_payload()
        )
        return self._note("update", self._json("update", response))

    async def delete_note(self, note_id: str) -> None:
        """Delete a note."""
        await self._send("delete", "DELETE", self._item_path(note_id))

    async def upload_image(
        self,
        payload: bytes,
        filename: str = "image",
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Upload raw image bytes.

        Returns:
            URL of the stored image

        Raises:
            RemoteUnavailable: On failure, or when the response has no imageUrl
        """
        response = await self._send(
            "upload",
            "POST",
            self.upload_path,
            files={"image": (filename, payload, content_type)},
        )
        body = self._json("upload", response)
        image_url = body.get("imageUrl") if isinstance(body, dict) else None
        if not isinstance(image_url, str) or not image_url:
            raise RemoteUnavailable("upload", "Response body has no imageUrl")
        return image_url
