"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a note is not present in the current list."""

    def __init__(self, message: str = "Note not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when a note form fails validation. Never reaches the network."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class RemoteUnavailable(ApplicationError):
    """
    Raised when a remote store call fails.

    Covers transport errors, non-2xx statuses and unreadable response
    bodies. `operation` names the call that was attempted
    (list, create, update, delete, upload).
    """

    def __init__(
        self,
        operation: str,
        message: str = "Remote store unavailable",
        status_code: int | None = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"{message} (operation: {operation})", code="SYS_REMOTE_UNAVAILABLE")


class UploadFailed(ApplicationError):
    """Raised when the image upload that precedes a save fails."""

    def __init__(self, message: str = "Image upload failed") -> None:
        super().__init__(message, code="SYS_UPLOAD_FAILED")


class AuthenticationFailed(ApplicationError):
    """Raised when the session credential pair does not match."""

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message, code="AUTH_FAILED")


class CacheError(ApplicationError):
    """Raised when the local cache cannot be read or written."""

    def __init__(self, message: str = "Local cache error") -> None:
        super().__init__(message, code="SYS_CACHE_ERROR")
