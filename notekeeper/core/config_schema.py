"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    CacheSchema        → cache.yaml
    LoggingSchema      → logging.yaml
    SessionSchema      → session.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class RemoteSchema(_StrictBase):
    base_url: str
    timeout: float | None = None
    notes_path: str = "/api/notes"
    upload_path: str = "/api/upload"


class NotesSchema(_StrictBase):
    max_content_length: int | None = Field(default=None, gt=0)
    default_sort: str = "newest"


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    remote: RemoteSchema
    notes: NotesSchema


# =============================================================================
# cache.yaml
# =============================================================================


class CacheSchema(_StrictBase):
    path: str
    echo: bool = False


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# session.yaml
# =============================================================================


class SessionSchema(_StrictBase):
    username: str
    password: str
