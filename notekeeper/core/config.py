"""
Configuration Management.

Loads environment overrides from config/.env and settings from
config/settings/*.yaml. No hardcoded values in code; all configuration
comes from these sources.

Overrides (.env or process environment):
    NOTES_API_URL     - replaces remote.base_url from application.yaml
    NOTES_CACHE_PATH  - replaces path from cache.yaml

Settings (YAML):
    application.yaml  - App identity, remote store endpoints, note limits
    cache.yaml        - Local cache database location
    logging.yaml      - Logging configuration
    session.yaml      - Placeholder login credentials
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notekeeper.core.config_schema import (
    ApplicationSchema,
    CacheSchema,
    LoggingSchema,
    SessionSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides loaded from config/.env. Everything is optional."""

    notes_api_url: str | None = None
    notes_cache_path: str | None = None

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._cache = _load_validated(CacheSchema, "cache.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._session = _load_validated(SessionSchema, "session.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def cache(self) -> CacheSchema:
        """Local cache settings."""
        return self._cache

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def session(self) -> SessionSchema:
        """Session gate settings."""
        return self._session


@lru_cache
def get_settings() -> Settings:
    """Get cached overrides instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_remote_base_url() -> tuple[str, float | None]:
    """
    Get the remote store base URL and timeout.

    NOTES_API_URL takes precedence over application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds). A None timeout means
        the HTTP transport default.
    """
    remote = get_app_config().application.remote
    base_url = get_settings().notes_api_url or remote.base_url
    return base_url.rstrip("/"), remote.timeout


def get_cache_path() -> Path:
    """
    Get the absolute path of the local cache database.

    Relative paths are resolved against the project root.
    """
    configured = get_settings().notes_cache_path or get_app_config().cache.path
    path = Path(configured).expanduser()
    if not path.is_absolute():
        path = find_project_root() / path
    return path
