"""
Client Context.

Wires the remote adapter, local cache, note repository and session gate
from configuration, and closes them when a command is done.
"""

import asyncio
from collections.abc import AsyncIterator, Coroutine
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import typer
from rich.console import Console

from notekeeper.cache.local import LocalCache
from notekeeper.core.config import get_app_config, get_cache_path
from notekeeper.core.exceptions import ApplicationError, ValidationError
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.remote.client import NotesAPIClient
from notekeeper.repositories.note import NoteRepository
from notekeeper.services.session import SessionGate

logger = get_logger(__name__)
console = Console()


@dataclass
class ClientContext:
    """Everything a command needs for one run."""

    cache: LocalCache
    remote: NotesAPIClient
    repository: NoteRepository
    session: SessionGate

    async def aclose(self) -> None:
        await self.remote.close()
        await self.cache.close()


def build_context() -> ClientContext:
    """Create a context from config/settings."""
    app_config = get_app_config()

    cache = LocalCache(get_cache_path(), echo=app_config.cache.echo)
    remote = NotesAPIClient()
    repository = NoteRepository(
        remote,
        cache,
        max_content_length=app_config.application.notes.max_content_length,
    )
    session = SessionGate(
        cache,
        username=app_config.session.username,
        password=app_config.session.password,
    )
    return ClientContext(cache=cache, remote=remote, repository=repository, session=session)


@asynccontextmanager
async def open_context() -> AsyncIterator[ClientContext]:
    """Async context manager yielding a ClientContext, closed on exit."""
    context = build_context()
    try:
        yield context
    finally:
        await context.aclose()


async def require_session(context: ClientContext) -> None:
    """Login gate: stop the command unless a session flag is stored."""
    if not await context.session.is_authenticated():
        console.print("[red]Not logged in.[/red] Run [cyan]cli.py session login[/cyan] first.")
        raise typer.Exit(1)


def run_command(coro: Coroutine[Any, Any, Any]) -> Any:
    """
    Run a command coroutine and turn application errors into exit code 1.

    Every failure leaves the stored state as it was, so the message is
    the only thing the user needs.
    """
    try:
        return asyncio.run(coro)
    except ValidationError as e:
        console.print(f"[red]{e.message}[/red]")
        for field, problem in e.details.items():
            console.print(f"[dim]  {field}: {problem}[/dim]")
        raise typer.Exit(1)
    except ApplicationError as e:
        log_with_source(logger, "cli", "debug", "Command failed", code=e.code, error=e.message)
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)
