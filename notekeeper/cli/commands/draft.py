"""
Draft Commands.

Show, set and clear the unsaved note draft kept in the local cache.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from notekeeper.cli.context import open_context, require_session, run_command

app = typer.Typer(help="Unsaved draft commands")
console = Console()


@app.command()
def show() -> None:
    """Show the saved draft."""
    run_command(_show())


async def _show() -> None:
    async with open_context() as context:
        await require_session(context)
        draft = await context.repository.load_draft()

    if draft is None or not (draft.title or draft.content):
        console.print("[dim]No draft saved.[/dim]")
        return

    console.print(Panel(draft.content or "[dim](no content)[/dim]", title=draft.title or "(untitled)"))


@app.command("set")
def set_draft(
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    content: Optional[str] = typer.Option(None, "--content", "-c"),
) -> None:
    """
    Update the draft. Fields not given keep their saved value.

    Examples:
        cli.py draft set -t "Ideas" -c "Half-finished thought"
    """
    run_command(_set(title, content))


async def _set(title: str | None, content: str | None) -> None:
    async with open_context() as context:
        await require_session(context)
        repository = context.repository

        current = await repository.load_draft()
        if current is not None:
            title = current.title if title is None else title
            content = current.content if content is None else content

        draft = await repository.set_draft(title or "", content or "")

    console.print(f"[green]Draft saved[/green] [dim]({len(draft.content)} characters)[/dim]")


@app.command()
def clear() -> None:
    """Clear the draft."""
    run_command(_clear())


async def _clear() -> None:
    async with open_context() as context:
        await require_session(context)
        await context.repository.clear_draft()

    console.print("[green]Draft cleared.[/green]")
