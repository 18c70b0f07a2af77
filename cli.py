#!/usr/bin/env python3
"""
Notekeeper CLI.

Command-line client for the notes backend.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                               # Show help

    # Login gate
    python cli.py session login                        # Prompt for credentials
    python cli.py session status
    python cli.py session logout

    # Notes
    python cli.py notes list                           # Newest first
    python cli.py notes list -s work --sort pinnedFirst
    python cli.py notes add -t "Title" -c "Content" --tag Work --image photo.png
    python cli.py notes edit NOTE_ID -t "New title"
    python cli.py notes pin NOTE_ID [--unpin]
    python cli.py notes delete NOTE_ID [--yes]

    # Draft
    python cli.py draft set -t "Title" -c "Half-written content"
    python cli.py draft show
    python cli.py draft clear

    # System info
    python cli.py system info
    python cli.py system config

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import typer
from rich.console import Console

from notekeeper.cli.commands import draft_app, notes_app, session_app, system_app
from notekeeper.core.config import find_project_root

# Create main app
app = typer.Typer(
    name="notekeeper",
    help="Notekeeper CLI - Personal notes with offline fallback.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(session_app, name="session")
app.add_typer(notes_app, name="notes")
app.add_typer(draft_app, name="draft")
app.add_typer(system_app, name="system")


def _validate_project_root() -> None:
    """Validate that we're running inside the project (config/ lives there)."""
    try:
        find_project_root()
    except RuntimeError:
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notekeeper CLI.

    Notes, drafts and the login gate, backed by the remote notes store
    with a local cache for offline use.
    """
    _validate_project_root()

    from notekeeper.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()


if __name__ == "__main__":
    app()
