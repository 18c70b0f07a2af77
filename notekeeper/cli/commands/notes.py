"""
Note Commands.

List, add, edit, delete and pin notes. Every command sits behind the
session login gate.
"""

import mimetypes
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from notekeeper.cli.context import open_context, require_session, run_command
from notekeeper.core.config import get_app_config
from notekeeper.core.exceptions import NotFoundError, ValidationError
from notekeeper.repositories.state import RepositoryState
from notekeeper.schemas.note import DEFAULT_COLOR, ImageUpload, Note, NoteForm

app = typer.Typer(help="Note commands")
console = Console()


def _read_image(path: Path) -> ImageUpload:
    content_type, _ = mimetypes.guess_type(path.name)
    return ImageUpload(
        data=path.read_bytes(),
        filename=path.name,
        content_type=content_type or "application/octet-stream",
    )


def _apply_options(form: NoteForm, **options: object) -> NoteForm:
    """Overlay the options that were given on the command line."""
    update = {key: value for key, value in options.items() if value is not None}
    try:
        return NoteForm.model_validate({**form.model_dump(), **update})
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid note",
            details={".".join(str(p) for p in err["loc"]): err["msg"] for err in e.errors()},
        ) from e


def _report_degraded(state: RepositoryState) -> None:
    if not state.is_degraded:
        return
    if state.from_cache:
        console.print("[yellow]Remote store unavailable, showing cached notes.[/yellow]")
    else:
        console.print("[yellow]Remote store unavailable and no cached notes yet.[/yellow]")


def _display_notes(notes: list[Note]) -> None:
    """Display notes as a table."""
    if not notes:
        console.print("No notes found.")
        return

    table = Table(title="Saved Notes", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Content")
    table.add_column("Tag")
    table.add_column("Reminder")
    table.add_column("Created")
    table.add_column("Pinned")

    for note in notes:
        table.add_row(
            note.id or "-",
            note.title,
            note.content,
            note.tag or "-",
            note.reminder.strftime("%Y-%m-%d %H:%M") if note.reminder else "-",
            note.created_at.strftime("%Y-%m-%d %H:%M") if note.created_at else "-",
            "yes" if note.pinned else "",
        )

    console.print(table)


@app.command("list")
def list_notes(
    search: str = typer.Option("", "--search", "-s", help="Match title, content or tag"),
    sort: Optional[str] = typer.Option(
        None, "--sort", help="newest, oldest or pinnedFirst (default from application.yaml)"
    ),
) -> None:
    """
    List saved notes.

    Fetches from the remote store, falling back to cached notes when it
    is unreachable.

    Examples:
        cli.py notes list
        cli.py notes list -s work --sort pinnedFirst
    """
    run_command(_list(search, sort))


async def _list(search: str, sort: str | None) -> None:
    async with open_context() as context:
        await require_session(context)
        state = await context.repository.refresh()
        _report_degraded(state)

        sort_mode = sort or get_app_config().application.notes.default_sort
        _display_notes(context.repository.query(search, sort_mode))


@app.command()
def add(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Title (defaults to the draft)"),
    content: Optional[str] = typer.Option(
        None, "--content", "-c", help="Content (defaults to the draft)"
    ),
    tag: Optional[str] = typer.Option(None, "--tag", help="e.g. Study, Work, Personal"),
    reminder: Optional[str] = typer.Option(None, "--reminder", help="Local time, YYYY-MM-DDTHH:MM"),
    color: str = typer.Option(DEFAULT_COLOR, "--color", help="Hex color"),
    image: Optional[Path] = typer.Option(
        None, "--image", exists=True, dir_okay=False, readable=True, help="Image file to attach"
    ),
) -> None:
    """
    Add a note.

    Title and content not given on the command line are taken from the
    saved draft. The draft is cleared once the note is saved.

    Examples:
        cli.py notes add -t "Groceries" -c "Milk, eggs" --tag Personal
    """
    run_command(_add(title, content, tag, reminder, color, image))


async def _add(
    title: str | None,
    content: str | None,
    tag: str | None,
    reminder: str | None,
    color: str,
    image: Path | None,
) -> None:
    async with open_context() as context:
        await require_session(context)
        repository = context.repository

        draft = await repository.load_draft()
        if draft is not None:
            title = draft.title if title is None else title
            content = draft.content if content is None else content

        form = _apply_options(
            NoteForm(),
            title=title,
            content=content,
            tag=tag,
            reminder=reminder,
            color=color,
            image=_read_image(image) if image else None,
        )
        note = await repository.save(form)
        await repository.clear_draft()

        console.print(f"[green]Note Added![/green] [dim]{note.id or ''}[/dim]")


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    content: Optional[str] = typer.Option(None, "--content", "-c"),
    tag: Optional[str] = typer.Option(None, "--tag", help="Empty string clears the tag"),
    reminder: Optional[str] = typer.Option(
        None, "--reminder", help="Local time, YYYY-MM-DDTHH:MM. Empty string clears it"
    ),
    color: Optional[str] = typer.Option(None, "--color"),
    image: Optional[Path] = typer.Option(
        None, "--image", exists=True, dir_okay=False, readable=True, help="Replace the image"
    ),
) -> None:
    """
    Edit a note.

    Fields not given keep their current value; every field is sent.

    Examples:
        cli.py notes edit 65f0c2 -t "Work plan v2"
    """
    run_command(_edit(note_id, title, content, tag, reminder, color, image))


async def _edit(
    note_id: str,
    title: str | None,
    content: str | None,
    tag: str | None,
    reminder: str | None,
    color: str | None,
    image: Path | None,
) -> None:
    async with open_context() as context:
        await require_session(context)
        repository = context.repository

        await repository.refresh()
        note = repository.get(note_id)
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")

        form = _apply_options(
            NoteForm.from_note(note),
            title=title,
            content=content,
            tag=tag,
            reminder=reminder,
            color=color,
            image=_read_image(image) if image else None,
        )
        await repository.save(form, existing_id=note_id)

        console.print("[green]Note Updated![/green]")


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """
    Delete a note.

    Examples:
        cli.py notes delete 65f0c2
        cli.py notes delete 65f0c2 --yes
    """
    if not yes:
        typer.confirm("Do you want to delete this note?", abort=True)
    run_command(_delete(note_id))


async def _delete(note_id: str) -> None:
    async with open_context() as context:
        await require_session(context)
        await context.repository.remove(note_id)
        console.print("[green]Note deleted.[/green]")


@app.command()
def pin(
    note_id: str = typer.Argument(..., help="Note ID"),
    unpin: bool = typer.Option(False, "--unpin", help="Unpin instead"),
) -> None:
    """
    Pin or unpin a note.

    Examples:
        cli.py notes pin 65f0c2
        cli.py notes pin 65f0c2 --unpin
    """
    run_command(_pin(note_id, not unpin))


async def _pin(note_id: str, pinned: bool) -> None:
    async with open_context() as context:
        await require_session(context)
        await context.repository.refresh()
        await context.repository.set_pinned(note_id, pinned)
        console.print("[green]Note pinned.[/green]" if pinned else "[green]Note unpinned.[/green]")
