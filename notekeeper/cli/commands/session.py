"""
Session Commands.

Log in and out of the placeholder login gate.
"""

import typer
from rich.console import Console

from notekeeper.cli.context import open_context, run_command

app = typer.Typer(help="Login gate commands")
console = Console()


@app.command()
def login(
    username: str = typer.Option(..., "--username", "-u", prompt=True),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """
    Log in with the configured username and password.

    Examples:
        cli.py session login
        cli.py session login -u admin
    """
    if not run_command(_login(username, password)):
        console.print("[red]Invalid username or password.[/red]")
        raise typer.Exit(1)
    console.print("[green]Logged in.[/green]")


async def _login(username: str, password: str) -> bool:
    async with open_context() as context:
        return await context.session.login(username, password)


@app.command()
def logout() -> None:
    """Log out."""
    run_command(_logout())
    console.print("[green]Logged out.[/green]")


async def _logout() -> None:
    async with open_context() as context:
        await context.session.logout()


@app.command()
def status() -> None:
    """Show whether a session is active."""
    if run_command(_status()):
        console.print("[green]Logged in[/green]")
    else:
        console.print("[yellow]Not logged in[/yellow]")


async def _status() -> bool:
    async with open_context() as context:
        return await context.session.is_authenticated()
