"""
CLI Commands.

Organized by domain/feature area.
"""

from notekeeper.cli.commands.draft import app as draft_app
from notekeeper.cli.commands.notes import app as notes_app
from notekeeper.cli.commands.session import app as session_app
from notekeeper.cli.commands.system import app as system_app

__all__ = [
    "draft_app",
    "notes_app",
    "session_app",
    "system_app",
]
