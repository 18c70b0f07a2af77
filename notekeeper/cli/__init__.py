"""
CLI Module.

Command-line presentation layer built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- All note state lives in NoteRepository
- Commands open a ClientContext, run one repository operation, close it

Usage:
    python cli.py --help
    python cli.py session login
    python cli.py notes list --search work --sort pinnedFirst
"""
