"""
Notekeeper.

Client-side state manager for a personal notes REST backend:
remote store adapter, local cache, note repository and session gate,
with a Typer command-line presentation layer on top.
"""

__version__ = "0.1.0"
