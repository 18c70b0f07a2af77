"""
Remote Store Module.

HTTP adapter for the notes REST backend.
"""
