"""
Repositories Module.

The note repository, its immutable state and the pure query helpers.
"""
