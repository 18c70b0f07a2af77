"""
Local Cache Module.

Device-local durable key-value storage for the last note snapshot,
the unsaved draft and the session flag.
"""
