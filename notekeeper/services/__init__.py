"""
Services Module.

Session gate.
"""
