"""
Core Module.

Configuration, logging, exceptions and shared utilities.
"""
