"""
CLI layer for simplecache.

Provides a Typer application for inspecting keys, settings and the native
facility from a terminal.

Entry point::

    simplecache --help
"""

from simplecache.cli.app import app

__all__ = ["app"]
