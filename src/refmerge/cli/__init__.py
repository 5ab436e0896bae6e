"""
CLI module for refmerge.

Provides the command-line interface using Click.
"""

from refmerge.cli.main import cli, main

__all__ = ["main", "cli"]
