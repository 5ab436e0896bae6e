"""
Shared constants for refmerge.

Default values used by both the settings and the CLI.
"""

ENV_PREFIX = "REFMERGE_"
"""Prefix for environment variable configuration."""

DEFAULT_OUTPUT_FORMAT = "yaml"
"""Default format for printed merge results."""

DEFAULT_INDENT = 2
"""Default indentation for printed merge results."""

DEFAULT_LOG_LEVEL = "warning"
"""Default log level for the CLI."""

STDIN_PATH = "-"
"""Path argument that reads a document from standard input."""

MAX_LIST_INDEX = 1_000_000
"""Largest index a record patch may address in a list. Higher keys are ignored."""
