"""
YAML/JSON documents for merge inputs and results.

Provides:
- RemoveLoader: YAML loader with a `!remove` tag that produces REMOVE
- load / load_file: parse current and changes documents
- dump: render a merge result as YAML or JSON

JSON is a subset of YAML, so JSON files load through the same loader
(without the tag, since JSON has no way to spell it).

Custom tags:
- !remove — Remove the key (or list element) from the merged result
- !omit — Alias for !remove

Example changes file:
    user:
      nickname: !remove
      email: ada@example.org
    tags:
      1: !remove
"""

from __future__ import annotations

import json as _json
import logging as _logging
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import yaml as _yaml

import refmerge.constants as constants
import refmerge.core.markers as markers
import refmerge.core.types as types

_logger = _logging.getLogger(__name__)

OutputFormat: _typing.TypeAlias = _typing.Literal["yaml", "json"]
OUTPUT_FORMATS: tuple[str, ...] = ("yaml", "json")


class InputFileError(Exception):
    """Error reading or parsing a merge input document."""

    def __init__(self, path: str | _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in input {path}: {message}")


# =============================================================================
# YAML Constructors
# =============================================================================


def _remove_constructor(
    loader: _yaml.Loader,  # noqa: ARG001 - required by YAML constructor API
    node: _yaml.Node,  # noqa: ARG001 - required by YAML constructor API
) -> markers._RemoveMarker:
    """
    Construct the REMOVE marker from a !remove tag.

    Any value after the tag is ignored:
        key: !remove
        key: !remove ~
    """
    return markers.REMOVE


class RemoveLoader(_yaml.SafeLoader):
    """
    YAML loader for merge documents.

    Extends SafeLoader with the `!remove` and `!omit` tags. Mappings and
    sequences load as plain dicts and lists so they merge structurally.
    """

    pass


RemoveLoader.add_constructor("!remove", _remove_constructor)
RemoveLoader.add_constructor("!omit", _remove_constructor)


# =============================================================================
# Loading
# =============================================================================


def load(stream: _typing.Any) -> _typing.Any:
    """
    Load one YAML (or JSON) document with the !remove tag enabled.

    Args:
        stream: Document content (string, bytes, or file-like object).

    Returns:
        The parsed value. An empty document loads as None.

    Raises:
        yaml.YAMLError: If the document is malformed.
    """
    return _yaml.load(stream, Loader=RemoveLoader)


def load_file(path: str | _pathlib.Path) -> _typing.Any:
    """
    Load a document from a file, or from stdin when path is "-".

    Args:
        path: File path, or "-" for standard input.

    Returns:
        The parsed value.

    Raises:
        InputFileError: If the file can't be read or parsed.
    """
    try:
        if str(path) == constants.STDIN_PATH:
            content = _sys.stdin.read()
        else:
            content = _pathlib.Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise InputFileError(path, e.strerror or str(e)) from e

    try:
        data = load(content)
    except _yaml.YAMLError as e:
        raise InputFileError(path, f"invalid YAML/JSON: {e}") from e

    _logger.debug("Loaded %s (%s)", path, types.kind_of(data).value)
    return data


# =============================================================================
# Dumping
# =============================================================================


def _check_no_markers(value: _typing.Any) -> None:
    """Raise TypeError if a REMOVE marker is still present in value."""
    kind = types.kind_of(value)
    if kind is types.Kind.REMOVE:
        raise TypeError("REMOVE marker cannot be serialized")
    if kind is types.Kind.RECORD:
        for item in value.values():
            _check_no_markers(item)
    elif kind is types.Kind.SEQUENCE:
        for item in value:
            _check_no_markers(item)


def dump(
    value: _typing.Any,
    output_format: str = constants.DEFAULT_OUTPUT_FORMAT,
    *,
    indent: int = constants.DEFAULT_INDENT,
    sort_keys: bool = False,
) -> str:
    """
    Render a merge result as text.

    Args:
        value: The value to render.
        output_format: "yaml" or "json".
        indent: Indentation width.
        sort_keys: Sort mapping keys instead of keeping insertion order.

    Returns:
        The rendered document, ending with a newline.

    Raises:
        ValueError: If output_format is unknown.
        TypeError: If value still contains a REMOVE marker.
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format {output_format!r} "
            f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
        )
    _check_no_markers(value)

    if output_format == "json":
        return _json.dumps(value, indent=indent, sort_keys=sort_keys, default=str) + "\n"

    text: str = _yaml.safe_dump(
        value,
        default_flow_style=False,
        sort_keys=sort_keys,
        indent=max(indent, 2),
        allow_unicode=True,
    )
    return text
