"""
Value classification for the merge engine.

Values fall into three kinds:
- RECORD: an object whose type is exactly dict
- SEQUENCE: an object whose type is exactly list
- SCALAR: everything else, treated as opaque

Subclasses of dict and list (OrderedDict, defaultdict, user classes) are
deliberately SCALAR: only plain containers are merged structurally.
The REMOVE marker gets its own kind so callers can match on it.
"""

from __future__ import annotations

import enum as _enum
import re as _re
import typing as _typing

import refmerge.constants as constants
import refmerge.core.markers as markers

# Nested key path, e.g. ("x", "b", "y", 1)
Path: _typing.TypeAlias = tuple[_typing.Any, ...]

# Types compared by value in the shallow-equality check. Everything else
# is compared by identity.
_PRIMITIVE_TYPES: frozenset[type] = frozenset(
    {type(None), bool, int, float, complex, str, bytes}
)

_INDEX_PATTERN = _re.compile(r"0|[1-9][0-9]*")
_MAX_INDEX_DIGITS = len(str(constants.MAX_LIST_INDEX))


class Kind(_enum.Enum):
    """Structural kind of a value."""

    SCALAR = "scalar"
    RECORD = "record"
    SEQUENCE = "sequence"
    REMOVE = "remove"


def kind_of(value: _typing.Any) -> Kind:
    """Classify a value."""
    value_type = type(value)
    if value_type is dict:
        return Kind.RECORD
    if value_type is list:
        return Kind.SEQUENCE
    if markers.is_remove(value):
        return Kind.REMOVE
    return Kind.SCALAR


def is_record(value: _typing.Any) -> bool:
    """Check if a value is a plain record (exactly dict)."""
    return type(value) is dict


def is_sequence(value: _typing.Any) -> bool:
    """Check if a value is a plain sequence (exactly list)."""
    return type(value) is list


def is_collection(value: _typing.Any) -> bool:
    """Check if a value is a record or a sequence."""
    return type(value) in (dict, list)


def same_value(a: _typing.Any, b: _typing.Any) -> bool:
    """
    Strict equality used for structural sharing.

    Identical objects are always the same. Primitives of the same type
    compare by value, so two equal strings or ints match even when they
    are distinct objects. Collections and opaque objects only match by
    identity. 1, 1.0 and True are all different values here.

    Args:
        a: First value.
        b: Second value.

    Returns:
        True if a can stand in for b in a merge result.
    """
    if a is b:
        return True
    value_type = type(a)
    if value_type is not type(b) or value_type not in _PRIMITIVE_TYPES:
        return False
    return bool(a == b)


def as_index(key: _typing.Any) -> int | None:
    """
    Interpret a record key as a list index.

    Accepts non-negative ints (not bools) and canonical decimal strings
    ("0", "7", "12" but not "07", "-1" or " 1") up to MAX_LIST_INDEX.

    Returns:
        The index, or None if the key does not denote one.
    """
    if type(key) is int:
        index = key
    elif isinstance(key, str) and _INDEX_PATTERN.fullmatch(key):
        # Too many digits to be in range
        if len(key) > _MAX_INDEX_DIGITS:
            return None
        index = int(key)
    else:
        return None
    return index if 0 <= index <= constants.MAX_LIST_INDEX else None
