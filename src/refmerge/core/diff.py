"""
Reference-level diff between two merge states.

changed_paths() reports where two trees stop sharing structure. It is the
natural companion to merge(): after new = merge(old, changes), every path
it returns is a place where downstream work (re-render, recompute,
persist) is needed, and every path it does not return is shared by
reference.

Example:
    >>> import refmerge
    >>> old = {"a": {"x": 1}, "b": [1, 2]}
    >>> new = refmerge.merge(old, {"a": {"x": 2}})
    >>> refmerge.changed_paths(old, new)
    [(), ('a',), ('a', 'x')]
"""

from __future__ import annotations

import typing as _typing

import refmerge.core.types as types

_MISSING: _typing.Any = object()


def changed_paths(
    before: _typing.Any,
    after: _typing.Any,
    path: types.Path = (),
) -> list[types.Path]:
    """
    List every path at which before and after differ by reference.

    Paths are listed in pre-order (a parent before its children). Two
    dicts or two lists are descended into over the union of their keys
    (before's keys first, then keys only in after); any other pair that
    differs contributes only its own path.

    Args:
        before: The earlier value.
        after: The later value.
        path: Prefix for reported paths (used in recursion).

    Returns:
        Changed paths as tuples of keys/indices. Empty if before and
        after are the same value.
    """
    if types.same_value(before, after):
        return []

    if types.is_record(before) and types.is_record(after):
        keys: _typing.Iterable[_typing.Any] = [
            *before,
            *(key for key in after if key not in before),
        ]
        lookup = _record_get
    elif types.is_sequence(before) and types.is_sequence(after):
        keys = range(max(len(before), len(after)))
        lookup = _sequence_get
    else:
        return [path]

    result = [path]
    for key in keys:
        result.extend(
            changed_paths(lookup(before, key), lookup(after, key), (*path, key))
        )
    return result


def _record_get(record: dict[_typing.Any, _typing.Any], key: _typing.Any) -> _typing.Any:
    return record.get(key, _MISSING)


def _sequence_get(sequence: list[_typing.Any], index: int) -> _typing.Any:
    return sequence[index] if index < len(sequence) else _MISSING
