"""
Reference-preserving deep merge.

merge() folds a current value through one or more changes values. The
result reuses every untouched subtree of the current value by reference,
and when the changes make no difference at all the current value itself
is returned:

    >>> import refmerge
    >>> state = {"user": {"name": "ada"}, "tags": ["a", "b"]}
    >>> refmerge.merge(state, {"user": {"name": "ada"}}) is state
    True
    >>> new = refmerge.merge(state, {"user": {"name": "grace"}})
    >>> new["tags"] is state["tags"]
    True

Merge rules (current vs. next):
- If either side is not a plain dict/list, next replaces current.
- dict vs. dict: keys of next are merged recursively into current.
- list vs. list: next replaces the list; elements at the same index are
  merged recursively, elements past the end of next are dropped.
- list vs. dict: the dict patches the list by index ({1: "b"} or
  {"1": "b"}); untouched elements remain.
- dict vs. list: the list is applied as a dict keyed by "0", "1", ...
- REMOVE as a value in next deletes that key or list element.

Inputs are never mutated. Cyclic structures are not supported and will
recurse until RecursionError.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import refmerge.core.markers as markers
import refmerge.core.types as types

_logger = _logging.getLogger(__name__)

# Stands in for a key or index that current does not have
_MISSING: _typing.Any = object()


def merge(current: _typing.Any, *changes: _typing.Any) -> _typing.Any:
    """
    Merge one or more changes into current.

    Changes are applied left to right, so merge(x, a, b) is the same as
    merge(merge(x, a), b).

    Args:
        current: The value to merge into. Never modified.
        *changes: Changes to apply, in order. Never modified.

    Returns:
        The merged value. This is current itself (same object) if the
        changes make no difference, and every unchanged nested dict or
        list is the same object as in current.
    """
    result = current
    for next_value in changes:
        result = merge_pair(result, next_value)
    return result


def merge_pair(current: _typing.Any, next_value: _typing.Any) -> _typing.Any:
    """
    Merge a single changes value into current.

    Args:
        current: The value to merge into.
        next_value: The changes to apply.

    Returns:
        The merged value, or current itself if nothing changed.
    """
    current_kind = types.kind_of(current)
    next_kind = types.kind_of(next_value)

    if current_kind is types.Kind.RECORD and next_kind is types.Kind.RECORD:
        merged: dict[_typing.Any, _typing.Any] | list[_typing.Any] = _merge_record(
            current, next_value.items()
        )
    elif current_kind is types.Kind.RECORD and next_kind is types.Kind.SEQUENCE:
        merged = _merge_record(
            current, ((str(index), value) for index, value in enumerate(next_value))
        )
    elif current_kind is types.Kind.SEQUENCE and next_kind is types.Kind.SEQUENCE:
        merged = _merge_sequence(current, enumerate(next_value), truncate=True)
    elif current_kind is types.Kind.SEQUENCE and next_kind is types.Kind.RECORD:
        merged = _merge_sequence(current, _index_items(next_value), truncate=False)
    else:
        return next_value

    return current if _shallow_equal(current, merged) else merged


def _merge_record(
    current: dict[_typing.Any, _typing.Any],
    next_items: _typing.Iterable[tuple[_typing.Any, _typing.Any]],
) -> dict[_typing.Any, _typing.Any]:
    """Build a new dict from current with next_items applied."""
    patches = dict(next_items)
    merged = {
        key: value
        for key, value in current.items()
        if not markers.is_remove(patches.get(key, _MISSING))
    }
    for key, value in patches.items():
        if markers.is_remove(value):
            continue
        merged[key] = merge_pair(current.get(key, _MISSING), value)
    return merged


def _merge_sequence(
    current: list[_typing.Any],
    next_items: _typing.Iterable[tuple[int, _typing.Any]],
    *,
    truncate: bool,
) -> list[_typing.Any]:
    """
    Build a new list from current with indexed next_items applied.

    Removed elements are filtered out first, so later elements shift
    down; patched values are then written at their original indices.

    Args:
        current: The list to merge into.
        next_items: (index, value) pairs from the changes.
        truncate: Drop elements past the highest patched index (list
            vs. list merges).
    """
    patches = dict(next_items)
    merged = [
        item
        for index, item in enumerate(current)
        if not markers.is_remove(patches.get(index, _MISSING))
    ]
    kept = sorted(
        ((index, value) for index, value in patches.items() if not markers.is_remove(value)),
        key=lambda item: item[0],
    )

    if truncate:
        del merged[(kept[-1][0] + 1 if kept else 0):]

    for index, value in kept:
        existing = current[index] if index < len(current) else _MISSING
        item = merge_pair(existing, value)
        if index < len(merged):
            merged[index] = item
        else:
            # Gaps left by a far-out index are filled with None
            merged.extend([None] * (index - len(merged)))
            merged.append(item)
    return merged


def _index_items(
    patch: dict[_typing.Any, _typing.Any],
) -> _typing.Iterator[tuple[int, _typing.Any]]:
    """
    Yield (index, value) pairs for the keys of patch that denote list indices.

    When 1 and "1" both appear, the later key wins.
    """
    seen: set[int] = set()
    for key, value in patch.items():
        index = types.as_index(key)
        if index is None:
            _logger.debug("Ignoring non-index or out-of-range key %.40r in list patch", key)
            continue
        if index in seen:
            _logger.debug("Duplicate index %d in list patch; key %r wins", index, key)
        seen.add(index)
        yield index, value


def _shallow_equal(
    current: dict[_typing.Any, _typing.Any] | list[_typing.Any],
    merged: dict[_typing.Any, _typing.Any] | list[_typing.Any],
) -> bool:
    """
    Check whether merged holds exactly the same entries as current.

    Nested merges already return the original object when unchanged, so
    comparing one level by identity is enough to detect "no change below".
    """
    if len(current) != len(merged):
        return False
    if isinstance(current, dict) and isinstance(merged, dict):
        return all(
            key in merged and types.same_value(value, merged[key])
            for key, value in current.items()
        )
    return all(types.same_value(a, b) for a, b in zip(current, merged))
