"""
Removal marker for merge changes.

Placing REMOVE anywhere inside a changes collection deletes the key (or
list index) it occupies from the merged result:

    >>> import refmerge
    >>> refmerge.merge({"x": 1, "y": 1}, {"y": refmerge.REMOVE})
    {'x': 1}

The marker is compared by identity only. OMIT is the same object under
its older name.
"""

from __future__ import annotations

import typing as _typing


class _RemoveMarker:
    """
    Sentinel marking a key for removal during merge.

    This is a singleton — use the REMOVE constant, not the class.
    """

    __slots__ = ()

    _instance: _typing.ClassVar[_RemoveMarker | None] = None

    def __new__(cls) -> _RemoveMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REMOVE"

    def __reduce__(self) -> tuple[_typing.Callable[[], _RemoveMarker], tuple[()]]:
        """Support pickling and deepcopy by returning the singleton factory."""
        return (_get_remove_singleton, ())

    def __copy__(self) -> _RemoveMarker:
        return self

    def __deepcopy__(self, memo: dict[int, _typing.Any]) -> _RemoveMarker:
        return self


def _get_remove_singleton() -> _RemoveMarker:
    """Return the REMOVE singleton. Used by pickle."""
    return REMOVE


REMOVE = _RemoveMarker()
OMIT = REMOVE


def is_remove(value: _typing.Any) -> bool:
    """Check if a value is the REMOVE marker."""
    return value is REMOVE
