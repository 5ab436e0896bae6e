"""
refmerge - reference-preserving deep merge for immutable state.

Merging changes into a nested dict/list returns the very same object when
nothing changed, and reuses every untouched subtree by reference, so
callers can use `is` to decide whether downstream work is needed.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("refmerge")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "refmerge Contributors"

from refmerge.core import OMIT, REMOVE, changed_paths, merge, merge_pair  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "OMIT",
    "REMOVE",
    "changed_paths",
    "merge",
    "merge_pair",
]
