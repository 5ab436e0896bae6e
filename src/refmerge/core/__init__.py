"""
Core merge engine for refmerge.

Pure functions over plain dicts and lists: no I/O, no shared state.
"""

from refmerge.core.diff import changed_paths
from refmerge.core.markers import OMIT, REMOVE, is_remove
from refmerge.core.merge import merge, merge_pair
from refmerge.core.types import Kind, Path, is_collection, is_record, kind_of

__all__ = [
    "OMIT",
    "REMOVE",
    "Kind",
    "Path",
    "changed_paths",
    "is_collection",
    "is_record",
    "is_remove",
    "kind_of",
    "merge",
    "merge_pair",
]
