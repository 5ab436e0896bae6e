"""
Shared pytest fixtures for refmerge tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import refmerge

# =============================================================================
# Environment isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove REFMERGE_* and color variables so tests see defaults."""
    for key in list(_os.environ):
        if key.startswith("REFMERGE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


# =============================================================================
# Merge fixtures
# =============================================================================


@_pytest.fixture
def nested_state() -> dict[str, _typing.Any]:
    """Nested state with records, lists of records, and an empty record."""
    return {
        "x": {
            "a": {"x": 1, "y": 1},
            "b": {
                "x": 1,
                "y": [
                    {"f": 1, "g": 2, "h": []},
                    {"f": 3, "g": 4, "h": [5, 6]},
                ],
            },
            "c": {},
        },
        "y": [1, 2, 3],
        "z": [{"a": 1}, {"a": 1}],
    }


@_pytest.fixture
def nested_changes() -> dict[str, _typing.Any]:
    """Changes for nested_state touching x.a, x.b.y, and no-op y and z."""
    return {
        "x": {
            "a": {"foo": "bar", "y": refmerge.REMOVE},
            "b": {
                "y": {
                    1: {"f": 4},
                    2: {"f": 5, "g": 6, "h": []},
                },
            },
        },
        "y": {1: 2},
        "z": [{"a": 1}, {"a": 1}],
    }


# =============================================================================
# File fixtures
# =============================================================================


@_pytest.fixture
def write_doc(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """Factory writing a document into tmp_path and returning its path."""

    def _write(name: str, content: str) -> _pathlib.Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
