"""Configuration type definitions for refmerge settings.

These are the "config section" models nested within the main Settings
class:
- OutputConfig: format, indent, sort_keys
- LoggingConfig: level

All types use `extra="allow"` so unknown fields are preserved rather than
silently dropped. `refmerge config show` reports them as likely typos.
"""

import typing as _typing

import pydantic as _pydantic

import refmerge.constants as constants

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config types.

    Unknown fields are kept (extra="allow") so they can be audited.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}

    def collect_all_extra_fields(
        self,
        prefix: str = "",
    ) -> dict[str, _typing.Any]:
        """
        Collect extra fields keyed by dotted path.

        Returns a flat dict with dotted paths as keys, e.g.:
            {"output.indnet": 4}

        Args:
            prefix: Dotted path prefix, usually the section name.
        """
        result: dict[str, _typing.Any] = {}

        for key, value in self.get_extra_fields().items():
            path = f"{prefix}.{key}" if prefix else key
            result[path] = value

        return result


# =============================================================================
# Output Settings
# =============================================================================


class OutputConfig(ConfigBase):
    """
    How merge results are printed.

    Env: REFMERGE_OUTPUT__*
    """

    format: _typing.Literal["yaml", "json"] = constants.DEFAULT_OUTPUT_FORMAT  # type: ignore[assignment]
    """Document format for `refmerge merge`."""

    indent: int = _pydantic.Field(default=constants.DEFAULT_INDENT, ge=0, le=8)
    """Indentation width."""

    sort_keys: bool = False
    """Sort mapping keys instead of keeping merge order."""


# =============================================================================
# Logging Settings
# =============================================================================


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    Env: REFMERGE_LOGGING__*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = constants.DEFAULT_LOG_LEVEL  # type: ignore[assignment]
    """Log level for the CLI."""
