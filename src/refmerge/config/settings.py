"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with REFMERGE_ prefix
3. .env file named by REFMERGE_ENV_FILE (if set and present)
4. Field defaults

Nested config uses double underscore delimiter:
  REFMERGE_OUTPUT__FORMAT=json
  REFMERGE_LOGGING__LEVEL=debug
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import refmerge.config.types as types
import refmerge.constants as constants


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit REFMERGE_ENV_FILE is honoured; a missing file is not
    an error, it just means no .env is loaded.
    """
    if env_file := _os.environ.get(f"{constants.ENV_PREFIX}ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    refmerge configuration settings.

    All settings can be overridden via environment variables with REFMERGE_
    prefix. For nested config, use double underscore:
    REFMERGE_OUTPUT__INDENT=4
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # REFMERGE_OUTPUT__FORMAT
        extra="allow",
    )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without .env
        interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    # =========================================================================
    # Nested config sections
    # =========================================================================

    output: types.OutputConfig = _pydantic.Field(default_factory=types.OutputConfig)
    """How merge results are printed."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    # =========================================================================
    # Convenience accessors
    # =========================================================================

    @property
    def output_format(self) -> str:
        """Output format (alias to output.format)."""
        return self.output.format

    @property
    def log_level(self) -> int:
        """Numeric log level for the logging module."""
        level: int = _logging.getLevelName(self.logging.level.upper())
        return level

    def collect_unknown_fields(self) -> dict[str, _typing.Any]:
        """
        Collect unrecognized settings from all nested sections.

        Returns:
            Flat dict of dotted path -> value, e.g. {"output.indnet": 4}.
        """
        sections: dict[str, types.ConfigBase] = {
            "output": self.output,
            "logging": self.logging,
        }
        result: dict[str, _typing.Any] = {}
        for name, section in sections.items():
            result.update(section.collect_all_extra_fields(name))
        return result
