"""
Configuration module for refmerge.

Uses pydantic-settings for environment variable loading.
"""

from refmerge.config.settings import Settings
from refmerge.config.types import ConfigBase, LoggingConfig, OutputConfig

__all__ = ["ConfigBase", "LoggingConfig", "OutputConfig", "Settings"]
