"""Configuration models.

This module provides Pydantic models for specmerge configuration sections
and the main Config container class.
"""

from specmerge.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from specmerge.config._models._config import Config
from specmerge.config._models._logging import LoggingConfig
from specmerge.config._models._specs import SpecsConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SpecsConfig",
]
