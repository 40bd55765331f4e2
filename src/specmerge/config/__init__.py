"""specmerge configuration.

This module provides the public API for specmerge configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from specmerge.config import Config
    >>> config = Config.load()
    >>> config.specs.directory
    '.specmerge/specs'
"""

from specmerge.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG, DEFAULT_SPECS_DIRECTORY
from ._discovery import (
    discover_sources,
    find_project_root,
    get_user_config_path,
    resolve_project_root,
)
from ._load import safe_load_config
from ._loader import deep_merge, parse_env_vars, parse_string_value, read_toml_file, set_nested_key
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SpecsConfig,
)
from ._validation import ValidationIssue, raise_if_validation_errors, validate_config

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_SPECS_DIRECTORY",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SpecsConfig",
    "ValidationIssue",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "get_user_config_path",
    "parse_env_vars",
    "parse_string_value",
    "raise_if_validation_errors",
    "read_toml_file",
    "resolve_project_root",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
]
