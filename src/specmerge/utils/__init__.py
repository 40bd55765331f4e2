"""Shared utilities for specmerge."""

from ._logging import LogFormatType, create_cli_logger
from ._paths import (
    SPECMERGE_DIRNAME,
    get_cli_log_file,
    get_log_dir,
    get_specmerge_dir,
    get_worktree_root,
)

__all__ = [
    "SPECMERGE_DIRNAME",
    "LogFormatType",
    "create_cli_logger",
    "get_cli_log_file",
    "get_log_dir",
    "get_specmerge_dir",
    "get_worktree_root",
]
