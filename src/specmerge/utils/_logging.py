"""Logging utilities for specmerge.

This module provides a standalone structlog logger factory that writes
JSON-formatted or text-formatted logs to the specmerge CLI log file. Each
logger is self-contained and does not modify global structlog configuration.
"""

import logging
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_cli_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str | None) -> int:
    """Resolve the effective logging level.

    Precedence: SPECMERGE_DEBUG (forces DEBUG), then ``level``, then
    SPECMERGE_LOG_LEVEL, then INFO.
    """
    if getenv("SPECMERGE_DEBUG", None):
        return logging.DEBUG

    name = level or getenv("SPECMERGE_LOG_LEVEL", "info")
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _create_logger(
    log_path: Path,
    *,
    log_level: int,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    log_path.parent.mkdir(parents=True, exist_ok=True)

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLoggerFactory(file=log_path.open("a"))(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Creates a standalone structlog logger that writes structured logs to
    either a specified file or the default CLI log file at
    .specmerge/logs/cli.log in the current Git worktree.

    The log level is determined by (in order of precedence):
    1. SPECMERGE_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter
    3. SPECMERGE_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses the default CLI log file if empty).
        command: Name of the CLI command for context (bound to all entries).

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    log_path = Path(log_file) if log_file else get_cli_log_file()

    logger = _create_logger(
        log_path,
        log_level=_log_level_from_string(level),
        log_format=log_format,
    )

    if command:
        return logger.bind(command=command)
    return logger
