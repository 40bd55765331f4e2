"""specmerge CLI commands."""
# pyright: reportUnusedCallResult=false

from cyclopts import App

from ._context import CLIContext, OutputFormat
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    format_table,
    format_yaml,
    get_error_console,
)
from ._spec import app as spec_app

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "exit_with_error",
    "format_json",
    "format_table",
    "format_yaml",
    "get_error_console",
    "register_commands",
    "spec_app",
]


def register_commands(app: App) -> None:
    app.command(spec_app)
