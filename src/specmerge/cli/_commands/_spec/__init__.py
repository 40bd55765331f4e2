# pyright: reportUnusedImport=false
"""Commands for domain spec management and delta merging."""

from specmerge.cli._commands._context import CLIContext, OutputFormat
from specmerge.cli._commands._shared import ExitCode

# Import command modules to register them with the app
from . import (
    _merge_commands,  # noqa: F401
    _porcelain,  # noqa: F401
)
from ._app import app
from ._errors import (
    EXIT_CONFLICT,
    EXIT_INTERNAL_ERROR,
    EXIT_IO_ERROR,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    exit_code_for_exception,
)
from ._helpers import (
    get_merge_engine,
    get_project_root,
    get_spec_store,
    load_domain_snapshots,
    load_snapshot,
    load_snapshots,
    spec_to_dict,
    summary_to_dict,
)
from ._output import (
    SpecData,
    format_change_result,
    format_divergence,
    format_merge_report,
    format_spec_info,
    format_spec_table,
    format_validation,
)

__all__ = [
    "EXIT_CONFLICT",
    "EXIT_INTERNAL_ERROR",
    "EXIT_IO_ERROR",
    "EXIT_NOT_FOUND",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "SpecData",
    "app",
    "exit_code_for_exception",
    "format_change_result",
    "format_divergence",
    "format_merge_report",
    "format_spec_info",
    "format_spec_table",
    "format_validation",
    "get_merge_engine",
    "get_project_root",
    "get_spec_store",
    "load_domain_snapshots",
    "load_snapshot",
    "load_snapshots",
    "spec_to_dict",
    "summary_to_dict",
]
