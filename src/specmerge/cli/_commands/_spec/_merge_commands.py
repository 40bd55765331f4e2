# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002, PLR0913
"""Delta validation and merge commands."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from specmerge.cli._commands._context import OutputFormat
from specmerge.cli._commands._shared import ExitCode, exit_with_error
from specmerge.exceptions import SpecDivergenceError, SpecMergeError
from specmerge.spec import DeltaParser, MergeOptions

from ._app import app
from ._errors import (
    EXIT_CONFLICT,
    EXIT_VALIDATION_ERROR,
    exit_code_for_exception,
)
from ._helpers import (
    get_error_console,
    get_merge_engine,
    load_domain_snapshots,
    load_snapshot,
    output_result,
)
from ._output import (
    SpecData,
    format_change_result,
    format_divergence,
    format_merge_report,
    format_validation,
)

__all__ = ["check", "merge", "merge_change", "validate"]


@app.command(name="validate")
def validate(
    delta_file: Path,
    /,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Validate a delta file without touching any spec

    Args:
        delta_file: Path to the delta document.
        format_: Output format.
    """
    console = get_error_console()
    parser = DeltaParser()

    try:
        delta = parser.parse_file(delta_file)
    except SpecMergeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(exit_code_for_exception(e)) from None

    result = parser.validate(delta)
    conflicts = parser.find_self_conflicts(delta)
    data: SpecData = {
        "domain": delta.domain,
        "change": delta.source_change_id,
        "valid": result.valid and not conflicts,
        "errors": list(result.errors),
        "self_conflicts": [conflict.to_dict() for conflict in conflicts],
    }
    output_result(data, format_, format_validation)

    if not data["valid"]:
        raise SystemExit(EXIT_VALIDATION_ERROR)


@app.command(name="merge")
def merge(
    domain: str,
    delta_file: Path,
    /,
    change_id: Annotated[
        str | None,
        Parameter(
            name=["--change-id", "-c"],
            help="Change ID (defaults to the delta's 'change' frontmatter)",
        ),
    ] = None,
    snapshot: Annotated[
        Path | None,
        Parameter(name=["--snapshot", "-s"], help="Base snapshot file"),
    ] = None,
    force: Annotated[
        bool,
        Parameter(name=["--force"], help="Merge even if the spec has diverged"),
    ] = False,
    dry_run: Annotated[
        bool,
        Parameter(name=["--dry-run"], help="Compute the merge without writing"),
    ] = False,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Merge a delta into a domain spec

    Args:
        domain: Target domain.
        delta_file: Path to the delta document.
        change_id: Change proposal ID.
        snapshot: Snapshot file from ``spec snapshot``. Without one,
            divergence is not checked.
        force: Merge even if the spec changed since the snapshot.
        dry_run: Report what the merge would do without writing.
        format_: Output format.
    """
    console = get_error_console()

    try:
        engine = get_merge_engine()
        delta = engine.parser.parse_file(delta_file)

        effective_change_id = change_id or delta.source_change_id
        if not effective_change_id:
            exit_with_error(
                "No change ID: pass --change-id or set 'change' in the delta frontmatter",
                ExitCode.VALIDATION_ERROR,
                console=console,
            )

        base_snapshot = load_snapshot(snapshot, domain) if snapshot else None
        report = engine.merge(
            effective_change_id,
            delta,
            domain,
            base_snapshot,
            MergeOptions(force=force, dry_run=dry_run),
        )
    except SpecDivergenceError as e:
        console.print(f"[red]Error:[/red] {e}")
        if e.report is not None:
            output_result(e.report.to_dict(), format_, format_merge_report)
        console.print("Refresh the snapshot or pass --force to merge anyway.")
        raise SystemExit(exit_code_for_exception(e)) from None
    except SpecMergeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(exit_code_for_exception(e)) from None

    data = report.to_dict()
    if dry_run:
        data["merged_content"] = report.merged_content
    output_result(data, format_, format_merge_report)

    if not report.success:
        raise SystemExit(EXIT_CONFLICT)


@app.command(name="merge-change")
def merge_change(
    change_dir: Path,
    /,
    change_id: Annotated[
        str | None,
        Parameter(
            name=["--change-id", "-c"],
            help="Change ID (defaults to the directory name)",
        ),
    ] = None,
    snapshot: Annotated[
        Path | None,
        Parameter(name=["--snapshot", "-s"], help="Snapshot file keyed by domain"),
    ] = None,
    force: Annotated[
        bool,
        Parameter(name=["--force"], help="Merge even if a spec has diverged"),
    ] = False,
    dry_run: Annotated[
        bool,
        Parameter(name=["--dry-run"], help="Compute the merges without writing"),
    ] = False,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Merge every spec delta of a change directory

    Deltas are read from ``<change-dir>/specs/<domain>/spec.md``.

    Args:
        change_dir: Change proposal directory.
        change_id: Change proposal ID.
        snapshot: Snapshot file from ``spec snapshot``.
        force: Merge even if a spec changed since the snapshot.
        dry_run: Report what the merges would do without writing.
        format_: Output format.
    """
    console = get_error_console()

    try:
        snapshots = load_domain_snapshots(snapshot) if snapshot else None
        result = get_merge_engine().merge_change(
            change_id or change_dir.name,
            change_dir,
            snapshots,
            MergeOptions(force=force, dry_run=dry_run),
        )
    except SpecMergeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(exit_code_for_exception(e)) from None

    output_result(result.to_dict(), format_, format_change_result)

    if not result.success:
        raise SystemExit(EXIT_CONFLICT)


@app.command(name="check")
def check(
    domain: str,
    /,
    snapshot: Annotated[
        Path,
        Parameter(name=["--snapshot", "-s"], help="Base snapshot file"),
    ],
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Check whether a domain spec changed since a snapshot

    Args:
        domain: Domain name.
        snapshot: Snapshot file from ``spec snapshot``.
        format_: Output format.
    """
    console = get_error_console()

    try:
        base_snapshot = load_snapshot(snapshot, domain)
        if base_snapshot is None:
            exit_with_error(
                f"Snapshot for '{domain}' is empty",
                ExitCode.VALIDATION_ERROR,
                console=console,
            )
        status = get_merge_engine().check_divergence(domain, base_snapshot)
    except SpecMergeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(exit_code_for_exception(e)) from None

    output_result(status.to_dict(), format_, format_divergence)

    if status.diverged:
        raise SystemExit(EXIT_CONFLICT)
