# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""Porcelain commands for spec storage.

This module provides user-facing commands for initializing the spec store
and for creating, listing, showing and snapshotting domain specs.
"""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from specmerge.cli._commands._context import OutputFormat
from specmerge.exceptions import SpecMergeError
from specmerge.spec import DeltaParser
from specmerge.spec._io import write_text_atomic

from ._app import app
from ._errors import EXIT_NOT_FOUND, exit_code_for_exception
from ._helpers import (
    get_error_console,
    get_spec_store,
    output_result,
    spec_to_dict,
    summary_to_dict,
)
from ._output import format_spec_info, format_spec_table

__all__ = [
    "create",
    "init",
    "list_specs",
    "show",
    "snapshot",
    "template",
]


@app.command(name="init")
def init() -> None:
    """Create the spec storage directory and its README"""
    console = get_error_console()

    try:
        store = get_spec_store()
        store.initialize()
    except SpecMergeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(exit_code_for_exception(e)) from None

    print(f"Initialized spec storage at {store.base_path}")


@app.command(name="create")
def create(
    domain: str,
    /,
    title: Annotated[
        str | None,
        Parameter(name=["--title", "-t"], help="Document title"),
    ] = None,
) -> None:
    """Create a scaffold spec for a new domain

    Args:
        domain: Domain name; normalized to a kebab-case slug.
        title: Document title. Defaults to the capitalized domain name.
    """
    console = get_error_console()

    try:
        path = get_spec_store().create(domain, title)
    except SpecMergeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(exit_code_for_exception(e)) from None

    print(f"Created {path}")


@app.command(name="list")
def list_specs(
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """List domain specs

    Args:
        format_: Output format.
    """
    summaries = [summary_to_dict(summary) for summary in get_spec_store().list_specs()]

    if format_ in (OutputFormat.JSON, OutputFormat.YAML):
        output_result({"specs": summaries}, format_, format_spec_table)
        return

    if not summaries:
        print("No specs found.")
        return

    if format_ == OutputFormat.PLAIN:
        print("\n".join(str(summary["domain"]) for summary in summaries))
    else:
        print(format_spec_table(summaries))


@app.command(name="show")
def show(
    domain: str,
    /,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TEXT,
) -> None:
    """Show a domain spec with its requirement fingerprints

    Args:
        domain: Domain name.
        format_: Output format. ``plain`` prints the document body.
    """
    console = get_error_console()

    try:
        spec = get_spec_store().read(domain)
    except SpecMergeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(exit_code_for_exception(e)) from None

    if format_ == OutputFormat.PLAIN:
        print(spec.content, end="" if spec.content.endswith("\n") else "\n")
        return

    include_content = format_ in (OutputFormat.JSON, OutputFormat.YAML)
    output_result(
        spec_to_dict(spec, include_content=include_content), format_, format_spec_info
    )


@app.command(name="snapshot")
def snapshot(
    domains: list[str],
    /,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (json or yaml)"),
    ] = OutputFormat.JSON,
) -> None:
    """Capture base snapshots for the domains a change will touch

    The output can be saved and passed back to ``spec merge --snapshot``.

    Args:
        domains: Domain names.
        format_: Output format.
    """
    console = get_error_console()

    snapshots = get_spec_store().fingerprint_snapshot(domains)
    data = {
        domain: snap.to_dict() if snap is not None else None
        for domain, snap in snapshots.items()
    }

    yaml_output = format_ == OutputFormat.YAML
    output_result(data, OutputFormat.YAML if yaml_output else OutputFormat.JSON, str)

    missing = [domain for domain, snap in snapshots.items() if snap is None]
    if missing:
        console.print(
            f"[yellow]Warning:[/yellow] No snapshot for: {', '.join(missing)}"
        )
        raise SystemExit(EXIT_NOT_FOUND)


@app.command(name="template")
def template(
    domain: str,
    change_id: str,
    /,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="Write the template to a file"),
    ] = None,
) -> None:
    """Render a delta template for a change

    Args:
        domain: Target domain.
        change_id: Change proposal ID.
        output: File to write. Prints to stdout if omitted.
    """
    console = get_error_console()
    text = DeltaParser().generate_template(domain, change_id)

    if output is None:
        print(text, end="")
        return

    try:
        write_text_atomic(output, text)
    except SpecMergeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(exit_code_for_exception(e)) from None

    print(f"Wrote {output}")
