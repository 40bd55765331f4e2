# pyright: reportExplicitAny=false, reportAny=false
"""Helper utilities for spec commands."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from specmerge.cli._commands._context import CLIContext, OutputFormat
from specmerge.cli._commands._shared import (
    format_json,
    format_yaml,
    get_error_console,
)
from specmerge.config import resolve_project_root
from specmerge.exceptions import SpecParseError, SpecValidationError
from specmerge.spec import (
    BaseSnapshot,
    MergeEngine,
    Spec,
    SpecStore,
    SpecSummary,
    normalize_domain,
)
from specmerge.spec._io import read_text

from ._output import SpecData

__all__ = [
    "get_error_console",
    "get_merge_engine",
    "get_project_root",
    "get_spec_store",
    "load_domain_snapshots",
    "load_snapshot",
    "load_snapshots",
    "output_result",
    "spec_to_dict",
    "summary_to_dict",
]


def get_project_root() -> Path:
    """Get the project root from CLIContext, or discover it from the cwd."""
    ctx = CLIContext.get_current()
    if ctx.project_root is not None:
        return ctx.project_root
    return resolve_project_root()


def get_spec_store() -> SpecStore:
    """Get SpecStore configured from CLIContext.

    The storage root comes from the ``specs.directory`` setting, resolved
    against the project root.

    Returns:
        A configured SpecStore instance.
    """
    ctx = CLIContext.get_current()
    base_path = ctx.config.specs.resolve_directory(get_project_root())
    return SpecStore(base_path, logger=ctx.logger)


def get_merge_engine() -> MergeEngine:
    """Get MergeEngine over the configured SpecStore.

    Returns:
        A configured MergeEngine instance.
    """
    ctx = CLIContext.get_current()
    return MergeEngine(get_spec_store(), logger=ctx.logger)


def summary_to_dict(summary: SpecSummary) -> SpecData:
    """Convert SpecSummary to dictionary."""
    return {
        "domain": summary.domain,
        "path": str(summary.path),
        "updated": summary.updated,
        "fingerprint": summary.fingerprint,
        "requirement_count": summary.requirement_count,
    }


def spec_to_dict(spec: Spec, *, include_content: bool = False) -> SpecData:
    """Convert Spec to dictionary.

    Args:
        spec: The parsed spec.
        include_content: Include the document body.

    Returns:
        Dictionary with the spec's identity, fingerprints and requirements.
    """
    fingerprints = SpecStore.requirement_fingerprints(spec)
    updated = spec.metadata.get("updated")
    data: SpecData = {
        "domain": spec.domain,
        "path": str(spec.path) if spec.path else None,
        "updated": str(updated) if updated is not None else None,
        "fingerprint": spec.fingerprint,
        "requirements": [
            {"id": req.id, "title": req.title, "fingerprint": fingerprints[req.id]}
            for req in spec.requirements
        ],
    }
    if include_content:
        data["content"] = spec.content
    return data


def output_result(
    data: SpecData,
    format_: OutputFormat,
    text_formatter: Callable[[SpecData], str],
) -> None:
    """Print a command result in the requested format.

    JSON and YAML render the data as-is; every other format uses the
    command's text formatter.
    """
    if format_ == OutputFormat.JSON:
        print(format_json(data))
    elif format_ == OutputFormat.YAML:
        print(format_yaml(data), end="")
    else:
        print(text_formatter(data))


def _read_snapshot_file(path: Path) -> Any:
    text = read_text(path)
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line = mark.line + 1 if mark is not None else None
        msg = f"Invalid snapshot file {path}: {e}"
        raise SpecParseError(
            msg, path=path, line=line, content_type="snapshot", cause=e
        ) from e


def _snapshot_from_data(data: Any, path: Path) -> BaseSnapshot:
    if not isinstance(data, dict):
        msg = f"Snapshot in {path} must be a mapping"
        raise SpecValidationError(
            msg, field="snapshot", value=str(path), expected="mapping"
        )
    try:
        return BaseSnapshot.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        msg = f"Invalid snapshot in {path}: {e}"
        raise SpecValidationError(
            msg, field="snapshot", value=str(path), expected="base snapshot"
        ) from e


def load_snapshots(path: Path) -> dict[str, BaseSnapshot | None]:
    """Load a domain-to-snapshot mapping as printed by ``spec snapshot``.

    A file holding a single snapshot is keyed by the empty string.

    Raises:
        SpecIOError: If the file cannot be read.
        SpecParseError: If the file is not valid JSON or YAML.
        SpecValidationError: If an entry is not a valid snapshot.
    """
    data = _read_snapshot_file(path)
    if isinstance(data, dict) and "base_fingerprint" in data:
        return {"": _snapshot_from_data(data, path)}
    if not isinstance(data, dict):
        msg = f"Snapshot file {path} must contain a mapping"
        raise SpecValidationError(
            msg, field="snapshot", value=str(path), expected="mapping"
        )
    return {
        normalize_domain(str(domain)): (
            None if entry is None else _snapshot_from_data(entry, path)
        )
        for domain, entry in data.items()
    }


def load_domain_snapshots(path: Path) -> dict[str, BaseSnapshot | None]:
    """Load a snapshot file that must be keyed by domain.

    Raises:
        SpecIOError: If the file cannot be read.
        SpecParseError: If the file is not valid JSON or YAML.
        SpecValidationError: If the file holds a single unkeyed snapshot or
            an entry is not a valid snapshot.
    """
    snapshots = load_snapshots(path)
    if "" in snapshots:
        msg = f"Snapshot file must be keyed by domain: {path}"
        raise SpecValidationError(
            msg, field="snapshot", value=str(path), expected="mapping keyed by domain"
        )
    return snapshots


def load_snapshot(path: Path, domain: str) -> BaseSnapshot | None:
    """Load the snapshot for one domain from a snapshot file.

    The file may hold a single snapshot or a mapping keyed by domain.

    Raises:
        SpecIOError: If the file cannot be read.
        SpecParseError: If the file is not valid JSON or YAML.
        SpecValidationError: If the file has no snapshot for the domain.
    """
    snapshots = load_snapshots(path)
    if "" in snapshots:
        return snapshots[""]

    slug = normalize_domain(domain)
    if slug not in snapshots:
        msg = f"No snapshot for domain '{slug}' in {path}"
        raise SpecValidationError(
            msg, field="snapshot", value=str(path), expected=f"entry for '{slug}'"
        )
    return snapshots[slug]
