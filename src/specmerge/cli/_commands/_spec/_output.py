# pyright: reportAny=false
"""Output formatters for spec commands."""

from typing import Any

from specmerge.cli._commands._shared import format_table

# Type alias for spec data - uses Any to match library signatures
type SpecData = dict[str, Any]  # pyright: ignore[reportExplicitAny]


def format_spec_table(specs: list[SpecData]) -> str:
    """Format spec summaries as table with Domain, Requirements, Fingerprint, Updated columns.

    Args:
        specs: List of spec summary dictionaries.

    Returns:
        Markdown table string representation.
    """
    headers = ["Domain", "Requirements", "Fingerprint", "Updated"]
    rows = [
        [
            str(spec.get("domain", "")),
            str(spec.get("requirement_count", 0)),
            str(spec.get("fingerprint", "")),
            str(spec.get("updated") or "-"),
        ]
        for spec in specs
    ]
    return format_table(headers, rows)


def format_spec_info(spec: SpecData) -> str:
    """Format a spec as key-value info followed by its requirement list.

    Args:
        spec: Spec dictionary.

    Returns:
        Formatted string with one field per line.
    """
    lines = [
        f"Domain:       {spec.get('domain', '')}",
        f"Path:         {spec.get('path', '')}",
        f"Fingerprint:  {spec.get('fingerprint', '')}",
    ]
    if spec.get("updated"):
        lines.append(f"Updated:      {spec['updated']}")

    requirements: list[SpecData] = spec.get("requirements", [])
    lines.extend(["", f"Requirements ({len(requirements)}):"])
    lines.extend(
        f"  {req['id']}  {req['title']}  [{req['fingerprint']}]" for req in requirements
    )
    return "\n".join(lines)


def format_validation(data: SpecData) -> str:
    """Format a delta validation result.

    Args:
        data: Validation dictionary with ``valid``, ``errors`` and
            ``self_conflicts`` keys.

    Returns:
        Human-readable validation summary.
    """
    errors: list[str] = data.get("errors", [])
    conflicts: list[SpecData] = data.get("self_conflicts", [])
    if not errors and not conflicts:
        return f"Delta for '{data.get('domain', '')}' is valid."

    lines = [f"Delta for '{data.get('domain') or '?'}' is invalid:"]
    lines.extend(f"  - {error}" for error in errors)
    lines.extend(f"  - {conflict['message']}" for conflict in conflicts)
    return "\n".join(lines)


def _format_counts(counts: SpecData) -> str:
    return ", ".join(f"{kind} {counts.get(kind, 0)}" for kind in ("ADDED", "MODIFIED", "REMOVED"))


def format_merge_report(report: SpecData) -> str:
    """Format a merge report for terminal output.

    Args:
        report: Merge report dictionary.

    Returns:
        Multi-line summary of operations, conflicts and divergence.
    """
    status = "succeeded" if report.get("success") else "failed"
    prefix = "Dry run: merge" if report.get("dry_run") else "Merge"
    lines = [
        f"{prefix} of '{report.get('change_id', '')}' into '{report.get('domain', '')}' {status}",
        f"Operations: {_format_counts(report.get('operations_applied', {}))}",
    ]

    conflicts: list[SpecData] = report.get("conflicts", [])
    if conflicts:
        lines.append(f"Conflicts ({len(conflicts)}):")
        lines.extend(f"  - {conflict['message']}" for conflict in conflicts)

    divergence: list[SpecData] = report.get("divergence", [])
    if divergence:
        label = "Divergence (forced)" if report.get("forced") else "Divergence"
        lines.append(f"{label}:")
        lines.extend(f"  - {detail['message']}" for detail in divergence)

    return "\n".join(lines)


def format_divergence(status: SpecData) -> str:
    """Format a divergence check result.

    Args:
        status: Divergence status dictionary.

    Returns:
        One line for an unchanged spec, or a list of changed requirements.
    """
    domain = status.get("domain", "")
    if not status.get("diverged"):
        return f"Spec '{domain}' has not changed since the snapshot."

    lines = [
        f"Spec '{domain}' has diverged "
        f"({status.get('base_fingerprint', '')} -> {status.get('current_fingerprint', '')}):"
    ]
    lines.extend(f"  - {detail['message']}" for detail in status.get("details", []))
    return "\n".join(lines)


def format_change_result(result: SpecData) -> str:
    """Format the result of merging every delta of a change.

    Args:
        result: Change merge result dictionary.

    Returns:
        Per-domain summary lines, then errors and warnings.
    """
    status = "succeeded" if result.get("success") else "failed"
    lines = [f"Merge of change '{result.get('change_id', '')}' {status}"]

    for report in result.get("domains_merged", []):
        outcome = "ok" if report.get("success") else "failed"
        lines.append(
            f"  {report['domain']}: {outcome} "
            f"({_format_counts(report.get('operations_applied', {}))})"
        )

    errors: list[SpecData] = result.get("errors", [])
    if errors:
        lines.append("Errors:")
        lines.extend(f"  - {error['domain']}: {error['message']}" for error in errors)

    warnings: list[str] = result.get("warnings", [])
    if warnings:
        lines.append("Warnings:")
        lines.extend(f"  - {warning}" for warning in warnings)

    return "\n".join(lines)
