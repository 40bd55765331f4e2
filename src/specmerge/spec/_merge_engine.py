# pyright: reportAny=false, reportExplicitAny=false
"""Merge engine for applying spec deltas to per-domain specs.

This module provides the MergeEngine class, which merges a parsed delta into
the live spec of one domain:

1. Validate the delta and reject contradictory operations, before the spec
   is read.
2. Compare the live spec with the base snapshot recorded when the delta was
   drafted. A changed spec stops the merge unless it is forced.
3. Apply removals, then modifications, then additions, collecting
   per-operation conflicts instead of failing.
4. Rebuild the document so that every line the delta did not touch stays
   byte-identical, and write it back once.

The fingerprint comparison in step 2 is the only concurrency control: callers
serialize merges per domain.
"""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Final

import structlog
from structlog.typing import FilteringBoundLogger

from specmerge.exceptions import (
    DeltaSelfConflictError,
    DeltaStructureError,
    SpecDivergenceError,
    SpecMergeError,
)
from specmerge.spec._delta_parser import DeltaParser
from specmerge.spec._ids import generate_fingerprint, normalize_domain
from specmerge.spec._models import (
    Added,
    AppliedOperations,
    BaseSnapshot,
    ChangeMergeResult,
    ConflictKind,
    Delta,
    DivergenceDetail,
    DivergenceStatus,
    DomainMergeError,
    MergeOptions,
    MergeReport,
    Modified,
    Operation,
    OperationConflict,
    OperationCounts,
    OperationKind,
    Removed,
    Requirement,
    Spec,
)
from specmerge.spec._scanner import (
    RequirementSegment,
    RequirementsSectionEnd,
    is_blank,
    scan_blocks,
    split_lines,
)
from specmerge.spec._store import SPEC_FILENAME, SpecStore

__all__ = ["MergeEngine"]

_CHANGE_SPECS_DIR: Final = "specs"

# Evaluation order of operations: removals, modifications, additions
_OPERATION_RANK: Final = {Removed: 0, Modified: 1, Added: 2}


# =============================================================================
# Reconstruction
# =============================================================================


def _append_blocks(lines: list[str], blocks: Iterable[Requirement]) -> None:
    """Append requirement blocks after the last non-blank line.

    Each block is preceded by one blank line and followed by one blank line.
    """
    while lines and is_blank(lines[-1]):
        _ = lines.pop()
    for block in blocks:
        if lines:
            lines.append("")
        lines.extend(split_lines(block.content))
    lines.append("")


def _reconstruct(
    content: str,
    removals: set[str],
    modifications: Mapping[str, Requirement],
    additions: list[Requirement],
) -> str:
    lines: list[str] = []
    pending = bool(additions)

    for segment in scan_blocks(split_lines(content)):
        match segment:
            case RequirementSegment(id=requirement_id) if requirement_id in removals:
                continue
            case RequirementSegment(id=requirement_id) if (
                requirement_id in modifications
            ):
                lines.extend(split_lines(modifications[requirement_id].content))
                lines.extend(segment.trailing_blank_lines)
            case RequirementsSectionEnd():
                if pending:
                    _append_blocks(lines, additions)
                    pending = False
            case _:
                lines.extend(segment.lines)

    # No requirements section: additions go at the end of the document
    if pending:
        _append_blocks(lines, additions)

    return "\n".join(lines)


def _analyze_divergence(
    base_snapshot: BaseSnapshot,
    current: Mapping[str, str],
) -> tuple[DivergenceDetail, ...]:
    base = base_snapshot.requirement_fingerprints
    details: list[DivergenceDetail] = []

    for requirement_id, base_fingerprint in base.items():
        current_fingerprint = current.get(requirement_id)
        if current_fingerprint is None:
            details.append(
                DivergenceDetail(
                    requirement_id=requirement_id,
                    change=OperationKind.REMOVED,
                    message=f"Requirement '{requirement_id}' was removed from spec",
                )
            )
        elif current_fingerprint != base_fingerprint:
            details.append(
                DivergenceDetail(
                    requirement_id=requirement_id,
                    change=OperationKind.MODIFIED,
                    message=f"Requirement '{requirement_id}' was modified in spec",
                )
            )

    for requirement_id in current:
        if requirement_id not in base:
            details.append(
                DivergenceDetail(
                    requirement_id=requirement_id,
                    change=OperationKind.ADDED,
                    message=f"Requirement '{requirement_id}' was added to spec",
                )
            )

    return tuple(details)


# =============================================================================
# MergeEngine Class
# =============================================================================


class MergeEngine:
    """Engine for merging spec deltas into live specs.

    Only the merge engine writes to the store during a merge, and it writes
    at most once per merge, after the full reconstruction is computed. Every
    fatal error leaves the spec on disk untouched.

    Attributes:
        _store: Store holding the live specs.
        _parser: Parser for delta documents.
        _logger: Logger for merge events.
    """

    __slots__: Final = ("_logger", "_parser", "_store")

    _store: SpecStore
    _parser: DeltaParser
    _logger: FilteringBoundLogger

    def __init__(
        self,
        store: SpecStore,
        *,
        parser: DeltaParser | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the merge engine.

        Args:
            store: Store holding the live specs.
            parser: Delta parser. Defaults to a new DeltaParser.
            logger: Logger for merge events. Defaults to the "specmerge"
                structlog logger.
        """
        self._store = store
        self._parser = parser or DeltaParser()
        self._logger = logger or structlog.get_logger("specmerge")

    @property
    def store(self) -> SpecStore:
        """The store holding the live specs."""
        return self._store

    @property
    def parser(self) -> DeltaParser:
        """The delta parser."""
        return self._parser

    # -------------------------------------------------------------------------
    # Delta Checks
    # -------------------------------------------------------------------------

    def _resolve_delta(self, delta_source: Delta | Path | str) -> Delta:
        # A str with a newline is document text; any other str is a path
        if isinstance(delta_source, Delta):
            return delta_source
        if isinstance(delta_source, Path):
            return self._parser.parse_file(delta_source)
        if "\n" in delta_source:
            return self._parser.parse_document(delta_source)
        return self._parser.parse_file(Path(delta_source))

    def _check_delta(self, delta: Delta, domain: str) -> None:
        validation = self._parser.validate(delta)
        errors = list(validation.errors)

        if delta.domain and normalize_domain(delta.domain) != domain:
            errors.append(
                f"Delta domain '{delta.domain}' does not match target domain '{domain}'"
            )

        if errors:
            msg = f"Invalid delta: {'; '.join(errors)}"
            raise DeltaStructureError(msg, errors=errors, domain=delta.domain)

        conflicts = self._parser.find_self_conflicts(delta)
        if conflicts:
            summary = "; ".join(conflict.message for conflict in conflicts)
            msg = f"Delta has internal conflicts: {summary}"
            raise DeltaSelfConflictError(msg, conflicts=conflicts, domain=delta.domain)

    # -------------------------------------------------------------------------
    # Divergence
    # -------------------------------------------------------------------------

    def _divergence_status(
        self,
        spec: Spec,
        base_snapshot: BaseSnapshot,
    ) -> DivergenceStatus:
        diverged = spec.fingerprint != base_snapshot.base_fingerprint
        details: tuple[DivergenceDetail, ...] = ()
        if diverged:
            details = _analyze_divergence(
                base_snapshot, self._store.requirement_fingerprints(spec)
            )
        return DivergenceStatus(
            domain=spec.domain,
            base_fingerprint=base_snapshot.base_fingerprint,
            current_fingerprint=spec.fingerprint,
            diverged=diverged,
            details=details,
        )

    def check_divergence(
        self,
        domain: str,
        base_snapshot: BaseSnapshot,
    ) -> DivergenceStatus:
        """Compare a live spec with a base snapshot without merging.

        Args:
            domain: Domain of the spec.
            base_snapshot: Snapshot captured when the delta was drafted.

        Returns:
            Divergence status, with per-requirement details if diverged.

        Raises:
            SpecNotFoundError: If no spec exists for the domain.
            SpecIOError: If the spec cannot be read.
            SpecParseError: If the spec cannot be parsed.
        """
        return self._divergence_status(self._store.read(domain), base_snapshot)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def apply_operations(
        self,
        content: str,
        operations: Iterable[Operation],
    ) -> AppliedOperations:
        """Apply an operation set to a document body.

        Operations are evaluated as removals, then modifications, then
        additions. Modifications and additions are checked against the live
        requirement IDs with the set's own removals already subtracted, so a
        removal and an addition of one ID replace the block. Operations that
        cannot apply are collected as conflicts and skipped.

        Args:
            content: Document body to rebuild.
            operations: Already validated operations.

        Returns:
            The rebuilt body with per-bucket counts and conflicts.
        """
        live = {
            segment.id
            for segment in scan_blocks(split_lines(content))
            if isinstance(segment, RequirementSegment)
        }

        removals: set[str] = set()
        modifications: dict[str, Requirement] = {}
        additions: list[Requirement] = []
        conflicts: list[OperationConflict] = []

        for operation in sorted(operations, key=lambda op: _OPERATION_RANK[type(op)]):
            match operation:
                case Removed(id=requirement_id):
                    if requirement_id not in live:
                        conflicts.append(
                            OperationConflict(
                                kind=ConflictKind.REMOVE_NONEXISTENT,
                                requirement_id=requirement_id,
                                operation=OperationKind.REMOVED,
                                message=(
                                    f"Cannot remove requirement '{requirement_id}': "
                                    "not found in spec"
                                ),
                            )
                        )
                        continue
                    removals.add(requirement_id)

                case Modified(id=requirement_id, requirement=requirement):
                    if requirement_id not in live or requirement_id in removals:
                        conflicts.append(
                            OperationConflict(
                                kind=ConflictKind.MODIFY_NONEXISTENT,
                                requirement_id=requirement_id,
                                operation=OperationKind.MODIFIED,
                                message=(
                                    f"Cannot modify requirement '{requirement_id}': "
                                    "not found in spec"
                                ),
                            )
                        )
                        continue
                    modifications[requirement_id] = requirement

                case Added(requirement=requirement):
                    taken = (live - removals) | {req.id for req in additions}
                    if requirement.id in taken:
                        conflicts.append(
                            OperationConflict(
                                kind=ConflictKind.ADD_EXISTING,
                                requirement_id=requirement.id,
                                operation=OperationKind.ADDED,
                                message=(
                                    f"Cannot add requirement '{requirement.id}': "
                                    "already exists in spec"
                                ),
                            )
                        )
                        continue
                    additions.append(requirement)

        return AppliedOperations(
            content=_reconstruct(content, removals, modifications, additions),
            counts=OperationCounts(
                added=len(additions),
                modified=len(modifications),
                removed=len(removals),
            ),
            conflicts=tuple(conflicts),
        )

    # -------------------------------------------------------------------------
    # Merge Operations
    # -------------------------------------------------------------------------

    def merge(
        self,
        change_id: str,
        delta_source: Delta | Path | str,
        domain: str,
        base_snapshot: BaseSnapshot | None = None,
        options: MergeOptions | None = None,
    ) -> MergeReport:
        """Merge one delta into the live spec of a domain.

        Args:
            change_id: Change proposal the delta belongs to.
            delta_source: A parsed Delta, a path to a delta file, or delta
                document text (any str containing a newline).
            domain: Target domain.
            base_snapshot: Snapshot captured when the delta was drafted. If
                None, divergence is not checked.
            options: Merge options. Defaults to a non-forced, writing merge.

        Returns:
            The merge report. Dry runs compute the same report without
            writing the spec.

        Raises:
            DeltaStructureError: If the delta is structurally invalid or
                targets another domain.
            DeltaSelfConflictError: If one requirement ID appears in two
                buckets of the delta.
            SpecDivergenceError: If the spec changed since the base snapshot
                and the merge is not forced.
            SpecNotFoundError: If no spec exists for the domain.
            SpecIOError: If the spec cannot be read or written.
            SpecParseError: If the spec or delta cannot be parsed.
        """
        options = options or MergeOptions()
        slug = normalize_domain(domain)

        delta = self._resolve_delta(delta_source)
        self._check_delta(delta, slug)

        log = self._logger.bind(change_id=change_id, domain=slug)
        log.info("merge_started", force=options.force, dry_run=options.dry_run)

        spec = self._store.read(slug)

        divergence: tuple[DivergenceDetail, ...] = ()
        diverged = False
        if base_snapshot is not None:
            status = self._divergence_status(spec, base_snapshot)
            diverged = status.diverged
            divergence = status.details

        if diverged:
            log.warning(
                "merge_diverged",
                base_fingerprint=base_snapshot.base_fingerprint if base_snapshot else None,
                current_fingerprint=spec.fingerprint,
                changed=[detail.requirement_id for detail in divergence],
                forced=options.force,
            )
            if not options.force:
                report = MergeReport(
                    change_id=change_id,
                    domain=slug,
                    divergence=divergence,
                    diverged=True,
                    dry_run=options.dry_run,
                    base_fingerprint=(
                        base_snapshot.base_fingerprint if base_snapshot else None
                    ),
                    current_fingerprint=spec.fingerprint,
                    merged_content=spec.content,
                )
                changed = ", ".join(detail.requirement_id for detail in divergence)
                msg = f"Spec divergence detected for domain '{slug}'"
                if changed:
                    msg = f"{msg} (changed requirements: {changed})"
                raise SpecDivergenceError(
                    msg,
                    domain=slug,
                    base_fingerprint=report.base_fingerprint or "",
                    current_fingerprint=spec.fingerprint,
                    details=divergence,
                    report=report,
                )

        applied = self.apply_operations(spec.content, delta.iter_operations())
        for conflict in applied.conflicts:
            log.warning(
                "merge_conflict",
                conflict=conflict.kind.value,
                requirement_id=conflict.requirement_id,
            )

        report = MergeReport(
            change_id=change_id,
            domain=slug,
            operations_applied=applied.counts,
            conflicts=applied.conflicts,
            divergence=divergence,
            diverged=diverged,
            forced=options.force,
            dry_run=options.dry_run,
            base_fingerprint=base_snapshot.base_fingerprint if base_snapshot else None,
            current_fingerprint=spec.fingerprint,
            merged_content=applied.content,
        )

        if options.dry_run:
            log.info(
                "merge_dry_run",
                operations=report.operations_applied.to_dict(),
                conflicts=len(report.conflicts),
            )
            return report

        _ = self._store.write(slug, applied.content, spec.metadata or None)
        log.info(
            "merge_completed",
            operations=report.operations_applied.to_dict(),
            conflicts=len(report.conflicts),
            fingerprint=generate_fingerprint(applied.content),
            success=report.success,
        )
        return report

    def merge_change(
        self,
        change_id: str,
        change_path: Path | str,
        base_snapshots: Mapping[str, BaseSnapshot | None] | None = None,
        options: MergeOptions | None = None,
    ) -> ChangeMergeResult:
        """Merge every spec delta of a change directory.

        Deltas live at ``<change_path>/specs/<domain>/spec.md``. Each domain is
        merged with its own base snapshot. A domain whose merge fails is
        recorded as an error and the remaining domains are still merged.

        Args:
            change_id: Change proposal ID.
            change_path: Change directory.
            base_snapshots: Snapshots keyed by domain, as recorded when the
                change was proposed.
            options: Merge options applied to every domain.

        Returns:
            Per-domain reports, errors and warnings.
        """
        snapshots = base_snapshots or {}
        specs_dir = Path(change_path) / _CHANGE_SPECS_DIR

        if not specs_dir.is_dir():
            return ChangeMergeResult(
                change_id=change_id, warnings=("No specs directory in change",)
            )

        domains = sorted(entry.name for entry in specs_dir.iterdir() if entry.is_dir())
        if not domains:
            return ChangeMergeResult(
                change_id=change_id, warnings=("No spec domains found in change",)
            )

        reports: list[MergeReport] = []
        errors: list[DomainMergeError] = []
        warnings: list[str] = []

        for domain in domains:
            delta_path = specs_dir / domain / SPEC_FILENAME
            if not delta_path.is_file():
                warnings.append(f"No {SPEC_FILENAME} found for domain '{domain}'")
                continue

            snapshot = snapshots.get(domain) or snapshots.get(normalize_domain(domain))
            try:
                reports.append(
                    self.merge(change_id, delta_path, domain, snapshot, options)
                )
            except SpecDivergenceError as e:
                if e.report is not None:
                    reports.append(e.report)
                errors.append(
                    DomainMergeError(
                        domain=domain, error_type=type(e).__name__, message=str(e)
                    )
                )
            except SpecMergeError as e:
                self._logger.warning(
                    "merge_failed", change_id=change_id, domain=domain, error=str(e)
                )
                errors.append(
                    DomainMergeError(
                        domain=domain, error_type=type(e).__name__, message=str(e)
                    )
                )

        return ChangeMergeResult(
            change_id=change_id,
            reports=tuple(reports),
            errors=tuple(errors),
            warnings=tuple(warnings),
        )
