"""specmerge specification system.

This package provides the SpecStore, DeltaParser and MergeEngine classes for
maintaining per-domain spec documents and merging change deltas into them,
along with the data models those classes exchange.
"""

from specmerge.spec._delta_parser import DeltaParser
from specmerge.spec._ids import generate_fingerprint, normalize_domain, title_to_id
from specmerge.spec._merge_engine import MergeEngine
from specmerge.spec._models import (
    Added,
    AppliedOperations,
    BaseSnapshot,
    ChangeMergeResult,
    ConflictKind,
    Delta,
    DeltaOperations,
    DeltaValidation,
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
    RequirementFingerprint,
    SelfConflict,
    SelfConflictKind,
    Spec,
    SpecSummary,
)
from specmerge.spec._store import SpecStore

__all__ = [
    "Added",
    "AppliedOperations",
    "BaseSnapshot",
    "ChangeMergeResult",
    "ConflictKind",
    "Delta",
    "DeltaOperations",
    "DeltaParser",
    "DeltaValidation",
    "DivergenceDetail",
    "DivergenceStatus",
    "DomainMergeError",
    "MergeEngine",
    "MergeOptions",
    "MergeReport",
    "Modified",
    "Operation",
    "OperationConflict",
    "OperationCounts",
    "OperationKind",
    "Removed",
    "Requirement",
    "RequirementFingerprint",
    "SelfConflict",
    "SelfConflictKind",
    "Spec",
    "SpecStore",
    "SpecSummary",
    "generate_fingerprint",
    "normalize_domain",
    "title_to_id",
]
