"""specmerge exceptions."""

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from specmerge.spec._models import DivergenceDetail, MergeReport, SelfConflict


class SpecMergeError(Exception):
    """Base exception for specmerge errors."""


class ConfigError(SpecMergeError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Specification Store Exceptions
# =============================================================================


class SpecError(SpecMergeError):
    """Base exception for specification store errors."""


class SpecIOError(SpecError):
    """Raised when a specification file cannot be read or written.

    Attributes:
        path: Path to the file that caused the error.
        operation: The operation that failed ("read", "write", "list").
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        operation: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and I/O context.

        Args:
            message: Human-readable error message.
            path: Path to the file that caused the error.
            operation: The operation that failed ("read", "write", "list").
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.path: Path = path
        self.operation: str = operation
        self.cause: Exception | None = cause


class SpecParseError(SpecError):
    """Raised when specification file content cannot be parsed.

    Attributes:
        path: Path to the file that caused the error.
        line: Line number where the parse error occurred.
        content_type: The content type that failed to parse.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        content_type: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and parse context.

        Args:
            message: Human-readable error message.
            path: Path to the file that caused the error, if known.
            line: Line number where the parse error occurred.
            content_type: The content type that failed to parse.
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.content_type: str = content_type
        self.cause: Exception | None = cause


class SpecNotFoundError(SpecError, KeyError):
    """Raised when a specification cannot be found.

    Attributes:
        domain: The domain of the specification that was not found.
    """

    def __init__(self, message: str, *, domain: str | None = None) -> None:
        """Initialize with error message and spec context.

        Args:
            message: Human-readable error message.
            domain: The domain of the specification that was not found.
        """
        super().__init__(message)
        self.domain: str | None = domain

    def __str__(self) -> str:
        # KeyError quotes its message otherwise
        return str(self.args[0]) if self.args else ""


class SpecAlreadyExistsError(SpecError, ValueError):
    """Raised when creating a specification for a domain that already has one.

    Attributes:
        domain: The domain that already has a specification.
    """

    def __init__(self, message: str, *, domain: str | None = None) -> None:
        """Initialize with error message and spec context."""
        super().__init__(message)
        self.domain: str | None = domain


class SpecValidationError(SpecError, ValueError):
    """Raised when a specification argument fails validation.

    Attributes:
        field: The field that failed validation.
        value: The invalid value.
        expected: Description of what was expected.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.field: str | None = field
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str | None = expected


# =============================================================================
# Delta and Merge Exceptions
# =============================================================================


class DeltaError(SpecMergeError):
    """Base exception for delta parsing and validation errors."""


class DeltaStructureError(DeltaError, ValueError):
    """Raised when a delta is structurally invalid.

    Covers a missing domain, a delta with no operations, and requirement
    entries with an empty title or body. Always raised before the target spec
    is read.

    Attributes:
        errors: Every structural problem found in the delta.
        domain: The delta's domain, if it declared one.
    """

    def __init__(
        self,
        message: str,
        *,
        errors: list[str] | tuple[str, ...],
        domain: str | None = None,
    ) -> None:
        """Initialize with error message and the validation errors."""
        super().__init__(message)
        self.errors: tuple[str, ...] = tuple(errors)
        self.domain: str | None = domain


class DeltaSelfConflictError(DeltaError, ValueError):
    """Raised when one requirement id appears in more than one delta bucket.

    Attributes:
        conflicts: The contradictory operations that were found.
        domain: The delta's domain.
    """

    def __init__(
        self,
        message: str,
        *,
        conflicts: "list[SelfConflict] | tuple[SelfConflict, ...]",  # noqa: UP037
        domain: str | None = None,
    ) -> None:
        """Initialize with error message and the conflicting operations."""
        super().__init__(message)
        self.conflicts: "tuple[SelfConflict, ...]" = tuple(conflicts)
        self.domain: str | None = domain


class MergeError(SpecMergeError):
    """Base exception for merge engine failures."""


class SpecDivergenceError(MergeError):
    """Raised when a spec changed since the delta's base snapshot was captured.

    Recoverable: refresh the base snapshot and retry, or merge with force.

    Attributes:
        domain: The domain whose spec diverged.
        base_fingerprint: Fingerprint recorded in the base snapshot.
        current_fingerprint: Fingerprint of the live spec.
        details: Per-requirement changes since the base snapshot.
        report: The merge report computed up to the divergence check.
    """

    def __init__(  # noqa: PLR0913
        self,
        message: str,
        *,
        domain: str,
        base_fingerprint: str,
        current_fingerprint: str,
        details: "list[DivergenceDetail] | tuple[DivergenceDetail, ...]" = (),  # noqa: UP037
        report: "MergeReport | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize with error message and divergence context."""
        super().__init__(message)
        self.domain: str = domain
        self.base_fingerprint: str = base_fingerprint
        self.current_fingerprint: str = current_fingerprint
        self.details: "tuple[DivergenceDetail, ...]" = tuple(details)
        self.report: "MergeReport | None" = report
