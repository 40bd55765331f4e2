"""Exit codes and error handling for spec commands.

General exit codes:
    0 - Success
    1 - Spec not found
    2 - Validation error (invalid delta, self-conflicting delta, bad domain)
    3 - Merge conflicts or spec divergence
    4 - File system error (read, write, parse)
    5 - Internal error (unexpected exception)
"""

from specmerge.exceptions import (
    DeltaError,
    SpecAlreadyExistsError,
    SpecDivergenceError,
    SpecIOError,
    SpecNotFoundError,
    SpecParseError,
    SpecValidationError,
)

EXIT_SUCCESS: int = 0
"""Command completed successfully."""

EXIT_NOT_FOUND: int = 1
"""No spec exists for the domain."""

EXIT_VALIDATION_ERROR: int = 2
"""Validation error (invalid delta, self-conflicting delta, bad domain)."""

EXIT_CONFLICT: int = 3
"""Merge produced operation conflicts, or the spec diverged."""

EXIT_IO_ERROR: int = 4
"""File system error (read, write, parse)."""

EXIT_INTERNAL_ERROR: int = 5
"""Internal error (unexpected exception)."""


def exit_code_for_exception(exc: BaseException) -> int:
    """Map exception to appropriate exit code.

    Args:
        exc: The exception to map.

    Returns:
        Exit code corresponding to the exception type.
    """
    # Not found errors -> EXIT_NOT_FOUND (1)
    if isinstance(exc, SpecNotFoundError):
        return EXIT_NOT_FOUND

    # Validation errors -> EXIT_VALIDATION_ERROR (2)
    if isinstance(
        exc, (DeltaError, SpecValidationError, SpecAlreadyExistsError, ValueError)
    ):
        return EXIT_VALIDATION_ERROR

    # Divergence -> EXIT_CONFLICT (3)
    if isinstance(exc, SpecDivergenceError):
        return EXIT_CONFLICT

    # I/O errors -> EXIT_IO_ERROR (4)
    if isinstance(exc, (SpecIOError, SpecParseError, OSError)):
        return EXIT_IO_ERROR

    # Everything else -> EXIT_INTERNAL_ERROR (5)
    return EXIT_INTERNAL_ERROR
