"""Shared test fixtures for specmerge tests."""

from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

AUTH_SPEC = """# Auth Specification

## Purpose

Define authentication requirements.

## Requirements

### Requirement: User Authentication
The system SHALL authenticate users.

#### Scenario: Valid credentials
- MUST accept a valid email and password

### Requirement: Session Timeout
Sessions SHALL expire after 30 minutes of inactivity.

## Notes

Keep this section untouched.
"""


@dataclass(frozen=True, slots=True)
class SpecProject:
    """Paths for a specmerge-enabled test project."""

    root: Path
    specmerge_dir: Path
    specs_dir: Path
    changes_dir: Path


@pytest.fixture
def spec_project(tmp_path: Path) -> SpecProject:
    """Create a specmerge-enabled project.

    Structure:
        tmp_path/
            project/
                .specmerge/
                    specs/
                changes/
    """
    root = tmp_path / "project"
    specmerge_dir = root / ".specmerge"
    specs_dir = specmerge_dir / "specs"
    specs_dir.mkdir(parents=True)
    changes_dir = root / "changes"
    changes_dir.mkdir()

    return SpecProject(
        root=root,
        specmerge_dir=specmerge_dir,
        specs_dir=specs_dir,
        changes_dir=changes_dir,
    )


# ---------------------------------------------------------------------------
# Helper functions for creating test artifacts
# ---------------------------------------------------------------------------


def create_spec(
    specs_dir: Path,
    domain: str,
    body: str = AUTH_SPEC,
    *,
    updated: str = "2025-10-28T12:00:00+00:00",
) -> Path:
    """Write a spec document with frontmatter.

    Args:
        specs_dir: Storage root.
        domain: Domain slug (also used as directory name).
        body: Markdown body.
        updated: Value of the ``updated`` frontmatter field.

    Returns:
        Path to the created spec.md.
    """
    spec_dir = specs_dir / domain
    spec_dir.mkdir(parents=True, exist_ok=True)
    path = spec_dir / "spec.md"
    path.write_text(f"""---
domain: {domain}
updated: '{updated}'
---

{body}""")
    return path


def create_delta(
    path: Path,
    domain: str,
    *,
    change: str = "001-add-2fa",
    added: str = "",
    modified: str = "",
    removed: str = "",
) -> Path:
    """Write a delta document.

    Each bucket argument is the raw text placed under its section header;
    empty buckets are left out.

    Returns:
        Path to the created delta.
    """
    sections = [
        f"## {kind} Requirements\n\n{text.strip()}\n"
        for kind, text in (("ADDED", added), ("MODIFIED", modified), ("REMOVED", removed))
        if text
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"---\nchange: {change}\ndomain: {domain}\ndelta_type: spec\n---\n\n"
        f"# Spec Delta: {domain}\n\n" + "\n".join(sections)
    )
    return path


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
