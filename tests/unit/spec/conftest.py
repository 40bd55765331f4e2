from pathlib import Path

import pytest

from specmerge.spec import DeltaParser, MergeEngine, SpecStore

from tests.conftest import AUTH_SPEC, create_spec

TWO_FACTOR_BLOCK = """### Requirement: Two-Factor Authentication
Users SHALL verify sign-in with a second factor.

#### Scenario: OTP required
- MUST prompt for a one-time code"""

USER_AUTH_MODIFIED_BLOCK = """### Requirement: User Authentication
The system SHALL authenticate users with email and password or SSO.

#### Scenario: SSO login
- MUST accept a valid identity provider assertion"""


@pytest.fixture
def specs_dir(tmp_path: Path) -> Path:
    path = tmp_path / "specs"
    path.mkdir()
    return path


@pytest.fixture
def store(specs_dir: Path) -> SpecStore:
    return SpecStore(specs_dir)


@pytest.fixture
def auth_spec_path(specs_dir: Path) -> Path:
    return create_spec(specs_dir, "auth", AUTH_SPEC)


@pytest.fixture
def parser() -> DeltaParser:
    return DeltaParser()


@pytest.fixture
def engine(store: SpecStore) -> MergeEngine:
    return MergeEngine(store)
