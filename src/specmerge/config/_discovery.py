"""Project root and config path discovery utilities.

This module provides functions for locating the specmerge project root by
searching upward through the directory tree for the `.specmerge/` marker
directory, and for determining platform-specific configuration file paths.
"""

from pathlib import Path
from typing import Any, Final

import platformdirs
from dulwich.errors import NotGitRepository

from specmerge.utils import SPECMERGE_DIRNAME, get_worktree_root

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

CONFIG_FILENAME: Final = "config.toml"
LOCAL_CONFIG_FILENAME: Final = "config.local.toml"


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the project root by searching upward for a .specmerge/ directory.

    Args:
        start: Directory to start searching from. Defaults to current
            working directory if not specified.

    Returns:
        Path to the directory containing `.specmerge/`, or None if no project
        root is found.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        if (current / SPECMERGE_DIRNAME).is_dir():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def resolve_project_root(start: Path | None = None) -> Path:
    """Resolve the project root, falling back when no marker is found.

    Tries, in order: the nearest ancestor containing `.specmerge/`, the
    enclosing Git worktree, and finally the starting directory itself.

    Args:
        start: Directory to start searching from. Defaults to current
            working directory if not specified.

    Returns:
        The project root directory.
    """
    origin = (start or Path.cwd()).resolve()

    root = find_project_root(origin)
    if root is not None:
        return root

    try:
        return get_worktree_root(origin)
    except NotGitRepository:
        return origin


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/specmerge/config.toml``
    - macOS: ``~/Library/Application Support/specmerge/config.toml``
    - Windows: ``%APPDATA%\specmerge\config.toml``

    The path is returned regardless of whether the file or parent
    directory exists.

    Returns:
        Path to the user config file for the current platform.
    """
    config_dir = platformdirs.user_config_path("specmerge")
    return config_dir / CONFIG_FILENAME


def _file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Discovers configuration sources in precedence order (highest first).
    File-based sources are checked for existence. Project sources are
    omitted if no project root is found.

    Args:
        project_root: Project root directory. If None, auto-detect by
            searching upward for `.specmerge/` directory.
        include_env: Include environment variables as a source.
        include_cli: Include CLI overrides as a source.
        cli_overrides: Dictionary of CLI argument overrides. Only used
            if include_cli is True.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
        Sources that don't exist are still included with exists=False.
    """
    sources: list[ConfigSource] = []

    resolved_root = project_root if project_root else find_project_root()

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    if resolved_root:
        local_path = resolved_root / SPECMERGE_DIRNAME / LOCAL_CONFIG_FILENAME
        sources.append(
            ConfigSource(
                name=ConfigSourceName.LOCAL,
                path=local_path,
                exists=_file_exists(local_path),
                values={},
            )
        )

        project_path = resolved_root / SPECMERGE_DIRNAME / CONFIG_FILENAME
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=_file_exists(project_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
