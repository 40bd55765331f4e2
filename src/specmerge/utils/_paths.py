from pathlib import Path
from typing import Final

from dulwich.repo import Repo

SPECMERGE_DIRNAME: Final = ".specmerge"


def get_worktree_root(start: Path | None = None) -> Path:
    """Get the root directory of the Git worktree containing ``start``.

    Raises:
        dulwich.errors.NotGitRepository: If no repository is found.
    """
    repo = Repo.discover(str(start) if start is not None else None)
    # repo.path is bytes on some dulwich versions
    path_str = repo.path.decode() if isinstance(repo.path, bytes) else repo.path
    return Path(path_str)


def get_specmerge_dir(project_root: Path) -> Path:
    """Get the path to the .specmerge/ directory of a project."""
    return project_root / SPECMERGE_DIRNAME


def get_log_dir(project_root: Path) -> Path:
    """Get the path to the logs/ directory inside .specmerge/."""
    return get_specmerge_dir(project_root) / "logs"


def get_cli_log_file(project_root: Path | None = None) -> Path:
    """Get the path to the CLI log file inside .specmerge/logs/.

    Uses the current Git worktree if no project root is given.
    """
    root = project_root if project_root is not None else get_worktree_root()
    return get_log_dir(root) / "cli.log"
