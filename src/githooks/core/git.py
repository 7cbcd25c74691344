"""Git plumbing: repository root, staged paths, hooks directory, re-staging."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import GitError, NotARepository
from .utils import run_process

logger = logging.getLogger(__name__)


def _git(args: list[str], cwd: Path) -> str:
    try:
        code, stdout, stderr = run_process(["git", *args], cwd=cwd)
    except OSError as e:
        raise GitError(f"could not run git: {e}") from e
    if code != 0:
        raise GitError(f"git {' '.join(args)} failed: {stderr.strip()}")
    return stdout


def get_git_root(cwd: Path | None = None) -> Path:
    """Absolute path of the repository containing *cwd*."""
    cwd = cwd or Path.cwd()
    try:
        out = _git(["rev-parse", "--show-toplevel"], cwd)
    except GitError as e:
        raise NotARepository(f"Failed to get git root: {e}") from e
    return Path(out.strip())


def get_staged_files(root: Path) -> list[str]:
    """Paths staged as Added, Copied or Modified, in git's output order."""
    out = _git(["diff", "--cached", "--name-only", "--diff-filter=ACM"], root)
    files = [line for line in out.splitlines() if line.strip()]
    logger.debug("staged files: %s", files)
    return files


def get_hooks_dir(root: Path) -> Path:
    """The directory git reads hooks from (honours core.hooksPath)."""
    out = _git(["rev-parse", "--git-path", "hooks"], root).strip()
    path = Path(out)
    return path if path.is_absolute() else root / path


def stage_files(root: Path, files: list[str]) -> None:
    """Re-add *files* to the index."""
    if not files:
        return
    _git(["add", "--", *files], root)
