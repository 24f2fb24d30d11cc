"""Repository location and git provenance for run manifests.

Best-effort only: when not running from a git checkout the helpers fall back
to the current working directory and return None for git metadata.
"""

from __future__ import annotations

import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Nearest parent of this package containing .git, else the CWD."""
    here = Path(__file__).resolve()
    git_root = _find_git_root(here)
    if git_root is not None:
        return git_root
    return Path.cwd()


def get_git_commit() -> str | None:
    """Return the current git commit hash if available."""
    root = repo_root()
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
        return out.strip() or None
    except (OSError, subprocess.SubprocessError):
        return None


def get_git_is_dirty() -> bool | None:
    """True if there are uncommitted changes, False if clean, None if unknown."""
    root = repo_root()
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "status", "--porcelain"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
        return len(out.strip()) > 0
    except (OSError, subprocess.SubprocessError):
        return None
