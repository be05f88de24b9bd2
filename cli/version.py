"""
Version management utilities for pkg-learn.

The version is a base version whose patch number is increased by the git
commit count when the source tree is a git checkout. Without git, the base
version is used as-is.
"""

import subprocess
import sys
from pathlib import Path
from typing import Optional


# Base version - this is the only place you need to update the version number
BASE_VERSION = "0.3.0"

REPO_ROOT = Path(__file__).parent.parent


def _run_git(*args: str) -> Optional[str]:
    """Run a git command in the source tree and return its stripped output."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=REPO_ROOT,
            capture_output=True,
            text=True,
            timeout=5
        )
    except (subprocess.TimeoutExpired, subprocess.SubprocessError, FileNotFoundError):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def get_git_commit_hash(short: bool = True) -> Optional[str]:
    """
    Get the current git commit hash.

    Args:
        short: If True, return short hash (7 chars), otherwise full hash

    Returns:
        Git commit hash string or None if not available
    """
    if short:
        return _run_git("rev-parse", "--short", "HEAD")
    return _run_git("rev-parse", "HEAD")


def get_git_commit_count() -> int:
    """Get the number of commits on the current branch, 0 without git."""
    output = _run_git("rev-list", "--count", "HEAD")
    try:
        return int(output) if output else 0
    except ValueError:
        return 0


def is_git_dirty() -> bool:
    """Check if there are uncommitted changes in the git checkout."""
    return bool(_run_git("status", "--porcelain"))


def get_version(include_commit: bool = True, include_dirty: bool = True) -> str:
    """
    Get the full version string.

    Args:
        include_commit: Add the commit count to the patch number
        include_dirty: Append ``+dirty`` when the checkout has local changes

    Returns:
        Version string in format: MAJOR.MINOR.PATCH[+dirty]
    """
    version = BASE_VERSION
    major, minor, base_patch = BASE_VERSION.split('.')
    if include_commit:
        version = f"{major}.{minor}.{int(base_patch) + get_git_commit_count()}"

    if include_dirty and is_git_dirty():
        version = f"{version}+dirty"

    return version


def get_version_info() -> dict:
    """
    Get comprehensive version information.

    Returns:
        Dictionary containing version details
    """
    commit_hash = get_git_commit_hash(short=False)

    return {
        "version": get_version(),
        "base_version": BASE_VERSION,
        "commit_hash": commit_hash,
        "commit_count": get_git_commit_count(),
        "dirty": is_git_dirty(),
        "python_version": sys.version.split()[0],
        "git_available": commit_hash is not None
    }


__version__ = BASE_VERSION
