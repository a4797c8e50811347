"""Conflict detection for existing target directories.

A target directory may already hold entries that are harmless to scaffold
over (VCS metadata, editor folders, licenses). Anything else is reported as a
conflict and generation stops before touching it.
"""

from __future__ import annotations

import fnmatch
import shutil
from pathlib import Path
from typing import Iterable

from . import log

SAFE_ENTRIES: tuple[str, ...] = (
    ".DS_Store",
    ".git",
    ".gitattributes",
    ".gitignore",
    ".gitlab-ci.yml",
    ".hg",
    ".hgcheck",
    ".hgignore",
    ".idea",
    ".npmignore",
    ".travis.yml",
    "docs",
    "LICENSE",
    "README.md",
    "mkdocs.yml",
    "Thumbs.db",
)
SAFE_PATTERNS: tuple[str, ...] = ("*.iml",)
ERROR_LOG_PATTERNS: tuple[str, ...] = (
    "npm-debug.log*",
    "yarn-error.log*",
    "yarn-debug.log*",
)


def safe_entries(extra: Iterable[str] = ()) -> frozenset[str]:
    """Return the safe-to-ignore entry names plus any configured extras.

    Example:
        >>> ".git" in safe_entries()
        True
        >>> "notes.txt" in safe_entries(["notes.txt"])
        True
    """
    return frozenset((*SAFE_ENTRIES, *(item.strip() for item in extra if item.strip())))


def _matches_any(name: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def is_error_log(name: str) -> bool:
    """Return True for leftover package-manager error logs.

    Example:
        >>> is_error_log("yarn-error.log")
        True
        >>> is_error_log("package.json")
        False
    """
    return _matches_any(name, ERROR_LOG_PATTERNS)


def find_conflicts(root: Path, allowed: frozenset[str] | None = None) -> tuple[str, ...]:
    """List entries in ``root`` that generation could clobber.

    Args:
        root: Existing target directory.
        allowed: Entry names to ignore; defaults to ``safe_entries()``.

    Returns:
        Sorted entry names, with a trailing ``/`` on directories.
    """
    ignore = allowed if allowed is not None else safe_entries()
    if not root.is_dir():
        return ()
    conflicts: list[str] = []
    for entry in sorted(root.iterdir(), key=lambda path: path.name):
        name = entry.name
        if name in ignore or _matches_any(name, SAFE_PATTERNS) or is_error_log(name):
            continue
        conflicts.append(f"{name}/" if entry.is_dir() else name)
    return tuple(conflicts)


def remove_error_logs(root: Path) -> tuple[str, ...]:
    """Delete leftover npm/yarn error logs from a previous failed run."""
    removed: list[str] = []
    if not root.is_dir():
        return ()
    for entry in sorted(root.iterdir(), key=lambda path: path.name):
        if not is_error_log(entry.name):
            continue
        if entry.is_dir():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        log.debug(f"Removed leftover log {entry.name}")
        removed.append(entry.name)
    return tuple(removed)


def conflict_report(root: Path, conflicts: Iterable[str]) -> list[str]:
    """Build the lines printed when ``root`` holds conflicting entries.

    Example:
        >>> for line in conflict_report(Path("/tmp/test-app"), ["package.json"]):
        ...     print(line)
        The directory test-app contains files that could conflict:
        <BLANKLINE>
          package.json
        <BLANKLINE>
        Either try using a new directory name, or remove the files listed above.
    """
    lines = [f"The directory {root.name} contains files that could conflict:", ""]
    lines.extend(f"  {name}" for name in conflicts)
    lines.append("")
    lines.append("Either try using a new directory name, or remove the files listed above.")
    return lines
