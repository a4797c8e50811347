"""Best-effort version-control setup for freshly generated projects."""

from __future__ import annotations

import shutil
from pathlib import Path

from . import exec, log

INITIAL_COMMIT_MESSAGE = "Initialize project using sprout"


def _run(
    argv: tuple[str, ...], cwd: Path, runner: exec.CommandRunner | None
) -> exec.CommandResult | None:
    return exec.run_with_runner(exec.CommandRequest(argv=argv, cwd=cwd), runner=runner)


def _succeeded(result: exec.CommandResult | None) -> bool:
    return result is not None and result.returncode == 0


def inside_repository(root: Path, *, runner: exec.CommandRunner | None = None) -> bool:
    """Return True when ``root`` already belongs to a git or hg work tree."""
    if _succeeded(_run(("git", "rev-parse", "--is-inside-work-tree"), root, runner)):
        return True
    return _succeeded(_run(("hg", "--cwd", ".", "root"), root, runner))


def try_git_init(root: Path, *, runner: exec.CommandRunner | None = None) -> bool:
    """Initialize a repository in ``root`` and commit the generated files.

    Never raises for git failures: a missing git binary or an existing
    enclosing repository skips the step, and a failed commit removes the
    half-created ``.git`` directory.

    Returns:
        True when a repository with an initial commit was created.
    """
    if inside_repository(root, runner=runner):
        log.debug("Skipping git init: already inside a repository")
        return False
    init = _run(("git", "init"), root, runner)
    if not _succeeded(init):
        log.debug("Skipping git init: git is unavailable")
        return False
    log.info("Initialized a git repository.")

    for argv in (
        ("git", "add", "-A"),
        ("git", "commit", "-m", INITIAL_COMMIT_MESSAGE),
    ):
        result = _run(argv, root, runner)
        if _succeeded(result):
            continue
        detail = (result.stderr or result.stdout).strip() if result else "missing git"
        log.debug(f"Git commit not created: {exec.command_text(argv)}: {detail}")
        shutil.rmtree(root / ".git", ignore_errors=True)
        return False
    log.success("Created git commit.")
    return True
