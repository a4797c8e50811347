"""Implementation for the ``sprout`` create command.

``sprout <project-directory>`` creates (or reuses) a directory, installs
dependencies with yarn or npm, and copies a starter template into it.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import NoReturn

from .. import config, conflicts, log
from ..io import say, say_err
from ..models import InvocationArgs
from ..package_manager import script_command
from ..services import DirectoryConflictError, ServiceFailure
from ..services.project import CreateProjectOutcome, CreateProjectService

PROGRAM_NAME = "sprout"


def usage_lines(program: str = PROGRAM_NAME) -> list[str]:
    return [
        "Please specify the project directory:",
        f"  {program} <project-directory>",
        "",
        "For example:",
        f"  {program} my-react-app",
        "",
        f"Run {program} --help to see all options.",
    ]


def _report_missing_directory() -> NoReturn:
    for line in usage_lines():
        say_err(line)
    sys.exit(1)


def _report_failure(error: ServiceFailure) -> NoReturn:
    if isinstance(error, DirectoryConflictError):
        for line in conflicts.conflict_report(error.root, error.conflicts):
            say(line)
        sys.exit(1)
    log.error(str(error))
    if error.recovery_hint:
        say_err(error.recovery_hint)
    sys.exit(1)


def _display_path(root: Path, cwd: Path) -> str:
    try:
        relative = os.path.relpath(root, cwd)
    except ValueError:
        return str(root)
    return relative if len(relative) < len(str(root)) else str(root)


def report_success(outcome: CreateProjectOutcome, cwd: Path) -> None:
    """Print the closing summary with next steps for the new project."""
    manager = outcome.manager
    say()
    say(f"Success! Created {outcome.app_name} at {outcome.root}")
    say("Inside that directory, you can run several commands:")
    for script, description in (
        ("start", "Starts the development server."),
        ("build", "Bundles the app into static files for production."),
        ("test", "Starts the test runner."),
    ):
        say()
        say(f"  {script_command(manager, script)}")
        say(f"    {description}")
    say()
    say("We suggest that you begin by typing:")
    say()
    if outcome.root.resolve() != cwd.resolve():
        say(f"  cd {_display_path(outcome.root, cwd)}")
    say(f"  {script_command(manager, 'start')}")
    say()
    say("Happy hacking!")


def create_project(args: InvocationArgs) -> CreateProjectOutcome:
    """Create a project from parsed CLI arguments.

    Args:
        args: Parsed invocation arguments.

    Returns:
        The creation outcome. Exits the process on any expected failure.

    Example:
        $ sprout my-app --template typescript
    """
    if not args.project_directory:
        _report_missing_directory()
    cwd = Path.cwd()
    sprout_config = config.load_config()
    try:
        outcome = CreateProjectService.run_default(
            args=args, cwd=cwd, sprout_config=sprout_config
        )
    except ServiceFailure as exc:
        _report_failure(exc)
    report_success(outcome, cwd)
    return outcome
