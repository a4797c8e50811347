"""Package-manager selection and dependency installation.

The scaffolder never shells out to yarn or npm directly; it hands an
``InstallRequest`` to a ``DependencyInstaller``. ``SubprocessInstaller`` is the
production implementation and tests substitute their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from . import exec, log, paths


class PackageManager(str, Enum):
    YARN = "yarn"
    NPM = "npm"


_LOCK_FILES = {
    PackageManager.YARN: paths.YARN_LOCK_FILENAME,
    PackageManager.NPM: paths.NPM_LOCK_FILENAME,
}
YARN_EXECUTABLE = "yarnpkg"
NPM_EXECUTABLE = "npm"


def lock_file_name(manager: PackageManager) -> str:
    """Return the lock file a package manager writes.

    Example:
        >>> lock_file_name(PackageManager.NPM)
        'package-lock.json'
    """
    return _LOCK_FILES[manager]


def script_command(manager: PackageManager, script: str) -> str:
    """Return how a user runs a package script with ``manager``.

    Example:
        >>> script_command(PackageManager.YARN, "build")
        'yarn build'
        >>> script_command(PackageManager.NPM, "build")
        'npm run build'
        >>> script_command(PackageManager.NPM, "start")
        'npm start'
    """
    if manager is PackageManager.YARN:
        return f"yarn {script}"
    if script in {"start", "test"}:
        return f"npm {script}"
    return f"npm run {script}"


def yarn_version(runner: exec.CommandRunner | None = None) -> str | None:
    """Return the installed yarn version, or ``None`` when yarn is unusable."""
    spec = exec.CommandSpec(
        request=exec.CommandRequest(argv=(YARN_EXECUTABLE, "--version")),
        parser=exec.parse_stripped_stdout,
        context="yarn version",
    )
    try:
        return exec.run_typed(spec, runner=runner)
    except (exec.CommandExecutionError, exec.CommandParseError) as exc:
        log.debug(f"yarn unavailable: {exc}")
        return None


def select_package_manager(
    use_npm: bool, *, runner: exec.CommandRunner | None = None
) -> PackageManager:
    """Pick the package manager for this run.

    npm is used when requested or when yarn is not installed.
    """
    if use_npm:
        return PackageManager.NPM
    version = yarn_version(runner)
    if version is None:
        log.warning("yarn is not installed; falling back to npm")
        return PackageManager.NPM
    log.debug(f"Using yarn {version}")
    return PackageManager.YARN


@dataclass(frozen=True)
class InstallRequest:
    """Dependencies to install into a project directory.

    Attributes:
        root: Project directory that holds ``package.json``.
        manager: Package manager to run.
        dependencies: Dependency specs (``name`` or ``name@range``).
        verbose: Forward ``--verbose`` to the package manager.
        timeout_seconds: Optional limit for the child process.
    """

    root: Path
    manager: PackageManager
    dependencies: tuple[str, ...]
    verbose: bool = False
    timeout_seconds: float | None = None


class DependencyInstaller(Protocol):
    """Installs dependencies into a directory using a package manager."""

    def install(self, request: InstallRequest) -> None: ...


def install_argv(request: InstallRequest) -> tuple[str, ...]:
    """Build the package-manager command line for ``request``.

    Example:
        >>> from pathlib import Path
        >>> install_argv(InstallRequest(Path("/app"), PackageManager.YARN, ("react",)))
        ('yarnpkg', 'add', '--exact', 'react', '--cwd', '/app')
    """
    if request.manager is PackageManager.YARN:
        argv = [YARN_EXECUTABLE, "add", "--exact", *request.dependencies]
        if request.verbose:
            argv.append("--verbose")
        argv.extend(["--cwd", str(request.root)])
        return tuple(argv)
    argv = [
        NPM_EXECUTABLE,
        "install",
        "--no-audit",
        "--save",
        "--save-exact",
        "--loglevel",
        "error",
        *request.dependencies,
    ]
    if request.verbose:
        argv.append("--verbose")
    return tuple(argv)


class SubprocessInstaller:
    """Default installer that runs yarn or npm as a child process.

    Output is streamed to the terminal rather than captured.
    """

    def __init__(self, runner: exec.CommandRunner | None = None) -> None:
        self._runner = runner

    def install(self, request: InstallRequest) -> None:
        command = exec.CommandRequest(
            argv=install_argv(request),
            cwd=request.root,
            stream=True,
            timeout_seconds=request.timeout_seconds,
        )
        log.debug(f"Running {exec.command_text(command.argv)}")
        exec.checked_run(command, runner=self._runner)
