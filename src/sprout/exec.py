"""Child-process helpers for yarn, npm, and git.

Short probes (``yarnpkg --version``, ``git rev-parse``) capture their output;
installs stream straight to the terminal so the user sees progress. Both go
through a ``CommandRunner`` so tests can script the results.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, Protocol, TypeVar

ParsedT = TypeVar("ParsedT")

TIMEOUT_RETURNCODE = 124
NOT_EXECUTABLE_RETURNCODE = 126


@dataclass(frozen=True)
class CommandRequest:
    """A command to run.

    Attributes:
        argv: Executable and arguments.
        cwd: Working directory, or the current one when ``None``.
        stream: Let the child write to the terminal instead of capturing.
        timeout_seconds: Kill the child after this many seconds.
    """

    argv: tuple[str, ...]
    cwd: Path | None = None
    stream: bool = False
    timeout_seconds: float | None = None


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured text of a finished command.

    ``stdout`` and ``stderr`` are empty for streamed commands.
    """

    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False


class CommandRunner(Protocol):
    """Runs a request; returns ``None`` when the executable does not exist."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


class SubprocessCommandRunner:
    def run(self, request: CommandRequest) -> CommandResult | None:
        try:
            completed = subprocess.run(
                list(request.argv),
                cwd=request.cwd,
                capture_output=not request.stream,
                text=True,
                timeout=request.timeout_seconds,
                check=False,
            )
        except FileNotFoundError:
            return None
        except PermissionError as exc:
            return CommandResult(
                argv=request.argv,
                returncode=NOT_EXECUTABLE_RETURNCODE,
                stderr=str(exc),
            )
        except subprocess.TimeoutExpired as exc:
            return CommandResult(
                argv=request.argv,
                returncode=TIMEOUT_RETURNCODE,
                stdout=_text(exc.stdout),
                stderr=_text(exc.stderr),
                timed_out=True,
            )
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=_text(completed.stdout),
            stderr=_text(completed.stderr),
        )


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


@dataclass(frozen=True)
class CommandSpec(Generic[ParsedT]):
    """A captured command plus the parser for its stdout."""

    request: CommandRequest
    parser: Callable[[CommandResult], ParsedT]
    context: str | None = None


@dataclass(frozen=True)
class CommandExecutionError(RuntimeError):
    """The command could not be started or exited non-zero.

    ``result`` is ``None`` when the executable was not found.
    """

    request: CommandRequest
    detail: str
    result: CommandResult | None = None

    def __str__(self) -> str:
        return self.detail


@dataclass(frozen=True)
class CommandParseError(RuntimeError):
    """The command succeeded but its output was unusable."""

    request: CommandRequest
    detail: str
    context: str | None = None

    def __str__(self) -> str:
        return self.detail


def run_with_runner(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    return (runner or _DEFAULT_COMMAND_RUNNER).run(request)


def command_text(argv: tuple[str, ...] | list[str]) -> str:
    """Render argv the way it would be typed at a shell prompt.

    Example:
        >>> command_text(("npm", "install", "react"))
        'npm install react'
    """
    return " ".join(argv)


def missing_command_detail(request: CommandRequest) -> str:
    """Describe an executable that could not be found.

    Example:
        >>> missing_command_detail(CommandRequest(argv=("yarnpkg", "--version")))
        'missing required command: yarnpkg'
    """
    if not request.argv:
        return "missing required command"
    return f"missing required command: {request.argv[0]}"


def command_failure_detail(request: CommandRequest, result: CommandResult) -> str:
    text = command_text(request.argv)
    if result.timed_out:
        return f"command timed out: {text}"
    output = (result.stderr or result.stdout).strip()
    if output:
        return f"command failed: {text}\n{output}"
    return f"command failed: {text}"


def checked_run(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult:
    """Run ``request`` and raise unless it exits zero.

    Raises:
        CommandExecutionError: The executable is missing or the exit is non-zero.
    """
    result = run_with_runner(request, runner=runner)
    if result is None:
        raise CommandExecutionError(request=request, detail=missing_command_detail(request))
    if result.returncode != 0:
        raise CommandExecutionError(
            request=request,
            result=result,
            detail=command_failure_detail(request, result),
        )
    return result


def run_typed(spec: CommandSpec[ParsedT], *, runner: CommandRunner | None = None) -> ParsedT:
    """Run a captured command and parse its output."""
    result = checked_run(spec.request, runner=runner)
    try:
        return spec.parser(result)
    except CommandParseError:
        raise
    except ValueError as exc:
        context = f" ({spec.context})" if spec.context else ""
        raise CommandParseError(
            request=spec.request,
            detail=f"failed to parse command output{context}: {exc}",
            context=spec.context,
        ) from exc


def parse_stripped_stdout(result: CommandResult) -> str:
    """Return stdout without surrounding whitespace, rejecting empty output."""
    value = result.stdout.strip()
    if not value:
        raise ValueError("empty output")
    return value
