"""Tests for typed command execution helpers."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from sprout import exec as exec_util


class StaticRunner:
    def __init__(self, result: exec_util.CommandResult | None) -> None:
        self.result = result
        self.requests: list[exec_util.CommandRequest] = []

    def run(self, request: exec_util.CommandRequest) -> exec_util.CommandResult | None:
        self.requests.append(request)
        return self.result


def test_subprocess_command_runner_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """Runner returns typed output and forwards execution options."""
    calls: dict[str, object] = {}

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls["argv"] = argv
        calls["kwargs"] = kwargs
        return subprocess.CompletedProcess(argv, 0, stdout="1.22.19\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)

    request = exec_util.CommandRequest(
        argv=("yarnpkg", "--version"),
        cwd=Path("/tmp"),
        timeout_seconds=5.0,
    )
    result = exec_util.SubprocessCommandRunner().run(request)

    assert result == exec_util.CommandResult(
        argv=("yarnpkg", "--version"),
        returncode=0,
        stdout="1.22.19\n",
        stderr="",
    )
    assert calls["argv"] == ["yarnpkg", "--version"]
    run_kwargs = calls["kwargs"]
    assert isinstance(run_kwargs, dict)
    assert run_kwargs["cwd"] == Path("/tmp")
    assert run_kwargs["capture_output"] is True
    assert run_kwargs["text"] is True
    assert run_kwargs["timeout"] == 5.0


def test_subprocess_command_runner_streams_install_output(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Installs stream output, so the runner must not request capture."""
    calls: dict[str, object] = {}

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls["kwargs"] = kwargs
        return subprocess.CompletedProcess(argv, 1, stdout=None, stderr=None)

    monkeypatch.setattr(subprocess, "run", fake_run)

    request = exec_util.CommandRequest(argv=("npm", "install"), stream=True)
    result = exec_util.SubprocessCommandRunner().run(request)

    assert result is not None
    assert result.returncode == 1
    assert result.stdout == ""
    run_kwargs = calls["kwargs"]
    assert isinstance(run_kwargs, dict)
    assert run_kwargs["capture_output"] is False


def test_subprocess_command_runner_returns_none_when_missing_executable(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Runner returns None when executable is not found."""

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        del argv, kwargs
        raise FileNotFoundError

    monkeypatch.setattr(subprocess, "run", fake_run)

    result = exec_util.SubprocessCommandRunner().run(exec_util.CommandRequest(argv=("yarnpkg",)))

    assert result is None


def test_subprocess_command_runner_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Runner normalizes timeout failures into typed timeout results."""

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        del kwargs
        raise subprocess.TimeoutExpired(cmd=argv, timeout=0.05, output="slow", stderr="timeout")

    monkeypatch.setattr(subprocess, "run", fake_run)

    request = exec_util.CommandRequest(argv=("npm", "install"), timeout_seconds=0.05)
    result = exec_util.SubprocessCommandRunner().run(request)

    assert result == exec_util.CommandResult(
        argv=("npm", "install"),
        returncode=124,
        stdout="slow",
        stderr="timeout",
        timed_out=True,
    )
    assert exec_util.command_failure_detail(request, result) == "command timed out: npm install"


def test_run_typed_parses_output() -> None:
    runner = StaticRunner(
        exec_util.CommandResult(
            argv=("yarnpkg", "--version"), returncode=0, stdout=" 1.22.19\n", stderr=""
        )
    )
    spec = exec_util.CommandSpec(
        request=exec_util.CommandRequest(argv=("yarnpkg", "--version")),
        parser=exec_util.parse_stripped_stdout,
    )

    assert exec_util.run_typed(spec, runner=runner) == "1.22.19"
    assert runner.requests == [spec.request]


def test_run_typed_raises_for_missing_command() -> None:
    spec = exec_util.CommandSpec(
        request=exec_util.CommandRequest(argv=("yarnpkg", "--version")),
        parser=exec_util.parse_stripped_stdout,
    )

    with pytest.raises(exec_util.CommandExecutionError) as exc_info:
        exec_util.run_typed(spec, runner=StaticRunner(None))

    assert str(exc_info.value) == "missing required command: yarnpkg"
    assert exc_info.value.result is None


def test_run_typed_raises_for_nonzero_exit() -> None:
    result = exec_util.CommandResult(
        argv=("git", "init"), returncode=128, stdout="", stderr="fatal: nope\n"
    )
    spec = exec_util.CommandSpec(
        request=exec_util.CommandRequest(argv=("git", "init")),
        parser=exec_util.parse_stripped_stdout,
    )

    with pytest.raises(exec_util.CommandExecutionError) as exc_info:
        exec_util.run_typed(spec, runner=StaticRunner(result))

    assert str(exc_info.value) == "command failed: git init\nfatal: nope"
    assert exc_info.value.result == result


def test_run_typed_wraps_parser_errors_with_context() -> None:
    runner = StaticRunner(
        exec_util.CommandResult(argv=("yarnpkg", "--version"), returncode=0, stdout="  ", stderr="")
    )
    spec = exec_util.CommandSpec(
        request=exec_util.CommandRequest(argv=("yarnpkg", "--version")),
        parser=exec_util.parse_stripped_stdout,
        context="yarn version",
    )

    with pytest.raises(exec_util.CommandParseError) as exc_info:
        exec_util.run_typed(spec, runner=runner)

    assert exc_info.value.context == "yarn version"
    assert "failed to parse command output (yarn version): empty output" in str(exc_info.value)


def test_subprocess_command_runner_reports_unexecutable_file(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A yarnpkg on PATH without the execute bit fails instead of raising."""

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        del kwargs
        raise PermissionError(13, "Permission denied", argv[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    request = exec_util.CommandRequest(argv=("yarnpkg", "--version"))
    result = exec_util.SubprocessCommandRunner().run(request)

    assert result is not None
    assert result.returncode == exec_util.NOT_EXECUTABLE_RETURNCODE
    assert "Permission denied" in result.stderr
    with pytest.raises(exec_util.CommandExecutionError, match="command failed: yarnpkg"):
        exec_util.checked_run(request, runner=exec_util.SubprocessCommandRunner())
