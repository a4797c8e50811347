from __future__ import annotations

from pathlib import Path

import pytest

import sprout.commands.create as create_cmd
from sprout.models import InvocationArgs
from sprout.package_manager import PackageManager
from sprout.services.project import CreateProjectOutcome


def test_missing_directory_prints_usage_and_exits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        create_cmd.create_project(InvocationArgs())

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "Please specify the project directory" in captured.err
    assert captured.out == ""
    assert list(tmp_path.iterdir()) == []


def test_create_prints_next_steps(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    patched_service,
) -> None:
    monkeypatch.chdir(tmp_path)

    outcome = create_cmd.create_project(InvocationArgs(project_directory="my-app"))

    assert outcome.root == tmp_path / "my-app"
    out = capsys.readouterr().out
    assert "Creating a new React app in" in out
    assert f"Success! Created my-app at {tmp_path / 'my-app'}" in out
    assert "  yarn build" in out
    assert "  cd my-app" in out
    assert out.rstrip().endswith("Happy hacking!")


def test_conflict_report_goes_to_stdout(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    patched_service,
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "test-app").mkdir()
    (tmp_path / "test-app" / "package.json").write_text('{ "foo": "bar" }', encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        create_cmd.create_project(InvocationArgs(project_directory="test-app"))

    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "The directory test-app contains files that could conflict" in out
    assert "  package.json" in out
    assert patched_service.requests == []


def test_validation_failure_goes_to_stderr(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    patched_service,
) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit):
        create_cmd.create_project(InvocationArgs(project_directory="Bad_Name"))

    err = capsys.readouterr().err
    assert 'Cannot create a project named "Bad_Name"' in err
    assert "Please choose a different project name." in err


def test_success_report_for_current_directory_skips_cd(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    outcome = CreateProjectOutcome(
        root=tmp_path,
        app_name=tmp_path.name,
        manager=PackageManager.NPM,
        template="javascript",
        lock_file="package-lock.json",
        files=(),
    )

    create_cmd.report_success(outcome, tmp_path)

    out = capsys.readouterr().out
    assert "  cd " not in out
    assert "  npm start" in out
    assert "  npm run build" in out
