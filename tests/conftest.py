# ruff: noqa: E402

import json
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import sprout.log as sprout_log
from sprout import exec as exec_util
from sprout.package_manager import InstallRequest, PackageManager, install_argv, lock_file_name
from sprout.services.project import CreateProjectDependencies, CreateProjectService


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Iterator[None]:
    config_file = tmp_path_factory.mktemp("sprout-config") / "config.json"
    monkeypatch.setenv("SPROUT_CONFIG", str(config_file))
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("SPROUT_LOG_LEVEL", raising=False)
    sprout_log.reset()
    yield
    sprout_log.reset()


class FakeInstaller:
    """Installer double that writes the lock file instead of running yarn/npm."""

    def __init__(self, *, fail_with: int | None = None, missing: bool = False) -> None:
        self.requests: list[InstallRequest] = []
        self.fail_with = fail_with
        self.missing = missing

    def install(self, request: InstallRequest) -> None:
        self.requests.append(request)
        command = exec_util.CommandRequest(argv=install_argv(request), cwd=request.root)
        if self.missing:
            raise exec_util.CommandExecutionError(
                request=command, detail=exec_util.missing_command_detail(command)
            )
        (request.root / "node_modules").mkdir(exist_ok=True)
        if self.fail_with is not None:
            result = exec_util.CommandResult(
                argv=command.argv, returncode=self.fail_with, stdout="", stderr="network down"
            )
            raise exec_util.CommandExecutionError(
                request=command,
                result=result,
                detail=exec_util.command_failure_detail(command, result),
            )
        descriptor_path = request.root / "package.json"
        descriptor = json.loads(descriptor_path.read_text(encoding="utf-8"))
        descriptor["dependencies"] = {
            dependency.rsplit("@", 1)[0] if dependency.rfind("@") > 0 else dependency: "*"
            for dependency in request.dependencies
        }
        descriptor_path.write_text(json.dumps(descriptor, indent=2) + "\n", encoding="utf-8")
        (request.root / lock_file_name(request.manager)).write_text(
            "# lockfile\n", encoding="utf-8"
        )


@pytest.fixture
def fake_installer() -> FakeInstaller:
    return FakeInstaller()


@pytest.fixture
def make_installer() -> type[FakeInstaller]:
    return FakeInstaller


class GitRecorder:
    def __init__(self) -> None:
        self.roots: list[Path] = []

    def __call__(self, root: Path) -> bool:
        self.roots.append(root)
        return False


@pytest.fixture
def patched_service(monkeypatch: pytest.MonkeyPatch) -> FakeInstaller:
    """Route the create command through a fake installer with yarn available."""
    installer = FakeInstaller()

    class _Service(CreateProjectService):
        def __init__(self, dependencies: CreateProjectDependencies | None = None) -> None:
            super().__init__(
                dependencies
                or CreateProjectDependencies(
                    installer=installer,
                    select_manager=lambda use_npm: (
                        PackageManager.NPM if use_npm else PackageManager.YARN
                    ),
                    git_init=GitRecorder(),
                )
            )

    monkeypatch.setattr("sprout.commands.create.CreateProjectService", _Service)
    return installer
