from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from ... import config, conflicts, exec, git, log, naming, paths, templates
from ...models import InvocationArgs, PackageDescriptor, SproutConfig
from ...package_manager import (
    DependencyInstaller,
    InstallRequest,
    PackageManager,
    SubprocessInstaller,
    lock_file_name,
    select_package_manager,
)
from ..base import BaseService
from ..errors import (
    DependencyMissingError,
    DirectoryConflictError,
    ExternalCommandFailedError,
    IoFailedError,
    ValidationFailedError,
)

SelectPackageManager = Callable[[bool], PackageManager]
GitInit = Callable[[Path], bool]

_GENERATED_PREFIXES = (
    paths.PACKAGE_JSON_FILENAME,
    paths.YARN_LOCK_FILENAME,
    paths.NPM_LOCK_FILENAME,
    paths.NODE_MODULES_DIRNAME,
)


class CreateProjectRequest(BaseModel):
    args: InvocationArgs
    cwd: Path
    sprout_config: SproutConfig = Field(default_factory=SproutConfig)
    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def template_name(self) -> str:
        return self.args.template or self.sprout_config.template.default

    @property
    def scripts_package(self) -> str:
        return self.args.scripts_package or self.sprout_config.install.scripts_package


@dataclass(frozen=True)
class CreateProjectOutcome:
    root: Path
    app_name: str
    manager: PackageManager
    template: str
    lock_file: str
    files: tuple[Path, ...]
    git_initialized: bool = False


@dataclass(frozen=True)
class CreateProjectDependencies:
    """Side-effecting collaborators, replaceable in tests."""

    installer: DependencyInstaller = field(default_factory=SubprocessInstaller)
    select_manager: SelectPackageManager = select_package_manager
    git_init: GitInit = git.try_git_init


class CreateProjectService(BaseService[CreateProjectRequest, CreateProjectOutcome]):
    """Create a new project: validate, check conflicts, install, emit, finalize."""

    def __init__(self, dependencies: CreateProjectDependencies | None = None) -> None:
        self._deps = dependencies or CreateProjectDependencies()

    @classmethod
    def run_default(
        cls, *, args: InvocationArgs, cwd: Path, sprout_config: SproutConfig
    ) -> CreateProjectOutcome:
        """Run the create flow with the subprocess-backed collaborators."""
        return cls()(CreateProjectRequest(args=args, cwd=cwd, sprout_config=sprout_config))

    def _run(self, request: CreateProjectRequest) -> CreateProjectOutcome:
        if not request.args.project_directory:
            raise ValidationFailedError("project directory is required")
        template = self._resolve_template(request.template_name)
        root = paths.resolve_target_directory(request.args.project_directory, request.cwd)
        app_name = root.name
        base_dependencies = (
            *request.sprout_config.install.dependencies,
            request.scripts_package,
        )
        self._validate_name(app_name, base_dependencies)

        if root.exists() and not root.is_dir():
            raise ValidationFailedError(f"path exists and is not a directory: {root}")
        created_root = not root.exists()
        found = conflicts.find_conflicts(
            root, conflicts.safe_entries(request.sprout_config.conflicts.ignore)
        )
        if found:
            raise DirectoryConflictError(root, found)

        try:
            paths.ensure_dir(root)
            conflicts.remove_error_logs(root)
            log.info(f"Creating a new React app in {root}.")
            config.write_json(root / paths.PACKAGE_JSON_FILENAME, PackageDescriptor(name=app_name))
        except OSError as exc:
            raise IoFailedError(f"failed to prepare {root}: {exc}") from exc

        manager = self._deps.select_manager(request.args.use_npm)
        dependencies = (
            *base_dependencies,
            *(
                f"{name}@{version}" if version else name
                for name, version in template.manifest.package.dependencies.items()
            ),
        )
        self._install(
            InstallRequest(
                root=root,
                manager=manager,
                dependencies=tuple(dependencies),
                verbose=request.args.verbose,
                timeout_seconds=request.sprout_config.install.timeout_seconds,
            ),
            created_root=created_root,
        )

        try:
            files = templates.emit_template(template, root, app_name)
            self._finalize_descriptor(root, template, request.scripts_package)
        except OSError as exc:
            raise IoFailedError(f"failed to write template files: {exc}") from exc

        git_initialized = False
        if request.sprout_config.git.init:
            git_initialized = self._deps.git_init(root)

        return CreateProjectOutcome(
            root=root,
            app_name=app_name,
            manager=manager,
            template=template.name,
            lock_file=lock_file_name(manager),
            files=files,
            git_initialized=git_initialized,
        )

    def _resolve_template(self, name: str) -> templates.Template:
        try:
            return templates.resolve_template(name)
        except templates.TemplateNotFoundError as exc:
            raise ValidationFailedError(
                f'template "{exc.template}" was not found',
                recovery_hint="available templates: " + ", ".join(exc.available),
            ) from exc

    def _validate_name(self, app_name: str, dependencies: tuple[str, ...]) -> None:
        check = naming.check_project_name(app_name)
        if not check.valid:
            raise ValidationFailedError(
                naming.naming_restriction_message(check),
                recovery_hint="Please choose a different project name.",
            )
        clash = naming.conflicting_dependency(app_name, dependencies)
        if clash is not None:
            raise ValidationFailedError(
                f'Cannot create a project named "{app_name}" because a dependency '
                "with the same name exists.",
                recovery_hint="Please choose a different project name.",
            )

    def _install(self, request: InstallRequest, *, created_root: bool) -> None:
        log.info("Installing packages. This might take a couple of minutes.")
        try:
            self._deps.installer.install(request)
        except exec.CommandExecutionError as exc:
            log.error("Aborting installation.")
            remove_generated_files(request.root, remove_root=created_root)
            if exc.result is None:
                raise DependencyMissingError(
                    str(exc),
                    recovery_hint="Install yarn or npm and make sure it is on PATH.",
                ) from exc
            raise ExternalCommandFailedError(str(exc)) from exc
        except OSError as exc:
            log.error("Aborting installation.")
            remove_generated_files(request.root, remove_root=created_root)
            raise ExternalCommandFailedError(
                f"failed to run {request.manager.value}: {exc}"
            ) from exc

    def _finalize_descriptor(
        self, root: Path, template: templates.Template, scripts_package: str
    ) -> None:
        descriptor_path = root / paths.PACKAGE_JSON_FILENAME
        payload = config.load_json(descriptor_path) or {}
        fragment = template.manifest.package.model_dump()
        fragment.pop("dependencies", None)
        scripts = templates.render_scripts(
            fragment.pop("scripts", {}), naming.package_name(scripts_package)
        )
        payload.update(fragment)
        if scripts:
            payload["scripts"] = {**payload.get("scripts", {}), **scripts}
        config.write_json(descriptor_path, payload)


def remove_generated_files(root: Path, *, remove_root: bool) -> tuple[str, ...]:
    """Delete descriptor, lock files, and ``node_modules`` after a failed install.

    Args:
        root: Project directory.
        remove_root: Also delete ``root`` when nothing else is left in it.

    Returns:
        Names of the removed entries.
    """
    removed: list[str] = []
    if not root.is_dir():
        return ()
    for entry in sorted(root.iterdir(), key=lambda path: path.name):
        if not entry.name.startswith(_GENERATED_PREFIXES):
            continue
        log.info(f"Deleting generated file... {entry.name}")
        if entry.is_dir():
            shutil.rmtree(entry, ignore_errors=True)
        else:
            entry.unlink(missing_ok=True)
        removed.append(entry.name)
    if remove_root and paths.is_dir_empty(root):
        log.info(f"Deleting {root.name}/ from {root.parent}")
        root.rmdir()
    log.info("Done.")
    return tuple(removed)
