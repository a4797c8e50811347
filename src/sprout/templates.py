"""Bundled starter templates: discovery, manifests, and file emission."""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from pydantic import ValidationError

from . import log, paths
from .models import TemplateManifest

TEMPLATE_PACKAGE_PREFIX = "cra-template-"
MANIFEST_FILENAME = "template.json"
FILES_DIRNAME = "files"
APP_NAME_PLACEHOLDER = "{{app_name}}"
SCRIPTS_PLACEHOLDER = "{{scripts}}"


@dataclass(frozen=True)
class Template:
    """A resolved bundled template.

    Attributes:
        name: Normalized template name (``javascript``, ``typescript``).
        root: Package resource directory holding the template.
        manifest: Parsed ``template.json``.
    """

    name: str
    root: Traversable
    manifest: TemplateManifest

    @property
    def files(self) -> Traversable:
        return self.root.joinpath(FILES_DIRNAME)


class TemplateNotFoundError(LookupError):
    """Raised when a requested template is not bundled."""

    def __init__(self, *, template: str, available: tuple[str, ...]) -> None:
        self.template = template
        self.available = available
        super().__init__(f"template not found: {template}")


class TemplateManifestError(RuntimeError):
    """Raised when a bundled ``template.json`` cannot be parsed."""


def _templates_root() -> Traversable:
    return resources.files("sprout").joinpath("templates")


def normalize_template_name(value: str) -> str:
    """Map a user-supplied template name to its bundled directory name.

    Example:
        >>> normalize_template_name("cra-template-typescript")
        'typescript'
        >>> normalize_template_name(" TypeScript ")
        'typescript'
    """
    name = value.strip().lower()
    if name.startswith(TEMPLATE_PACKAGE_PREFIX):
        name = name[len(TEMPLATE_PACKAGE_PREFIX) :]
    return name


def available_templates() -> tuple[str, ...]:
    """Return the names of all bundled templates, sorted.

    Example:
        >>> {"javascript", "typescript"} <= set(available_templates())
        True
    """
    names = [
        entry.name
        for entry in _templates_root().iterdir()
        if entry.is_dir() and entry.joinpath(MANIFEST_FILENAME).is_file()
    ]
    return tuple(sorted(names))


def load_manifest(root: Traversable) -> TemplateManifest:
    """Parse the ``template.json`` under a template directory."""
    manifest_path = root.joinpath(MANIFEST_FILENAME)
    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
        return TemplateManifest.model_validate(payload)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise TemplateManifestError(
            f"invalid template manifest {manifest_path}: {exc}"
        ) from exc


def resolve_template(name: str) -> Template:
    """Resolve a template name to its bundled resources.

    Raises:
        TemplateNotFoundError: If no bundled template matches ``name``.
    """
    normalized = normalize_template_name(name)
    available = available_templates()
    if normalized not in available:
        raise TemplateNotFoundError(template=name, available=available)
    root = _templates_root().joinpath(normalized)
    return Template(name=normalized, root=root, manifest=load_manifest(root))


def render_scripts(scripts: dict[str, str], scripts_binary: str) -> dict[str, str]:
    """Fill the scripts-package placeholder in template scripts.

    Example:
        >>> render_scripts({"start": "{{scripts}} start"}, "react-scripts")
        {'start': 'react-scripts start'}
    """
    return {
        key: value.replace(SCRIPTS_PLACEHOLDER, scripts_binary)
        for key, value in scripts.items()
    }


def _render(content: bytes, app_name: str) -> bytes:
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return content
    return text.replace(APP_NAME_PLACEHOLDER, app_name).encode("utf-8")


def _destination_name(relative: Path) -> Path:
    if relative == Path(paths.TEMPLATE_GITIGNORE_FILENAME):
        return Path(paths.GITIGNORE_FILENAME)
    return relative


def _walk(node: Traversable, prefix: Path) -> list[tuple[Path, Traversable]]:
    entries: list[tuple[Path, Traversable]] = []
    for child in sorted(node.iterdir(), key=lambda item: item.name):
        relative = prefix / child.name
        if child.is_dir():
            entries.extend(_walk(child, relative))
        elif child.is_file():
            entries.append((relative, child))
    return entries


def emit_template(template: Template, root: Path, app_name: str) -> tuple[Path, ...]:
    """Copy a template's files into ``root``.

    ``gitignore`` is written as ``.gitignore`` and appended to an existing
    one. A pre-existing ``README.md`` is kept as ``README.old.md``.

    Args:
        template: Template to copy.
        root: Target project directory.
        app_name: Value substituted for ``{{app_name}}`` in text files.

    Returns:
        Paths written, relative to ``root``.
    """
    readme = root / paths.README_FILENAME
    if readme.exists():
        readme.rename(root / paths.README_OLD_FILENAME)
        log.info(f"Renamed existing {paths.README_FILENAME} to {paths.README_OLD_FILENAME}")

    written: list[Path] = []
    for relative, source in _walk(template.files, Path()):
        destination = _destination_name(relative)
        target = root / destination
        paths.ensure_dir(target.parent)
        content = _render(source.read_bytes(), app_name)
        if destination == Path(paths.GITIGNORE_FILENAME) and target.exists():
            existing = target.read_bytes()
            separator = b"" if not existing or existing.endswith(b"\n") else b"\n"
            target.write_bytes(existing + separator + content)
            log.debug(f"Appended template entries to {destination}")
        else:
            target.write_bytes(content)
            log.trace(f"Wrote {destination}")
        written.append(destination)
    return tuple(written)
