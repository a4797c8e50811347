"""Pydantic models for Sprout invocation, configuration, and template data."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TEMPLATE = "javascript"
DEFAULT_SCRIPTS_PACKAGE = "react-scripts"
DEFAULT_DEPENDENCIES = ("react", "react-dom")
DESCRIPTOR_VERSION = "0.1.0"


def _strip_or_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class InvocationArgs(BaseModel):
    """Arguments for one scaffolding run, immutable once parsed.

    Attributes:
        project_directory: Target directory name or path; ``"."`` means cwd.
        use_npm: Select npm instead of yarn.
        template: Template name, or ``None`` for the configured default.
        verbose: Forward ``--verbose`` to the package manager.
        scripts_package: Override for the scripts package to install.

    Example:
        >>> InvocationArgs(project_directory="my-app", use_npm=True).use_npm
        True
    """

    model_config = ConfigDict(frozen=True)

    project_directory: str | None = None
    use_npm: bool = False
    template: str | None = None
    verbose: bool = False
    scripts_package: str | None = None

    @field_validator("project_directory", "template", "scripts_package", mode="before")
    @classmethod
    def normalize_optional_text(cls, value: object) -> object:
        return _strip_or_none(value)


class InstallSection(BaseModel):
    """Dependency installation defaults.

    Attributes:
        dependencies: Packages installed into every new project.
        scripts_package: Package providing the start/build/test scripts.
        timeout_seconds: Optional limit for the package-manager process.
    """

    model_config = ConfigDict(extra="allow")

    dependencies: list[str] = Field(default_factory=lambda: list(DEFAULT_DEPENDENCIES))
    scripts_package: str = DEFAULT_SCRIPTS_PACKAGE
    timeout_seconds: float | None = None

    @field_validator("scripts_package", mode="before")
    @classmethod
    def normalize_scripts_package(cls, value: object) -> object:
        if value is None:
            return DEFAULT_SCRIPTS_PACKAGE
        if isinstance(value, str):
            return value.strip() or DEFAULT_SCRIPTS_PACKAGE
        return value

    @field_validator("dependencies")
    @classmethod
    def drop_blank_dependencies(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]


class ConflictsSection(BaseModel):
    """Conflict detection settings.

    Attributes:
        ignore: Extra entry names treated as safe to find in the target.
    """

    model_config = ConfigDict(extra="allow")

    ignore: list[str] = Field(default_factory=list)


class TemplateSection(BaseModel):
    model_config = ConfigDict(extra="allow")

    default: str = DEFAULT_TEMPLATE

    @field_validator("default", mode="before")
    @classmethod
    def normalize_default(cls, value: object) -> object:
        if value is None:
            return DEFAULT_TEMPLATE
        if isinstance(value, str):
            return value.strip() or DEFAULT_TEMPLATE
        return value


class GitSection(BaseModel):
    model_config = ConfigDict(extra="allow")

    init: bool = True


class SproutConfig(BaseModel):
    """User configuration for Sprout.

    Example:
        >>> SproutConfig().install.scripts_package
        'react-scripts'
    """

    model_config = ConfigDict(extra="allow")

    install: InstallSection = Field(default_factory=InstallSection)
    conflicts: ConflictsSection = Field(default_factory=ConflictsSection)
    template: TemplateSection = Field(default_factory=TemplateSection)
    git: GitSection = Field(default_factory=GitSection)


class TemplatePackage(BaseModel):
    """Descriptor fragment a template contributes to ``package.json``.

    Keys other than ``dependencies`` and ``scripts`` (``eslintConfig``,
    ``browserslist``) are carried through as extras and merged verbatim.
    """

    model_config = ConfigDict(extra="allow")

    dependencies: dict[str, str] = Field(default_factory=dict)
    scripts: dict[str, str] = Field(default_factory=dict)


class TemplateManifest(BaseModel):
    """Parsed ``template.json`` for a bundled template."""

    model_config = ConfigDict(extra="allow")

    description: str = ""
    package: TemplatePackage = Field(default_factory=TemplatePackage)


class PackageDescriptor(BaseModel):
    """The ``package.json`` written into the generated project.

    Example:
        >>> PackageDescriptor(name="my-app").model_dump(exclude_none=True)
        {'name': 'my-app', 'version': '0.1.0', 'private': True}
    """

    model_config = ConfigDict(extra="allow")

    name: str
    version: str = DESCRIPTOR_VERSION
    private: bool = True
