"""Expected failures raised by Sprout services.

Each subclass fixes a ``code`` the CLI can branch on. Bugs still surface as
ordinary exceptions.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Literal

ServiceFailureCode = Literal[
    "validation_failed",
    "directory_conflict",
    "dependency_missing",
    "external_command_failed",
    "io_failed",
]


class ServiceFailure(Exception):
    """A run stopped for a reason the user can act on.

    Attributes:
        code: Stable failure kind.
        recovery_hint: Optional follow-up line shown under the message.
    """

    code: ClassVar[ServiceFailureCode]

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__(message)
        self.recovery_hint = recovery_hint


class ValidationFailedError(ServiceFailure):
    """Bad project name, unknown template, or a target that is not a directory."""

    code = "validation_failed"


class DirectoryConflictError(ServiceFailure):
    """The target directory already holds entries generation could clobber."""

    code = "directory_conflict"

    def __init__(self, root: Path, conflicts: tuple[str, ...]) -> None:
        super().__init__(f"The directory {root.name} contains files that could conflict:")
        self.root = root
        self.conflicts = conflicts


class DependencyMissingError(ServiceFailure):
    """yarn or npm could not be found."""

    code = "dependency_missing"


class ExternalCommandFailedError(ServiceFailure):
    """The package manager exited non-zero or timed out."""

    code = "external_command_failed"


class IoFailedError(ServiceFailure):
    """Reading or writing project files failed."""

    code = "io_failed"
