"""Project creation service modules."""

from .create_project import (
    CreateProjectDependencies,
    CreateProjectOutcome,
    CreateProjectRequest,
    CreateProjectService,
    remove_generated_files,
)

__all__ = [
    "CreateProjectDependencies",
    "CreateProjectOutcome",
    "CreateProjectRequest",
    "CreateProjectService",
    "remove_generated_files",
]
