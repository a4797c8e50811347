from .base import BaseService
from .errors import (
    DependencyMissingError,
    DirectoryConflictError,
    ExternalCommandFailedError,
    IoFailedError,
    ServiceFailure,
    ValidationFailedError,
)

__all__ = [
    "BaseService",
    "DependencyMissingError",
    "DirectoryConflictError",
    "ExternalCommandFailedError",
    "IoFailedError",
    "ServiceFailure",
    "ValidationFailedError",
]
