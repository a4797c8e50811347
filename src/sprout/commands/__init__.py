"""Command implementations exposed by the Sprout CLI."""

from .create import create_project

__all__ = ["create_project"]
