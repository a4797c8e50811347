"""Sprout: create a React app in one command.

Example:
    >>> from sprout import __version__
    >>> isinstance(__version__, str)
    True
"""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("sprout")
except PackageNotFoundError:
    __version__ = "0.0.0"
