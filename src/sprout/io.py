"""Plain stdout/stderr output that log-level filtering never hides.

Usage text, the conflict report, and the closing summary go through here
rather than ``sprout.log``.
"""

from __future__ import annotations

import sys
from typing import NoReturn


def say(message: str = "") -> None:
    """Print a line to stdout.

    Example:
        >>> say("Happy hacking!")
        Happy hacking!
    """
    print(message)


def say_err(message: str = "") -> None:
    """Print a line to stderr."""
    print(message, file=sys.stderr)


def die(message: str, code: int = 1) -> NoReturn:
    """Print ``error: <message>`` to stderr and exit with ``code``."""
    say_err(f"error: {message}")
    sys.exit(code)
