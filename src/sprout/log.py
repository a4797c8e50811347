"""Leveled terminal output for Sprout.

Progress messages (``info`` and below) go to stdout; warnings and errors go
to stderr. The threshold comes from ``--log-level`` or ``SPROUT_LOG_LEVEL``
and defaults to ``info``. Color is off when ``--no-color`` is passed or
``NO_COLOR``/``SPROUT_NO_COLOR`` is set.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text

LOG_LEVEL_ENV = "SPROUT_LOG_LEVEL"
NO_COLOR_ENVS = ("NO_COLOR", "SPROUT_NO_COLOR")


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


_ALIASES = {"warn": LogLevel.WARNING}
_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.INFO: "",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}

_level: LogLevel | None = None
_no_color_override: bool | None = None


def parse_level(value: str | None) -> LogLevel:
    """Map a level name to ``LogLevel``; unknown or empty names mean ``INFO``.

    Example:
        >>> parse_level("Debug").name
        'DEBUG'
        >>> parse_level("loud").name
        'INFO'
    """
    name = (value or "").strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return LogLevel[name.upper()]
    except KeyError:
        return LogLevel.INFO


def configured_level() -> LogLevel:
    global _level
    if _level is None:
        _level = parse_level(os.environ.get(LOG_LEVEL_ENV))
    return _level


def set_level(value: str | None) -> None:
    global _level
    _level = parse_level(value)


def set_no_color(value: bool) -> None:
    global _no_color_override
    _no_color_override = value


def reset() -> None:
    """Forget CLI overrides; the environment is read again on next use."""
    global _level, _no_color_override
    _level = None
    _no_color_override = None


def is_enabled(level: LogLevel) -> bool:
    return level >= configured_level()


def color_disabled() -> bool:
    if _no_color_override is not None:
        return _no_color_override
    return any(os.environ.get(name) for name in NO_COLOR_ENVS)


def emit(level: LogLevel, message: str) -> None:
    if not is_enabled(level):
        return
    # Streams are looked up per call.
    console = Console(
        file=sys.stderr if level >= LogLevel.WARNING else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=color_disabled(),
    )
    console.print(Text(message, style=_STYLES[level]))


def trace(message: str) -> None:
    emit(LogLevel.TRACE, message)


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def info(message: str) -> None:
    emit(LogLevel.INFO, message)


def success(message: str) -> None:
    emit(LogLevel.SUCCESS, message)


def warning(message: str) -> None:
    emit(LogLevel.WARNING, message)


def error(message: str) -> None:
    emit(LogLevel.ERROR, message)
