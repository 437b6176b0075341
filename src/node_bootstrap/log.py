"""Leveled terminal output for bootstrap runs.

Warnings and errors go to stderr, everything else to stdout. The threshold
comes from ``--log-level`` or ``NODE_BOOTSTRAP_LOG_LEVEL``.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LOG_LEVEL_ENV = "NODE_BOOTSTRAP_LOG_LEVEL"
NO_COLOR_ENV = "NODE_BOOTSTRAP_NO_COLOR"

LEVEL_NAMES = tuple(level.name.lower() for level in LogLevel)

_ALIASES = {"warn": LogLevel.WARNING}
_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
_configured_level: LogLevel | None = None
_no_color_override: bool | None = None


def parse_level(value: str | None) -> LogLevel:
    """Map a level name to a ``LogLevel``; unknown or empty names mean INFO.

    Example:
        >>> parse_level("Warn"), parse_level("loud")
        (<LogLevel.WARNING: 40>, <LogLevel.INFO: 30>)
    """
    name = (value or "").strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    if name.upper() in LogLevel.__members__:
        return LogLevel[name.upper()]
    return LogLevel.INFO


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = parse_level(os.environ.get(LOG_LEVEL_ENV))
    return _configured_level


def set_level(value: str | None) -> None:
    global _configured_level
    _configured_level = parse_level(value)


def set_no_color(value: bool) -> None:
    """Force colour output off (``True``) or defer to the environment."""
    global _no_color_override
    _no_color_override = True if value else None


def _colour_disabled() -> bool:
    if _no_color_override is not None:
        return _no_color_override
    return bool(os.environ.get("NO_COLOR") or os.environ.get(NO_COLOR_ENV))


def _write(level: LogLevel, message: str, style: str | None) -> None:
    if level < configured_level():
        return
    console = Console(
        file=sys.stderr if level >= LogLevel.WARNING else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=_colour_disabled(),
    )
    console.print(Text(message, style=style or _STYLES.get(level, "")))


def trace(message: str, *, style: str | None = None) -> None:
    _write(LogLevel.TRACE, message, style)


def debug(message: str, *, style: str | None = None) -> None:
    _write(LogLevel.DEBUG, message, style)


def info(message: str, *, style: str | None = None) -> None:
    _write(LogLevel.INFO, message, style)


def success(message: str, *, style: str | None = None) -> None:
    _write(LogLevel.SUCCESS, message, style)


def warning(message: str, *, style: str | None = None) -> None:
    _write(LogLevel.WARNING, message, style)


def error(message: str, *, style: str | None = None) -> None:
    _write(LogLevel.ERROR, message, style)
