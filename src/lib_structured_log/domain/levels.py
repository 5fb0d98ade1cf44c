"""Severity levels used to route entries to handlers.

Purpose
-------
Define the closed, ordered set of severities understood by the dispatch engine.
Levels are routing keys only: the registry never compares them, so there is no
"minimum level" threshold anywhere in the package.

Contents
--------
* :class:`Level` – ordered enumeration ``DEBUG`` → ``FATAL``.
* :data:`ALL_LEVELS` – fixed tuple literal covering every level.
* :func:`parse_level` – tolerant parser used by the CLI and env adapters.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

from .errors import UnknownLevel


class Level(IntEnum):
    """Ordered severity stamped on every finalised entry.

    Examples
    --------
    >>> str(Level.WARN)
    'warn'
    >>> Level.DEBUG < Level.FATAL
    True
    """

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    PANIC = 4
    FATAL = 5

    def __str__(self) -> str:
        return self.name.lower()


ALL_LEVELS: Final[tuple[Level, ...]] = (
    Level.DEBUG,
    Level.INFO,
    Level.WARN,
    Level.ERROR,
    Level.PANIC,
    Level.FATAL,
)

_ALIASES: Final[dict[str, Level]] = {"warning": Level.WARN, "critical": Level.FATAL}


def parse_level(value: str | Level) -> Level:
    """Return the :class:`Level` named by *value* (case-insensitive).

    Raises
    ------
    UnknownLevel
        When *value* names no level.

    Examples
    --------
    >>> parse_level("Info")
    <Level.INFO: 1>
    >>> parse_level("warning")
    <Level.WARN: 2>
    """

    if isinstance(value, Level):
        return value
    key = value.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Level[key.upper()]
    except KeyError as exc:
        raise UnknownLevel(f"Unknown log level: {value!r}") from exc
