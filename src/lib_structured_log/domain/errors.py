"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the registry, the dispatcher, and host
applications. Apart from :class:`UnknownLevel`, none of these exceptions is
ever raised into application code: the dispatcher wraps handler failures and
hands them to the registry's fallback sink so that a logging call is always
safe to make.

Contents
--------
* :class:`LogError` – umbrella base class for all library errors.
* :class:`HandlerError` – a handler failed while logging an entry.
* :class:`FlushError` – a handler failed while flushing.
* :class:`FormatError` – a template or scalar field value could not be rendered.
* :class:`UnknownLevel` – a level name could not be parsed.
"""

from __future__ import annotations

from typing import Any


class LogError(Exception):
    """Base type for all exceptions emitted by ``lib_structured_log``.

    Why
    ----
    Provide a single catch-all type for fallback sinks that do not need
    fine-grained handling.
    """


class HandlerError(LogError):
    """Raised on behalf of a handler whose ``log`` call failed.

    Attributes
    ----------
    handler:
        The handler that failed.
    level:
        Level of the entry being delivered.
    """

    def __init__(self, handler: Any, level: Any, cause: BaseException) -> None:
        super().__init__(f"log failed: {type(handler).__name__}: {cause}")
        self.handler = handler
        self.level = level
        self.__cause__ = cause


class FlushError(LogError):
    """Raised on behalf of a handler whose ``flush`` call failed."""

    def __init__(self, handler: Any, cause: BaseException) -> None:
        super().__init__(f"flush log handler: {type(handler).__name__}: {cause}")
        self.handler = handler
        self.__cause__ = cause


class FormatError(LogError):
    """A printf-style template or a scalar field value could not be rendered.

    ``template`` holds the template, or the field key for a scalar builder.
    """

    def __init__(self, template: str, cause: BaseException) -> None:
        super().__init__(f"format failed for {template!r}: {cause}")
        self.template = template
        self.__cause__ = cause


class UnknownLevel(LogError, ValueError):
    """Raised by :func:`lib_structured_log.domain.levels.parse_level` for unknown names."""
