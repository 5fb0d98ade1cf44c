"""Diagnostics for the logging core itself.

Purpose
    Give the dispatch engine somewhere to report its own failures (a handler
    raising, a flush failing, a template that does not format) without routing
    them back through the handlers that may be the cause.

Contents
    - ``get_logger``: returns the package's standard-library logger.
    - ``log_debug``: emit structured debug entries via a private emitter.
    - ``make_event``: convenience builder for registration event payloads.
    - ``report_failure``: default fallback sink used by
      :class:`lib_structured_log.application.registry.HandlerRegistry`.

System Integration
    The package logger has no handler of its own. Until the host application
    configures :mod:`logging`, the standard library's last-resort handler
    prints ERROR records to ``stderr``; once configured, the host decides where
    diagnostics go.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping, Sequence

from .domain.errors import LogError

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_structured_log")


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    Why
        Fallback diagnostics must reach somewhere even in unconfigured
        processes, yet hosts need full control once they configure logging.
    """

    return _LOGGER


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug diagnostic."""

    _emit(logging.DEBUG, message, fields)


def make_event(
    handler: str,
    levels: Sequence[str],
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured payload describing a registry event.

    Examples
    --------
    >>> make_event('CaptureHandler', ['info'], {'total': 3})
    {'handler': 'CaptureHandler', 'levels': ['info'], 'total': 3}
    """

    event: dict[str, Any] = {"handler": handler, "levels": list(levels)}
    if payload:
        event |= dict(payload)
    return event


def report_failure(error: LogError) -> None:
    """Record *error* on the package logger at ERROR level.

    What
        Logs ``"log: <error>"`` with the underlying cause attached as
        ``exc_info`` so tracebacks of failing handlers are preserved.
    Side Effects
        Writes to ``stderr`` through the last-resort handler when logging is
        unconfigured.
    """

    cause = error.__cause__ if error.__cause__ is not None else error
    _LOGGER.error(
        "log: %s",
        error,
        exc_info=cause,
        extra={"context": {"error_type": type(error).__name__}},
    )


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a diagnostic through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": dict(fields)})
