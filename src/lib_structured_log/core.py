"""Composition root and package-level logging helpers.

Purpose
-------
Provide the ergonomic module-level API (``info``, ``with_field``,
``register_handler`` ...) bound to a process-wide default
:class:`HandlerRegistry`, while keeping that instance replaceable for tests and
embedded use.

Contents
--------
* :func:`default_registry` / :func:`swap_default_registry` – access and
  replace the process-wide registry.
* :func:`register_handler`, :func:`with_default_fields`, :func:`flush` –
  registry operations.
* :func:`debug` … :func:`fatalf` – severity helpers creating a fresh entry.
* :func:`with_field`, :func:`with_fields`, :func:`with_str`, :func:`with_bool`,
  :func:`with_int`, :func:`with_float`, :func:`with_error`, :func:`trace` –
  entry builders.

System Role
-----------
Every helper resolves the default registry at call time, so a swap takes
effect immediately for subsequent calls.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping

from .application.entry import Entry
from .application.ports import Handler
from .application.registry import HandlerRegistry
from .domain.levels import Level

_DEFAULT_REGISTRY = HandlerRegistry()
_SWAP_LOCK = threading.Lock()


def default_registry() -> HandlerRegistry:
    """Return the process-wide registry used by the module-level helpers."""

    return _DEFAULT_REGISTRY


def swap_default_registry(registry: HandlerRegistry) -> HandlerRegistry:
    """Install *registry* as the process-wide default and return the previous one.

    Examples
    --------
    >>> previous = swap_default_registry(HandlerRegistry())
    >>> restored = swap_default_registry(previous)
    >>> default_registry() is previous
    True
    """

    global _DEFAULT_REGISTRY
    with _SWAP_LOCK:
        previous = _DEFAULT_REGISTRY
        _DEFAULT_REGISTRY = registry
    return previous


def register_handler(handler: Handler, *levels: Level) -> None:
    """Register *handler* on the default registry for *levels*."""

    _DEFAULT_REGISTRY.register_handler(handler, *levels)


def with_default_fields(fields: Mapping[str, Any] | None = None, /, **extra: Any) -> None:
    """Add a default-fields layer applied to every entry created afterwards."""

    layer = dict(fields or {})
    layer.update(extra)
    _DEFAULT_REGISTRY.with_default_fields(layer)


def flush() -> int:
    """Flush every handler on the default registry that supports it."""

    return _DEFAULT_REGISTRY.flush()


def new_entry() -> Entry:
    """Return a fresh entry bound to the default registry."""

    return _DEFAULT_REGISTRY.new_entry()


def debug(msg: str) -> None:
    new_entry().debug(msg)


def debugf(template: str, *args: Any) -> None:
    new_entry().debugf(template, *args)


def info(msg: str) -> None:
    new_entry().info(msg)


def infof(template: str, *args: Any) -> None:
    new_entry().infof(template, *args)


def warn(msg: str) -> None:
    new_entry().warn(msg)


def warnf(template: str, *args: Any) -> None:
    new_entry().warnf(template, *args)


def error(msg: str) -> None:
    new_entry().error(msg)


def errorf(template: str, *args: Any) -> None:
    new_entry().errorf(template, *args)


def panic(msg: str) -> None:
    """Log at PANIC, then run the default registry's terminal action."""

    new_entry().panic(msg)


def panicf(template: str, *args: Any) -> None:
    new_entry().panicf(template, *args)


def fatal(msg: str) -> None:
    """Log at FATAL, then run the default registry's terminal action."""

    new_entry().fatal(msg)


def fatalf(template: str, *args: Any) -> None:
    new_entry().fatalf(template, *args)


def with_fields(fields: Mapping[str, Any] | None = None, /, **extra: Any) -> Entry:
    """Return a new entry with *fields* set."""

    return new_entry().with_fields(fields, **extra)


def with_field(key: str, value: Any) -> Entry:
    """Return a new entry with ``key`` set to ``value``."""

    return new_entry().with_field(key, value)


def with_str(key: str, value: Any) -> Entry:
    return new_entry().with_str(key, value)


def with_bool(key: str, value: Any) -> Entry:
    return new_entry().with_bool(key, value)


def with_int(key: str, value: Any) -> Entry:
    return new_entry().with_int(key, value)


def with_float(key: str, value: Any) -> Entry:
    return new_entry().with_float(key, value)


def with_error(err: BaseException | None) -> Entry:
    """Return a new entry with the ``"error"`` field set from *err*."""

    return new_entry().with_error(err)


def trace(msg: str) -> Entry:
    """Start a trace; call ``stop()`` or leave the ``with`` block to emit it.

    Examples
    --------
    >>> with trace("rebuild index"):
    ...     pass
    """

    return new_entry().trace(msg)


__all__ = [
    "Entry",
    "HandlerRegistry",
    "default_registry",
    "swap_default_registry",
    "register_handler",
    "with_default_fields",
    "flush",
    "new_entry",
    "debug",
    "debugf",
    "info",
    "infof",
    "warn",
    "warnf",
    "error",
    "errorf",
    "panic",
    "panicf",
    "fatal",
    "fatalf",
    "with_fields",
    "with_field",
    "with_str",
    "with_bool",
    "with_int",
    "with_float",
    "with_error",
    "trace",
]
