"""Public package surface for the leveled structured-logging core.

Importing :mod:`lib_structured_log` gives access to the module-level helpers
bound to the default registry (``info``, ``with_field``, ``trace`` ...), the
registry and entry types for isolated use, context binding, and the handler
ports that output adapters implement.
"""

from __future__ import annotations

from .application.entry import Entry
from .application.ports import FieldsLoader, Flusher, Handler
from .application.registry import HandlerRegistry, exit_process
from .context import bind, from_context, new_context, unbind
from .core import (
    debug,
    debugf,
    default_registry,
    error,
    errorf,
    fatal,
    fatalf,
    flush,
    info,
    infof,
    new_entry,
    panic,
    panicf,
    register_handler,
    swap_default_registry,
    trace,
    warn,
    warnf,
    with_bool,
    with_default_fields,
    with_error,
    with_field,
    with_fields,
    with_float,
    with_int,
    with_str,
)
from .domain.duration import format_duration
from .domain.errors import FlushError, FormatError, HandlerError, LogError, UnknownLevel
from .domain.fields import FieldChain, Fields
from .domain.levels import ALL_LEVELS, Level, parse_level
from .observability import get_logger
from .testing import i_should_fail

__all__ = [
    "ALL_LEVELS",
    "Entry",
    "FieldChain",
    "Fields",
    "FieldsLoader",
    "FlushError",
    "Flusher",
    "FormatError",
    "Handler",
    "HandlerError",
    "HandlerRegistry",
    "Level",
    "LogError",
    "UnknownLevel",
    "bind",
    "debug",
    "debugf",
    "default_registry",
    "error",
    "errorf",
    "exit_process",
    "fatal",
    "fatalf",
    "flush",
    "format_duration",
    "from_context",
    "get_logger",
    "i_should_fail",
    "info",
    "infof",
    "new_context",
    "new_entry",
    "panic",
    "panicf",
    "parse_level",
    "register_handler",
    "swap_default_registry",
    "trace",
    "unbind",
    "warn",
    "warnf",
    "with_bool",
    "with_default_fields",
    "with_error",
    "with_field",
    "with_fields",
    "with_float",
    "with_int",
    "with_str",
]
