"""Carry an entry through request-scoped execution contexts.

Purpose
    Let middleware prepare an entry (request id, user, route) once and have
    code further down the call stack log with those fields, without threading
    the entry through every signature.

Contents
    - ``new_context``: derive a :class:`contextvars.Context` holding an entry.
    - ``from_context``: read the entry back, or start a fresh one.
    - ``bind`` / ``unbind``: set and reset the entry on the running context.

System Integration
    The storage key is a module-private :class:`~contextvars.ContextVar`, so no
    other library can collide with it. Asyncio tasks and ``Context.run``
    inherit bindings the usual way. Entries are values: extending one read
    from a context does not change what the context holds.
"""

from __future__ import annotations

from contextvars import Context, ContextVar, Token, copy_context

from .application.entry import Entry
from .core import new_entry

_ENTRY: ContextVar[Entry] = ContextVar("lib_structured_log_entry")


def new_context(ctx: Context | None, entry: Entry) -> Context:
    """Return a copy of *ctx* (current context when ``None``) holding *entry*.

    Examples
    --------
    >>> from lib_structured_log.core import with_field
    >>> ctx = new_context(None, with_field("request_id", "r-1"))
    >>> dict(from_context(ctx).merged_fields())
    {'request_id': 'r-1'}
    """

    derived = (ctx if ctx is not None else copy_context()).copy()
    derived.run(_ENTRY.set, entry)
    return derived


def from_context(ctx: Context | None = None) -> Entry:
    """Return the entry stored in *ctx* (or the running context).

    Falls back to a fresh entry from the default registry, seeded with the
    current default fields, when nothing is bound.
    """

    if ctx is None:
        stored = _ENTRY.get(None)
    else:
        stored = ctx.get(_ENTRY)
    return stored if stored is not None else new_entry()


def bind(entry: Entry) -> Token[Entry]:
    """Bind *entry* to the running context and return the reset token."""

    return _ENTRY.set(entry)


def unbind(token: Token[Entry]) -> None:
    """Restore the binding that was active before :func:`bind` returned *token*."""

    _ENTRY.reset(token)
