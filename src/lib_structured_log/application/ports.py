"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts output handlers and field sources must satisfy
so the registry can orchestrate them without depending on concrete
implementations.

Contents
--------
* :class:`Handler` – consumes a finalised entry.
* :class:`Flusher` – optional capability to drain buffered state.
* :class:`FieldsLoader` – produces a default-fields layer from an external source.

System Role
-----------
These protocols are ``runtime_checkable`` so the registry can detect the
optional :class:`Flusher` capability with ``isinstance`` at flush time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .entry import Entry


@runtime_checkable
class Handler(Protocol):
    """Receive every entry finalised at a level the handler was registered for.

    Why
    ----
    Keep formatting, buffering, and transport decisions outside the dispatch
    engine.

    Failure Contract
    ----------------
    Raise any :class:`Exception` to report a failure. The dispatcher reports it
    to the fallback sink and moves on to the next handler.
    """

    def log(self, entry: Entry) -> None:
        """Consume *entry*; its ``fields`` and ``timestamp`` are already resolved."""


@runtime_checkable
class Flusher(Protocol):
    """Optional capability for handlers that buffer output or hold connections."""

    def flush(self) -> None:
        """Drain buffered state; raise to report a failure."""


@runtime_checkable
class FieldsLoader(Protocol):
    """Materialise a default-fields layer from configuration outside the process code."""

    def load(self, prefix: str) -> Mapping[str, Any]:
        """Return fields namespaced by *prefix*."""
