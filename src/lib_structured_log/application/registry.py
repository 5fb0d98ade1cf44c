"""Handler registry with a lock-free read path.

Purpose
-------
Map every :class:`Level` to the ordered handlers registered for it, keep the
flat registration list used by :meth:`HandlerRegistry.flush`, and own the
default-fields chain that seeds new entries.

Contents
--------
* :class:`HandlerRegistry` – registration, snapshot publication, dispatch,
  flush, default fields, and the terminal action used by PANIC/FATAL.
* :func:`exit_process` – default terminal action.
* :func:`utc_now` – default clock.

System Role
-----------
Writes (registration, default-field additions) are rare and serialised by a
single lock. Reads happen on every log call and take no lock: they load the
current snapshot reference, an immutable ``MappingProxyType`` of tuples that is
rebuilt in full and published by one attribute assignment while the lock is
held. A reader therefore sees either the previous snapshot or the new one,
never a partial update.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from types import MappingProxyType, TracebackType
from typing import Any, Callable, Mapping, NoReturn

from ..domain.errors import FlushError, LogError
from ..domain.fields import EMPTY_CHAIN, FieldChain
from ..domain.levels import ALL_LEVELS, Level
from ..observability import log_debug, make_event, report_failure
from .dispatch import dispatch
from .entry import Entry
from .ports import Flusher, Handler


def utc_now() -> datetime:
    """Return the current instant as an aware UTC ``datetime``."""

    return datetime.now(timezone.utc)


def exit_process(entry: Entry) -> NoReturn:
    """Terminate the process after a PANIC or FATAL entry was dispatched.

    Raises :class:`SystemExit` with status ``1`` so ``finally`` blocks and
    ``atexit`` hooks still run.
    """

    raise SystemExit(1)


class HandlerRegistry:
    """Route finalised entries to the handlers registered for their level.

    Why
    ----
    A process-wide registry is convenient, but tests and embedded components
    need isolated instances. The class carries all state; the package-level
    helpers in :mod:`lib_structured_log.core` merely bind to a default instance.

    Parameters
    ----------
    clock:
        Callable returning the current aware UTC ``datetime``. Used for entry
        timestamps and trace start/stop times.
    terminate:
        Terminal action invoked with the finalised entry after a PANIC or
        FATAL dispatch. Defaults to :func:`exit_process`.
    on_error:
        Fallback sink receiving handler, flush, and format failures. Defaults
        to :func:`lib_structured_log.observability.report_failure`.

    Examples
    --------
    >>> from lib_structured_log.testing import CaptureHandler
    >>> registry = HandlerRegistry()
    >>> capture = CaptureHandler()
    >>> registry.register_handler(capture, Level.INFO, Level.ERROR)
    >>> registry.new_entry().debug("ignored")
    >>> registry.new_entry().info("hi")
    >>> [(str(e.level), e.message) for e in capture.entries]
    [('info', 'hi')]
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utc_now,
        terminate: Callable[[Entry], Any] = exit_process,
        on_error: Callable[[LogError], None] = report_failure,
    ) -> None:
        self.clock = clock
        self._terminate = terminate
        self._on_error = on_error
        self._lock = threading.Lock()
        self._leveled: dict[Level, list[Handler]] = {level: [] for level in ALL_LEVELS}
        self._handlers: tuple[Handler, ...] = ()
        self._default_fields: FieldChain = EMPTY_CHAIN
        self._snapshot: Mapping[Level, tuple[Handler, ...]] = self._build_snapshot()

    # -- registration ----------------------------------------------------

    def register_handler(self, handler: Handler, *levels: Level) -> None:
        """Register *handler* for every level in *levels*.

        Side Effects
        ------------
        Appends to each level list and to the flat list, then publishes a new
        snapshot before the lock is released. No uniqueness check is made:
        registering a handler twice for a level delivers each entry twice.
        Calling without levels only enrols the handler for :meth:`flush`.
        An invalid level raises ``ValueError`` before anything is recorded.
        """

        resolved = tuple(Level(level) for level in levels)
        with self._lock:
            for level in resolved:
                self._leveled[level].append(handler)
            self._handlers = (*self._handlers, handler)
            self._snapshot = self._build_snapshot()
        log_debug(
            "handler_registered",
            **make_event(type(handler).__name__, [str(level) for level in resolved]),
        )

    def handlers_for(self, level: Level) -> tuple[Handler, ...]:
        """Return the handlers registered for *level* from the current snapshot."""

        return self._snapshot.get(level, ())

    @property
    def handlers(self) -> tuple[Handler, ...]:
        """Every registration in order, including repeats."""

        return self._handlers

    def _build_snapshot(self) -> Mapping[Level, tuple[Handler, ...]]:
        """Freeze the current level lists into a read-only lookup table."""

        return MappingProxyType({level: tuple(handlers) for level, handlers in self._leveled.items()})

    # -- default fields ----------------------------------------------------

    def with_default_fields(self, fields: Mapping[str, Any]) -> None:
        """Append *fields* as a new default layer for entries created from now on."""

        with self._lock:
            self._default_fields = self._default_fields.append(fields)

    @property
    def default_fields(self) -> FieldChain:
        return self._default_fields

    def new_entry(self) -> Entry:
        """Return a fresh entry seeded with the current default-fields chain."""

        return Entry(_chain=self._default_fields, _registry=self)

    # -- dispatch & termination -------------------------------------------

    def dispatch(self, entry: Entry) -> int:
        """Deliver *entry* to the handlers registered for its level."""

        return dispatch(
            entry,
            self.handlers_for(entry.level),
            clock=self.clock,
            on_error=self._on_error,
        )

    def terminate(self, entry: Entry) -> None:
        """Run the configured terminal action for a dispatched PANIC/FATAL entry."""

        self._terminate(entry)

    def report(self, error: LogError) -> None:
        """Forward *error* to the fallback sink."""

        self._on_error(error)

    # -- flush & lifecycle -------------------------------------------------

    def flush(self) -> int:
        """Flush every distinct registered handler that implements :class:`Flusher`.

        Failures are reported and do not stop the iteration.

        Returns
        -------
        int
            Number of handlers flushed successfully.
        """

        flushed = 0
        seen: set[int] = set()
        for handler in self._handlers:
            if id(handler) in seen or not isinstance(handler, Flusher):
                continue
            seen.add(id(handler))
            try:
                handler.flush()
            except Exception as exc:  # noqa: BLE001 - flush is best-effort per handler
                self._on_error(FlushError(handler, exc))
                continue
            flushed += 1
        return flushed

    def close(self) -> None:
        """Flush all handlers; the registry stays usable afterwards."""

        self.flush()

    def __enter__(self) -> HandlerRegistry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
