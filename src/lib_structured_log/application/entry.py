"""The value-typed log entry builder.

Purpose
-------
Carry one in-flight log record from the call site to the dispatcher. An
:class:`Entry` is a frozen dataclass: every ``with_*`` call returns a new
entry that shares the receiver's field layers, so a base entry can serve as a
template for any number of independent calls.

Contents
--------
* :class:`Entry` – level, message, timestamp, flattened fields, plus the
  private field chain, trace start time, and owning registry.

System Role
-----------
Entries are created by :meth:`lib_structured_log.application.registry.HandlerRegistry.new_entry`
(or the package-level helpers in :mod:`lib_structured_log.core`), extended by
application code, and finalised exactly once by a severity method or by
:meth:`Entry.stop`. Finalisation hands the entry to the owning registry for
dispatch; the core never keeps a reference afterwards.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable, Mapping

from ..domain.duration import format_duration
from ..domain.errors import FormatError
from ..domain.fields import EMPTY_CHAIN, FieldChain, Fields
from ..domain.levels import Level

if TYPE_CHECKING:
    from .registry import HandlerRegistry


@dataclass(frozen=True, slots=True)
class Entry:
    """A single structured log record.

    Why
    ----
    Annotating an entry must stay cheap even when no handler listens at the
    final level, and entries passed between functions must never alias each
    other's state.

    What
    ----
    Public attributes form the schema handlers are built against:
    ``level``, ``message``, ``timestamp`` (UTC, set at dispatch) and
    ``fields`` (flattened at dispatch). Field layers accumulate privately in a
    :class:`FieldChain` until then.

    Examples
    --------
    >>> from lib_structured_log.application.registry import HandlerRegistry
    >>> base = HandlerRegistry().new_entry().with_field("service", "api")
    >>> child = base.with_fields({"service": "worker", "attempt": 2})
    >>> dict(base.merged_fields()), dict(child.merged_fields())
    ({'service': 'api'}, {'service': 'worker', 'attempt': 2})
    """

    level: Level = Level.DEBUG
    message: str = ""
    timestamp: datetime | None = None
    fields: Fields = field(default_factory=Fields)
    _chain: FieldChain = field(default=EMPTY_CHAIN, repr=False)
    _start: datetime | None = field(default=None, repr=False)
    _registry: HandlerRegistry | None = field(default=None, repr=False, compare=False)

    # -- field builders -------------------------------------------------

    def with_fields(self, fields: Mapping[str, Any] | None = None, /, **extra: Any) -> Entry:
        """Return a new entry with *fields* (and keyword *extra*) appended as one layer."""

        layer = dict(fields or {})
        layer.update(extra)
        return replace(self, _chain=self._chain.append(layer))

    def with_field(self, key: str, value: Any) -> Entry:
        """Return a new entry with ``key`` set to ``value``."""

        return self.with_fields({key: value})

    def with_str(self, key: str, value: Any) -> Entry:
        return self._coerced(key, value, str)

    def with_bool(self, key: str, value: Any) -> Entry:
        return self._coerced(key, value, bool)

    def with_int(self, key: str, value: Any) -> Entry:
        """Return a new entry with ``key`` set to ``int(value)``.

        A value ``int`` rejects is stored as given and a :class:`FormatError`
        goes to the fallback sink.
        """

        return self._coerced(key, value, int)

    def with_float(self, key: str, value: Any) -> Entry:
        return self._coerced(key, value, float)

    def with_error(self, err: BaseException | None) -> Entry:
        """Return a new entry with ``"error"`` set to the full rendering of *err*.

        ``None`` returns the receiver unchanged. The rendering includes the
        traceback when the exception has been raised.

        Examples
        --------
        >>> entry = Entry().with_error(ValueError("boom"))
        >>> entry.merged_fields()["error"]
        'ValueError: boom'
        >>> Entry().with_error(None) == Entry()
        True
        """

        if err is None:
            return self
        rendered = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        return self.with_field("error", rendered.rstrip("\n"))

    def merged_fields(self) -> Fields:
        """Collapse the private field chain into a fresh mapping."""

        return self._chain.merged()

    # -- severity methods -----------------------------------------------

    def debug(self, msg: str) -> None:
        """Finalise at DEBUG with *msg*."""

        self._finalize(Level.DEBUG, msg)

    def debugf(self, template: str, *args: Any) -> None:
        """Finalise at DEBUG with ``template % args``."""

        self._finalize(Level.DEBUG, self._render(template, args))

    def info(self, msg: str) -> None:
        """Finalise at INFO with *msg*."""

        self._finalize(Level.INFO, msg)

    def infof(self, template: str, *args: Any) -> None:
        """Finalise at INFO with ``template % args``."""

        self._finalize(Level.INFO, self._render(template, args))

    def warn(self, msg: str) -> None:
        """Finalise at WARN with *msg*."""

        self._finalize(Level.WARN, msg)

    def warnf(self, template: str, *args: Any) -> None:
        """Finalise at WARN with ``template % args``."""

        self._finalize(Level.WARN, self._render(template, args))

    def error(self, msg: str) -> None:
        """Finalise at ERROR with *msg*."""

        self._finalize(Level.ERROR, msg)

    def errorf(self, template: str, *args: Any) -> None:
        """Finalise at ERROR with ``template % args``."""

        self._finalize(Level.ERROR, self._render(template, args))

    def panic(self, msg: str) -> None:
        """Finalise at PANIC with *msg*, then run the registry's terminal action."""

        self._terminate(self._finalize(Level.PANIC, msg))

    def panicf(self, template: str, *args: Any) -> None:
        """Finalise at PANIC with ``template % args``, then run the terminal action."""

        self._terminate(self._finalize(Level.PANIC, self._render(template, args)))

    def fatal(self, msg: str) -> None:
        """Finalise at FATAL with *msg*, then run the registry's terminal action."""

        self._terminate(self._finalize(Level.FATAL, msg))

    def fatalf(self, template: str, *args: Any) -> None:
        """Finalise at FATAL with ``template % args``, then run the terminal action."""

        self._terminate(self._finalize(Level.FATAL, self._render(template, args)))

    # -- tracing ---------------------------------------------------------

    def trace(self, msg: str) -> Entry:
        """Return a new entry carrying *msg* and the current time as its start.

        Nothing is dispatched until :meth:`stop` is called, either directly or
        by leaving a ``with`` block.
        """

        return replace(self, message=msg, _start=self._owner().clock())

    def stop(self) -> None:
        """Dispatch the traced message at INFO with a ``"duration"`` field.

        Examples
        --------
        >>> from datetime import timezone
        >>> from lib_structured_log.application.registry import HandlerRegistry
        >>> from lib_structured_log.testing import CaptureHandler
        >>> ticks = iter([datetime(2024, 1, 1, tzinfo=timezone.utc), datetime(2024, 1, 2, 1, tzinfo=timezone.utc)])
        >>> registry = HandlerRegistry(clock=lambda: next(ticks, datetime(2024, 1, 2, 1, tzinfo=timezone.utc)))
        >>> capture = CaptureHandler()
        >>> registry.register_handler(capture, Level.INFO)
        >>> registry.new_entry().trace("task").stop()
        >>> capture.entries[0].fields["duration"]
        '1d1h0m0s'
        """

        registry = self._owner()
        elapsed = registry.clock() - self._start if self._start is not None else timedelta(0)
        self.with_field("duration", format_duration(elapsed)).info(self.message)

    def __enter__(self) -> Entry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.with_error(exc).stop()
        return False

    # -- internals -------------------------------------------------------

    def _owner(self) -> HandlerRegistry:
        """Return the registry this entry dispatches to."""

        if self._registry is not None:
            return self._registry
        from ..core import default_registry

        return default_registry()

    def _finalize(self, level: Level, message: str) -> Entry:
        """Stamp *level* and *message* and hand the entry to the dispatcher."""

        finalized = replace(self, level=level, message=message)
        self._owner().dispatch(finalized)
        return finalized

    def _terminate(self, finalized: Entry) -> None:
        self._owner().terminate(finalized)

    def _render(self, template: str, args: tuple[Any, ...]) -> str:
        """Apply printf-style formatting the way :mod:`logging` does.

        A failure is reported to the fallback sink and the raw template is used.
        """

        values: Any = args
        if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
            values = args[0]
        try:
            return template % values
        except Exception as exc:  # noqa: BLE001
            self._owner().report(FormatError(template, exc))
            return template

    def _coerced(self, key: str, value: Any, kind: Callable[[Any], Any]) -> Entry:
        """Add *key* converted by *kind*, keeping the raw value when conversion fails."""

        try:
            converted = kind(value)
        except Exception as exc:  # noqa: BLE001
            self._owner().report(FormatError(key, exc))
            converted = value
        return self.with_fields({key: converted})
