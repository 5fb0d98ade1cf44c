from __future__ import annotations

from datetime import datetime, timezone

from lib_structured_log.application.dispatch import dispatch
from lib_structured_log.application.entry import Entry
from lib_structured_log.domain.errors import HandlerError
from lib_structured_log.domain.fields import EMPTY_CHAIN
from lib_structured_log.domain.levels import Level
from lib_structured_log.testing import CaptureHandler, FailingHandler

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _now() -> datetime:
    return NOW


def test_empty_handler_list_returns_zero() -> None:
    reported: list[HandlerError] = []
    assert dispatch(Entry(), (), clock=_now, on_error=reported.append) == 0
    assert reported == []


def test_dispatch_resolves_timestamp_and_fields_per_handler() -> None:
    entry = Entry(level=Level.WARN, message="m", _chain=EMPTY_CHAIN.append({"a": 1}).append({"a": 2, "b": 3}))
    capture = CaptureHandler()
    assert dispatch(entry, (capture,), clock=_now, on_error=lambda error: None) == 1
    (delivered,) = capture.entries
    assert delivered.timestamp == NOW
    assert delivered.fields == {"a": 2, "b": 3}
    assert entry.timestamp is None and entry.fields == {}


def test_dispatch_counts_only_successful_handlers() -> None:
    reported: list[HandlerError] = []
    handlers = (FailingHandler(), CaptureHandler(), FailingHandler())
    assert dispatch(Entry(level=Level.ERROR), handlers, clock=_now, on_error=reported.append) == 1
    assert [error.handler for error in reported] == [handlers[0], handlers[2]]
    assert all(isinstance(error.__cause__, RuntimeError) for error in reported)
