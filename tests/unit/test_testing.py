from __future__ import annotations

import pytest

from lib_structured_log.application.entry import Entry
from lib_structured_log.application.ports import Flusher, Handler
from lib_structured_log.testing import CaptureHandler, FailingHandler, RecordingTerminator, i_should_fail


def test_i_should_fail_raises_runtime_error() -> None:
    with pytest.raises(RuntimeError, match="^i should fail$"):
        i_should_fail()


def test_i_should_fail_reexported() -> None:
    from lib_structured_log import i_should_fail as exported
    from lib_structured_log.testing import i_should_fail as original

    assert exported is original


def test_support_handlers_satisfy_ports() -> None:
    for handler in (CaptureHandler(), FailingHandler()):
        assert isinstance(handler, Handler)
        assert isinstance(handler, Flusher)


def test_capture_handler_records_in_order() -> None:
    capture = CaptureHandler()
    capture.log(Entry(message="one"))
    capture.log(Entry(message="two"))
    capture.flush()
    assert capture.messages() == ["one", "two"]
    assert capture.flush_count == 1


def test_failing_handler_counts_attempts() -> None:
    failing = FailingHandler()
    with pytest.raises(RuntimeError):
        failing.log(Entry())
    with pytest.raises(RuntimeError):
        failing.flush()
    assert (failing.log_calls, failing.flush_calls) == (1, 1)


def test_recording_terminator_keeps_entries() -> None:
    terminator = RecordingTerminator()
    entry = Entry(message="bye")
    terminator(entry)
    assert terminator.terminated == [entry]
