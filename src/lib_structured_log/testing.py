"""Testing collaborators that keep dispatch scenarios observable and predictable.

Purpose
    Provide in-memory handlers and a non-exiting terminal action so suites can
    assert on exactly what the dispatcher delivered, including failure paths,
    without real I/O or process termination.

Contents
    - ``FAILURE_MESSAGE``: stable message used when forcing a failure.
    - ``CaptureHandler``: records every entry it receives.
    - ``FailingHandler``: raises ``RuntimeError`` from ``log`` and ``flush``.
    - ``RecordingTerminator``: terminal action that records instead of exiting.
    - ``i_should_fail``: raises ``RuntimeError`` for CLI error-path tests.

System Integration
    Used by the unit, application, and CLI suites and usable by downstream
    projects testing their own logging calls.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .application.entry import Entry

FAILURE_MESSAGE: Final[str] = "i should fail"
"""Stable message raised by :class:`FailingHandler` and :func:`i_should_fail`."""


class CaptureHandler:
    """Handler that keeps every received entry in memory.

    Examples
    --------
    >>> from lib_structured_log.application.registry import HandlerRegistry
    >>> from lib_structured_log.domain.levels import Level
    >>> registry = HandlerRegistry()
    >>> capture = CaptureHandler()
    >>> registry.register_handler(capture, Level.WARN)
    >>> registry.new_entry().warn("disk almost full")
    >>> capture.messages()
    ['disk almost full']
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[Entry] = []
        self.flush_count = 0

    def log(self, entry: Entry) -> None:
        with self._lock:
            self._entries.append(entry)

    def flush(self) -> None:
        with self._lock:
            self.flush_count += 1

    @property
    def entries(self) -> list[Entry]:
        """Snapshot of the captured entries in arrival order."""

        with self._lock:
            return list(self._entries)

    def messages(self) -> list[str]:
        return [entry.message for entry in self.entries]


class FailingHandler:
    """Handler whose ``log`` and ``flush`` always raise ``RuntimeError``."""

    def __init__(self) -> None:
        self.log_calls = 0
        self.flush_calls = 0

    def log(self, entry: Entry) -> None:
        self.log_calls += 1
        raise RuntimeError(FAILURE_MESSAGE)

    def flush(self) -> None:
        self.flush_calls += 1
        raise RuntimeError(FAILURE_MESSAGE)


class RecordingTerminator:
    """Terminal action that records PANIC/FATAL entries instead of exiting."""

    def __init__(self) -> None:
        self.terminated: list[Entry] = []

    def __call__(self, entry: Entry) -> None:
        self.terminated.append(entry)


def i_should_fail() -> None:
    """Raise a deterministic :class:`RuntimeError` for failure-path testing.

    Examples
    --------
    >>> i_should_fail()
    Traceback (most recent call last):
    ...
    RuntimeError: i should fail
    """

    raise RuntimeError(FAILURE_MESSAGE)
