"""Shared fixtures: isolated registries, a controllable clock, and failure capture."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest

from lib_structured_log import core
from lib_structured_log.application.registry import HandlerRegistry
from lib_structured_log.domain.errors import LogError
from lib_structured_log.testing import RecordingTerminator


class FakeClock:
    """Clock returning a fixed instant until explicitly advanced."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def errors() -> list[LogError]:
    return []


@pytest.fixture()
def terminator() -> RecordingTerminator:
    return RecordingTerminator()


@pytest.fixture()
def registry(clock: FakeClock, errors: list[LogError], terminator: RecordingTerminator) -> HandlerRegistry:
    """Registry that records failures and terminations instead of printing or exiting."""

    return HandlerRegistry(clock=clock, terminate=terminator, on_error=errors.append)


@pytest.fixture()
def default_registry(registry: HandlerRegistry) -> Iterator[HandlerRegistry]:
    """Install *registry* as the package default for the duration of a test."""

    previous = core.swap_default_registry(registry)
    try:
        yield registry
    finally:
        core.swap_default_registry(previous)
