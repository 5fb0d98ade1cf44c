"""Module-level helpers resolve the default registry at call time."""

from __future__ import annotations

import lib_structured_log as log
from lib_structured_log import core
from lib_structured_log.domain.levels import ALL_LEVELS, Level
from lib_structured_log.testing import CaptureHandler, FailingHandler


def test_swap_default_registry_round_trip(default_registry) -> None:
    assert log.default_registry() is default_registry
    other = log.HandlerRegistry()
    previous = core.swap_default_registry(other)
    assert previous is default_registry
    assert log.default_registry() is other
    core.swap_default_registry(previous)


def test_package_helpers_route_to_default_registry(default_registry) -> None:
    capture = CaptureHandler()
    log.register_handler(capture, *ALL_LEVELS)

    log.debug("d")
    log.infof("%s-%d", "i", 1)
    log.warn("w")
    log.errorf("e%d", 2)

    assert [(entry.level, entry.message) for entry in capture.entries] == [
        (Level.DEBUG, "d"),
        (Level.INFO, "i-1"),
        (Level.WARN, "w"),
        (Level.ERROR, "e2"),
    ]


def test_package_field_builders(default_registry) -> None:
    capture = CaptureHandler()
    log.register_handler(capture, Level.INFO)

    log.with_field("a", 1).info("one")
    log.with_fields({"b": 2}, c=3).info("two")
    log.with_str("s", 5).with_int("i", "6").with_bool("b", 0).with_float("f", "1.5").info("three")
    log.with_error(None).info("four")

    assert [entry.fields for entry in capture.entries] == [
        {"a": 1},
        {"b": 2, "c": 3},
        {"s": "5", "i": 6, "b": False, "f": 1.5},
        {},
    ]


def test_package_default_fields(default_registry) -> None:
    capture = CaptureHandler()
    log.register_handler(capture, Level.INFO)
    log.with_default_fields({"service": "api"}, version="1.2")
    log.info("hello")
    assert capture.entries[0].fields == {"service": "api", "version": "1.2"}


def test_package_trace_and_flush(default_registry) -> None:
    capture = CaptureHandler()
    failing = FailingHandler()
    log.register_handler(failing, Level.INFO)
    log.register_handler(capture, Level.INFO)

    with log.trace("unit of work"):
        pass

    assert capture.messages() == ["unit of work"]
    assert capture.entries[0].fields["duration"] == "0s"
    assert log.flush() == 1
    assert capture.flush_count == 1


def test_package_terminal_helpers(default_registry, terminator) -> None:
    capture = CaptureHandler()
    log.register_handler(capture, Level.PANIC, Level.FATAL)
    log.panic("p")
    log.panicf("p%d", 2)
    log.fatal("f")
    log.fatalf("f%d", 2)
    assert [entry.message for entry in terminator.terminated] == ["p", "p2", "f", "f2"]
    assert capture.messages() == ["p", "p2", "f", "f2"]
