from __future__ import annotations

import pytest

from lib_structured_log.domain.errors import LogError, UnknownLevel
from lib_structured_log.domain.levels import ALL_LEVELS, Level, parse_level


def test_levels_are_ordered() -> None:
    assert list(ALL_LEVELS) == sorted(Level)
    assert Level.DEBUG < Level.INFO < Level.WARN < Level.ERROR < Level.PANIC < Level.FATAL


def test_all_levels_is_fixed_tuple() -> None:
    assert isinstance(ALL_LEVELS, tuple)
    assert len(ALL_LEVELS) == 6
    assert set(ALL_LEVELS) == set(Level)


def test_str_is_lowercase_name() -> None:
    assert [str(level) for level in ALL_LEVELS] == ["debug", "info", "warn", "error", "panic", "fatal"]


@pytest.mark.parametrize(
    ("text", "expected"),
    [("debug", Level.DEBUG), ("INFO", Level.INFO), (" Warn ", Level.WARN), ("warning", Level.WARN), ("fatal", Level.FATAL)],
)
def test_parse_level_accepts_names(text: str, expected: Level) -> None:
    assert parse_level(text) is expected


def test_parse_level_passes_members_through() -> None:
    assert parse_level(Level.PANIC) is Level.PANIC


def test_parse_level_rejects_unknown_names() -> None:
    with pytest.raises(UnknownLevel, match="verbose"):
        parse_level("verbose")
    assert issubclass(UnknownLevel, ValueError)
    assert issubclass(UnknownLevel, LogError)
