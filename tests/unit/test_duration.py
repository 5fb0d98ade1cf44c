from __future__ import annotations

from datetime import timedelta

import pytest

from lib_structured_log.domain.duration import compact, format_duration, to_nanoseconds


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(0), "0s"),
        (timedelta(microseconds=1), "1µs"),
        (timedelta(milliseconds=250), "250ms"),
        (timedelta(microseconds=1_500), "1.5ms"),
        (timedelta(seconds=5), "5s"),
        (timedelta(seconds=1, microseconds=250_000), "1.25s"),
        (timedelta(seconds=90), "1m30s"),
        (timedelta(hours=1, minutes=30), "1h30m0s"),
        (timedelta(hours=23, minutes=59, seconds=59), "23h59m59s"),
    ],
)
def test_short_durations_use_compact_form(delta: timedelta, expected: str) -> None:
    assert format_duration(delta) == expected


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(days=1), "1d0s"),
        (timedelta(hours=25), "1d1h0m0s"),
        (timedelta(hours=25, seconds=3), "1d1h0m3s"),
        (timedelta(days=364, hours=2), "364d2h0m0s"),
        (timedelta(days=365), "1y0d0s"),
        (timedelta(days=2 * 365 + 3, minutes=4), "2y3d4m0s"),
    ],
)
def test_long_durations_split_years_and_days(delta: timedelta, expected: str) -> None:
    assert format_duration(delta) == expected


def test_compact_sub_microsecond_and_negative() -> None:
    assert compact(15) == "15ns"
    assert compact(-2_000_000_000) == "-2s"


def test_to_nanoseconds_is_exact() -> None:
    assert to_nanoseconds(timedelta(days=1, microseconds=1)) == 86_400_000_001_000
