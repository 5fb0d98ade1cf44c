"""Compact rendering of elapsed time for trace entries.

Durations below one day use the compact ``h``/``m``/``s`` form
(``"1h30m0s"``, ``"1.5s"``, ``"250ms"``). Longer spans are prefixed with
``<years>y`` (365-day years, only when non-zero) and ``<days>d`` before the
compact remainder, e.g. ``"1d1h0m0s"``.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Final

NANOSECOND: Final[int] = 1
MICROSECOND: Final[int] = 1_000 * NANOSECOND
MILLISECOND: Final[int] = 1_000 * MICROSECOND
SECOND: Final[int] = 1_000 * MILLISECOND
MINUTE: Final[int] = 60 * SECOND
HOUR: Final[int] = 60 * MINUTE
DAY: Final[int] = 24 * HOUR
YEAR: Final[int] = 365 * DAY


def to_nanoseconds(delta: timedelta) -> int:
    """Convert *delta* to integer nanoseconds without float rounding."""

    return ((delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds) * MICROSECOND


def format_duration(delta: timedelta) -> str:
    """Render *delta* in the trace duration format.

    Examples
    --------
    >>> format_duration(timedelta(hours=1, minutes=30))
    '1h30m0s'
    >>> format_duration(timedelta(hours=25))
    '1d1h0m0s'
    >>> format_duration(timedelta(days=366, seconds=5))
    '1y1d5s'
    >>> format_duration(timedelta(milliseconds=1500))
    '1.5s'
    """

    total = to_nanoseconds(delta)
    if total < DAY:
        return compact(total)

    parts: list[str] = []
    if total >= YEAR:
        years, total = divmod(total, YEAR)
        parts.append(f"{years}y")
    days, total = divmod(total, DAY)
    parts.append(f"{days}d{compact(total)}")
    return "".join(parts)


def compact(nanoseconds: int) -> str:
    """Render *nanoseconds* as the compact duration string.

    Examples
    --------
    >>> compact(0)
    '0s'
    >>> compact(250 * MILLISECOND)
    '250ms'
    >>> compact(1_500)
    '1.5µs'
    >>> compact(-90 * SECOND)
    '-1m30s'
    """

    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    value = abs(nanoseconds)

    if value < SECOND:
        if value < MICROSECOND:
            return f"{sign}{value}ns"
        if value < MILLISECOND:
            return f"{sign}{_fraction(value, MICROSECOND)}µs"
        return f"{sign}{_fraction(value, MILLISECOND)}ms"

    text = f"{_fraction(value % MINUTE, SECOND)}s"
    minutes = value // MINUTE
    if minutes:
        hours, minutes = divmod(minutes, 60)
        text = f"{minutes}m{text}"
        if hours:
            text = f"{hours}h{text}"
    return f"{sign}{text}"


def _fraction(value: int, unit: int) -> str:
    """Return ``value / unit`` as a decimal string without trailing zeros."""

    whole, remainder = divmod(value, unit)
    if not remainder:
        return str(whole)
    width = len(str(unit)) - 1
    digits = str(remainder).rjust(width, "0").rstrip("0")
    return f"{whole}.{digits}"
