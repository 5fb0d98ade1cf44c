"""Deliver a finalised entry to its handlers.

Each handler receives its own copy of the entry with a timestamp taken
immediately before that handler runs and a freshly flattened ``fields``
mapping. Handler failures are wrapped in :class:`HandlerError` and passed to
the fallback sink; they never reach the code that logged the entry.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Sequence

from ..domain.errors import HandlerError, LogError
from .ports import Handler

if TYPE_CHECKING:
    from .entry import Entry


def dispatch(
    entry: Entry,
    handlers: Sequence[Handler],
    *,
    clock: Callable[[], datetime],
    on_error: Callable[[LogError], None],
) -> int:
    """Invoke every handler in *handlers* with *entry*, in order.

    Returns
    -------
    int
        Number of handlers that accepted the entry without raising.

    Examples
    --------
    >>> from datetime import timezone
    >>> from lib_structured_log.application.entry import Entry
    >>> from lib_structured_log.testing import CaptureHandler
    >>> now = lambda: datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> dispatch(Entry(message="dropped"), (), clock=now, on_error=print)
    0
    >>> capture = CaptureHandler()
    >>> dispatch(Entry(message="kept").with_field("k", 1), (capture,), clock=now, on_error=print)
    1
    >>> capture.entries[0].fields
    {'k': 1}
    """

    if not handlers:
        return 0

    delivered = 0
    for handler in handlers:
        resolved = replace(entry, timestamp=clock(), fields=entry.merged_fields())
        try:
            handler.log(resolved)
        except Exception as exc:  # noqa: BLE001 - isolate handler failures from callers
            on_error(HandlerError(handler, entry.level, exc))
            continue
        delivered += 1
    return delivered
