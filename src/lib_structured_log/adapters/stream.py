"""JSON-lines handler writing one object per entry to a text stream."""

from __future__ import annotations

import json
import sys
import threading
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from ..application.entry import Entry


def encode_entry(entry: Entry) -> str:
    """Encode *entry* as a single JSON line (without the trailing newline).

    Fields are emitted in ``names()`` order; values JSON cannot represent are
    rendered with ``str``.
    """

    obj: dict[str, Any] = {
        "timestamp": entry.timestamp.isoformat() if entry.timestamp is not None else None,
        "level": str(entry.level),
        "message": entry.message,
        "fields": {name: entry.fields[name] for name in entry.fields.names()},
    }
    return json.dumps(obj, default=str, ensure_ascii=False)


class JSONLinesHandler:
    """Write entries as newline-delimited JSON.

    Parameters
    ----------
    stream:
        Target text stream. ``None`` resolves ``sys.stderr`` on every write so
        redirections made after construction are honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def log(self, entry: Entry) -> None:
        line = encode_entry(entry)
        with self._lock:
            self.stream.write(line + "\n")

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()
