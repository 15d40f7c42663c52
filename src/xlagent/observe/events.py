"""Session lifecycle events and elapsed-time measurement."""

from __future__ import annotations

import itertools
import sys
import time
from datetime import datetime, timezone
from typing import Any, TextIO

import orjson


class Timer:
    """Measures milliseconds for a block.

    ``elapsed_ms`` can be read inside the block (time so far) and after it
    (final duration), so failure paths can report how long they waited.
    """

    def __init__(self) -> None:
        self._start_ns: int | None = None
        self._stop_ns: int | None = None

    def __enter__(self) -> "Timer":
        self._start_ns = time.perf_counter_ns()
        self._stop_ns = None
        return self

    def __exit__(self, *args: Any) -> None:
        self._stop_ns = time.perf_counter_ns()

    @property
    def elapsed_ms(self) -> int:
        if self._start_ns is None:
            return 0
        end = self._stop_ns if self._stop_ns is not None else time.perf_counter_ns()
        return (end - self._start_ns) // 1_000_000


class EventEmitter:
    """Writes one NDJSON line per session event to stderr.

    Every line carries ``seq``, counting from 1 per emitter, so a trace can be
    put back in order after it is interleaved with other stderr output.
    """

    def __init__(self, enabled: bool = False, stream: TextIO | None = None) -> None:
        self.enabled = enabled
        self._stream = stream
        self._seq = itertools.count(1)

    def emit(self, event: str, data: dict[str, Any] | None = None) -> None:
        if not self.enabled:
            return
        line = orjson.dumps(
            {
                "seq": next(self._seq),
                "event": event,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "data": data or {},
            },
            default=str,
        )
        stream = self._stream or sys.stderr
        stream.write(line.decode() + "\n")
        stream.flush()
