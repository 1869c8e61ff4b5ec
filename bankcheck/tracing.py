"""
Verification event tracing.

A Tracer stamps events with the run id and a timestamp and hands them to a
sink. JsonlTraceSink writes one JSON object per line:

    tracer = Tracer(run_id="transfer-100", sink=JsonlTraceSink("trace.jsonl"))
    verifier = RetryVerifier(tracer=tracer)

Tracing must never break a verification run: sink failures are logged and
dropped.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class TraceSink(Protocol):
    def write(self, event: dict[str, Any]) -> None: ...

    def close(self) -> None: ...


class NullSink:
    def write(self, event: dict[str, Any]) -> None:
        return None

    def close(self) -> None:
        return None


class JsonlTraceSink:
    """Append trace events to a JSONL file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._fh = open(self.path, "a", encoding="utf-8")

    def write(self, event: dict[str, Any]) -> None:
        line = json.dumps(event, default=str)
        with self._lock:
            self._fh.write(line + "\n")
            self._fh.flush()

    def close(self) -> None:
        with self._lock:
            if not self._fh.closed:
                self._fh.close()

    def __enter__(self) -> JsonlTraceSink:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Tracer:
    def __init__(self, run_id: str, sink: TraceSink | None = None) -> None:
        self.run_id = run_id
        self.sink: TraceSink = sink or NullSink()
        self._seq = 0

    def emit(self, event_type: str, data: dict[str, Any], step_id: str | None = None) -> None:
        self._seq += 1
        event = {
            "v": 1,
            "type": event_type,
            "ts": time.time(),
            "seq": self._seq,
            "run_id": self.run_id,
            "step_id": step_id,
            "data": data,
        }
        try:
            self.sink.write(event)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Dropping trace event %s: %s", event_type, e)

    def close(self) -> None:
        self.sink.close()
