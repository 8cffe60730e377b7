from __future__ import annotations

import json
import os
import threading
import time
from typing import Any, Dict, Iterator, List, Optional, TextIO


class TelemetryLogger:
    """Append-only JSONL log of rover events.

    Each record gets a monotonically increasing ``seq`` and a wall-clock
    ``time`` before being written as one JSON object per line. Safe to share
    between threads; usable as a context manager.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._seq = 0
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record; ignored once the logger is closed."""
        with self._lock:
            if self._fp is None:
                return
            stamped = {"seq": self._seq, "time": time.time(), **record}
            self._fp.write(json.dumps(stamped, separators=(",", ":")) + "\n")
            self._fp.flush()
            self._seq += 1

    def close(self) -> None:
        with self._lock:
            if self._fp is not None:
                self._fp.close()
                self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def iter_records(path: str) -> Iterator[Dict[str, Any]]:
    """Yield records from a JSONL log, skipping blank or truncated lines."""
    if not os.path.exists(path):
        return
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def read_records(path: str) -> List[Dict[str, Any]]:
    return list(iter_records(path))
