"""Structured logging: one JSON object per line, secrets scrubbed."""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional, TextIO

from travel_advisor.security.key_manager import get_key_manager


def new_trace_id() -> str:
    return uuid.uuid4().hex[:8]


class StructuredLogger:
    """JSON-line logger bound to one conversation turn."""

    def __init__(self, trace_id: Optional[str] = None, output: Optional[TextIO] = None):
        self.trace_id = trace_id or new_trace_id()
        self._output = output or sys.stderr
        self._timers: dict[str, float] = {}

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        line = json.dumps(data, ensure_ascii=False, default=str)
        try:
            self._output.write(get_key_manager().scrub_text(line) + "\n")
            self._output.flush()
        except (OSError, ValueError):
            # closed or broken stream; logging must never fail a turn
            return

    def node_start(self, node_name: str, **extra: Any) -> None:
        self._timers[node_name] = time.perf_counter()
        self._emit({"event": "node_start", "node": node_name, **extra})

    def node_end(self, node_name: str, **extra: Any) -> None:
        start = self._timers.pop(node_name, time.perf_counter())
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        self._emit({"event": "node_end", "node": node_name, "duration_ms": duration_ms, **extra})

    def llm_call(self, *, model: str, max_tokens: int, message_count: int, **extra: Any) -> None:
        self._emit({
            "event": "llm_call",
            "model": model,
            "max_tokens": max_tokens,
            "message_count": message_count,
            **extra,
        })

    def retry(self, attempt: int, delay: float, error: str, **extra: Any) -> None:
        self._emit({"event": "retry", "attempt": attempt, "delay_s": round(delay, 3), "error": error, **extra})

    def error(self, node_name: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "node": node_name, "error": error, **extra})

    def warning(self, node_name: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "node": node_name, "message": message, **extra})

    def summary(self, **extra: Any) -> None:
        self._emit({"event": "summary", **extra})


def get_logger(trace_id: Optional[str] = None, output: Optional[TextIO] = None) -> StructuredLogger:
    """Fresh logger per turn; concurrent turns never share timers."""
    return StructuredLogger(trace_id=trace_id, output=output)
