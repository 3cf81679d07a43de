"""Factory for the initial turn state."""

from __future__ import annotations

from typing import Optional, Sequence

from travel_advisor.application.state import TurnState
from travel_advisor.domain.models import GeoContext, Message


def make_initial_state(
    messages: Sequence[Message],
    *,
    trace_id: str,
    geo: Optional[GeoContext] = None,
) -> TurnState:
    return {
        "trace_id": trace_id,
        "messages": list(messages),
        "geo": geo,
        "phase": "",
        "missing": [],
        "reply": "",
        "completion_text": "",
        "model": "",
        "usage": None,
        "recommendations": None,
        "status": "init",
        "error": None,
        "error_response": {},
    }


__all__ = ["make_initial_state"]
