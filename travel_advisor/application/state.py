"""Graph state for one conversation turn."""

from __future__ import annotations

from typing import Any, Optional, TypedDict

from travel_advisor.domain.models import GeoContext, Message, RecommendationSet, TokenUsage
from travel_advisor.shared.exceptions import AdvisorError


class TurnState(TypedDict, total=False):
    """Lives for exactly one ``ainvoke``; nothing here survives the turn."""

    trace_id: str
    messages: list[Message]
    geo: Optional[GeoContext]
    phase: str
    missing: list[str]
    reply: str
    completion_text: str
    model: str
    usage: Optional[TokenUsage]
    recommendations: Optional[RecommendationSet]
    status: str
    error: Optional[AdvisorError]
    error_response: dict[str, Any]


__all__ = ["TurnState"]
