"""Application request/response contracts."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from travel_advisor.domain.enums import Phase
from travel_advisor.domain.models import RecommendationSet
from travel_advisor.shared.exceptions import AdvisorError


class TurnStatus(str, Enum):
    MESSAGE = "message"
    RECOMMENDATIONS = "recommendations"
    ERROR = "error"


class TurnResult(BaseModel):
    status: TurnStatus
    phase: Optional[Phase] = None
    message: str = ""
    recommendations: Optional[RecommendationSet] = None
    error: dict[str, Any] = Field(default_factory=dict)
    http_status: int = 200
    trace_id: str = ""

    @classmethod
    def from_error(cls, error: AdvisorError, *, trace_id: str = "", phase: Optional[Phase] = None) -> "TurnResult":
        return cls(
            status=TurnStatus.ERROR,
            phase=phase,
            error=error.to_payload(),
            http_status=error.http_status,
            trace_id=trace_id,
        )

    @property
    def ok(self) -> bool:
        return self.status != TurnStatus.ERROR

    def to_payload(self) -> dict[str, Any]:
        """Wire body returned to HTTP callers."""
        if self.status == TurnStatus.MESSAGE:
            return {"message": self.message}
        if self.status == TurnStatus.RECOMMENDATIONS and self.recommendations is not None:
            return {
                "travelPlans": [plan.to_wire() for plan in self.recommendations.plans],
                "summary": self.recommendations.summary,
            }
        return dict(self.error)


__all__ = ["TurnResult", "TurnStatus"]
