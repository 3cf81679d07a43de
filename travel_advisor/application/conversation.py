"""Single entrypoint for conversation turns.

Every turn is stateless: the caller sends the whole log, the phase is
recomputed from it, and nothing is kept after the result is returned.
"""

from __future__ import annotations

import asyncio
import datetime as dt
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Optional

from pydantic import ValidationError

from travel_advisor.application.contracts import TurnResult, TurnStatus
from travel_advisor.application.graph.deps import GraphDeps, utc_now
from travel_advisor.application.graph.workflow import compile_graph
from travel_advisor.application.state import TurnState
from travel_advisor.application.state_factory import make_initial_state
from travel_advisor.config.settings import AdvisorSettings, load_settings
from travel_advisor.domain.enums import Phase
from travel_advisor.domain.exceptions import RequestValidationError
from travel_advisor.domain.message_log import MessageLog
from travel_advisor.domain.models import GeoContext
from travel_advisor.infrastructure.llm_gateway import LLMGateway
from travel_advisor.infrastructure.logging import get_logger, new_trace_id
from travel_advisor.infrastructure.retry import RetryPolicy
from travel_advisor.parsing.completeness import CompletenessAnalyzer, KeywordCompletenessAnalyzer
from travel_advisor.shared.exceptions import AdvisorError, TurnTimeoutError
from travel_advisor.validators.recommendation_validator import RecommendationValidator


def parse_chat_request(payload: Any) -> MessageLog:
    """Validate ``{messages: [...]}``; raises before any LLM call."""
    if not isinstance(payload, Mapping) or not isinstance(payload.get("messages"), list):
        raise RequestValidationError(
            "request body has no messages array",
            user_message="Messages array is required.",
        )
    return MessageLog(payload["messages"])


def parse_geo_request(payload: Any) -> GeoContext:
    if not isinstance(payload, Mapping):
        raise RequestValidationError("request body is not an object")
    try:
        return GeoContext.model_validate(dict(payload))
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        if loc.startswith("coordinates"):
            raise RequestValidationError(
                f"invalid coordinates: {first.get('msg', '')}",
                code="INVALID_COORDINATES",
                user_message="Invalid coordinates provided.",
            ) from None
        raise RequestValidationError(f"invalid {loc}: {first.get('msg', '')}") from None


class ConversationOrchestrator:
    """Runs one turn through the compiled conversation graph."""

    def __init__(
        self,
        gateway: LLMGateway,
        analyzer: Optional[CompletenessAnalyzer] = None,
        validator: Optional[RecommendationValidator] = None,
        settings: Optional[AdvisorSettings] = None,
        *,
        clock: Callable[[], dt.datetime] = utc_now,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.settings = settings or load_settings()
        deps_kwargs: dict[str, Any] = {}
        if sleep is not None:
            deps_kwargs["sleep"] = sleep
        self._deps = GraphDeps(
            gateway=gateway,
            analyzer=analyzer or KeywordCompletenessAnalyzer(),
            validator=validator or RecommendationValidator(),
            settings=self.settings,
            retry_policy=RetryPolicy(
                max_attempts=self.settings.llm_max_attempts,
                base_delay=self.settings.llm_retry_base_delay,
            ),
            clock=clock,
            **deps_kwargs,
        )
        self._graph = compile_graph(self._deps)

    @property
    def gateway(self) -> LLMGateway:
        return self._deps.gateway

    async def handle_turn(self, payload: Any) -> TurnResult:
        """Chat turn: ``{messages}`` -> question or recommendations."""
        trace_id = new_trace_id()
        try:
            log = parse_chat_request(payload)
        except RequestValidationError as e:
            return self._reject(e, trace_id)
        state = make_initial_state(log.snapshot(), trace_id=trace_id)
        return await self._run(state)

    async def handle_geo_turn(self, payload: Any) -> TurnResult:
        """Map turn: selected location -> recommendations (never a question)."""
        trace_id = new_trace_id()
        try:
            geo = parse_geo_request(payload)
        except RequestValidationError as e:
            return self._reject(e, trace_id)
        state = make_initial_state([], trace_id=trace_id, geo=geo)
        return await self._run(state)

    def _reject(self, error: RequestValidationError, trace_id: str) -> TurnResult:
        get_logger(trace_id).warning("request", str(error), code=error.code)
        return TurnResult.from_error(error, trace_id=trace_id)

    async def _run(self, state: TurnState) -> TurnResult:
        trace_id = state["trace_id"]
        logger = get_logger(trace_id)
        timeout = self.settings.turn_timeout_seconds
        try:
            final = await asyncio.wait_for(self._graph.ainvoke(state), timeout=timeout)
        except asyncio.TimeoutError:
            error = TurnTimeoutError(timeout)
            logger.error("orchestrator", str(error), code=error.code)
            return TurnResult.from_error(error, trace_id=trace_id)
        except AdvisorError as e:
            logger.error("orchestrator", str(e), code=e.code)
            return TurnResult.from_error(e, trace_id=trace_id)
        except Exception as e:
            logger.error("orchestrator", f"{type(e).__name__}: {e}", code="INTERNAL_ERROR")
            return TurnResult.from_error(AdvisorError(str(e)), trace_id=trace_id)

        result = self._to_result(final)
        logger.summary(
            status=result.status.value,
            phase=result.phase.value if result.phase else None,
            http_status=result.http_status,
        )
        return result

    @staticmethod
    def _to_result(final: dict[str, Any]) -> TurnResult:
        trace_id = final.get("trace_id", "")
        phase = Phase(final["phase"]) if final.get("phase") else None
        error = final.get("error")
        if final.get("status") == "error" and error is not None:
            return TurnResult.from_error(error, trace_id=trace_id, phase=phase)
        if final.get("recommendations") is not None:
            return TurnResult(
                status=TurnStatus.RECOMMENDATIONS,
                phase=phase,
                recommendations=final["recommendations"],
                trace_id=trace_id,
            )
        return TurnResult(
            status=TurnStatus.MESSAGE,
            phase=phase,
            message=final.get("reply", ""),
            trace_id=trace_id,
        )


__all__ = ["ConversationOrchestrator", "parse_chat_request", "parse_geo_request"]
