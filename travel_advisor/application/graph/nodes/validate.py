"""Validate node: turn the raw completion into a RecommendationSet.

Broken output is reported as a retryable failure; it is never passed back
to the caller as a freeform message.
"""

from __future__ import annotations

from typing import Any, Callable

from travel_advisor.application.graph.deps import GraphDeps
from travel_advisor.domain.exceptions import ParseError, SchemaError
from travel_advisor.infrastructure.logging import get_logger


def make_validate_node(deps: GraphDeps) -> Callable[[dict[str, Any]], dict[str, Any]]:
    def validate_node(state: dict[str, Any]) -> dict[str, Any]:
        logger = get_logger(state.get("trace_id"))
        logger.node_start("validate")

        try:
            result = deps.validator.validate(
                state.get("completion_text", ""),
                now=deps.clock(),
                logger=logger,
            )
        except (ParseError, SchemaError) as e:
            logger.node_end("validate", status="error", code=e.code, field=getattr(e, "field", None))
            return {"status": "error", "error": e}

        metadata = result.metadata
        if not metadata.model:
            metadata.model = state.get("model") or None
        if state.get("usage") is not None:
            metadata.token_usage = state["usage"]

        logger.node_end("validate", plans=len(result.plans))
        return {"recommendations": result, "status": "recommended"}

    return validate_node
