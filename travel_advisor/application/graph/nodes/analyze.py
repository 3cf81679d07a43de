"""Analyze node: decide the phase from the whole message log."""

from __future__ import annotations

from typing import Any, Callable

from travel_advisor.application.graph.deps import GraphDeps
from travel_advisor.domain.enums import Phase
from travel_advisor.infrastructure.logging import get_logger


def make_analyze_node(deps: GraphDeps) -> Callable[[dict[str, Any]], dict[str, Any]]:
    def analyze_node(state: dict[str, Any]) -> dict[str, Any]:
        logger = get_logger(state.get("trace_id"))
        logger.node_start("analyze")

        result = deps.analyzer.analyze(state.get("messages", []))
        phase = Phase.RECOMMENDING if result.ready else Phase.GATHERING
        missing = [c.value for c in result.missing_ordered]

        logger.node_end("analyze", phase=phase.value, missing=missing)
        return {"phase": phase.value, "missing": missing}

    return analyze_node
