"""LangGraph wiring for one conversation turn.

    chat turn:  analyze -> gather                      -> END
                analyze -> recommend -> validate       -> END
    map turn:              recommend -> validate       -> END
    any failure                      -> fail_gracefully -> END
"""

from __future__ import annotations

from typing import Any

from langgraph.graph import END, START, StateGraph

from travel_advisor.application.graph.deps import GraphDeps
from travel_advisor.application.graph.nodes import (
    fail_gracefully_node,
    make_analyze_node,
    make_gather_node,
    make_recommend_node,
    make_validate_node,
)
from travel_advisor.application.state import TurnState
from travel_advisor.domain.enums import Phase

# ── Routing ───────────────────────────────────────────


def route_entry(state: dict[str, Any]) -> str:
    return "recommend" if state.get("geo") is not None else "analyze"


def route_after_analyze(state: dict[str, Any]) -> str:
    if state.get("phase") == Phase.RECOMMENDING.value:
        return "recommend"
    return "gather"


def route_after_gather(state: dict[str, Any]) -> str:
    return "fail_gracefully" if state.get("status") == "error" else END


def route_after_recommend(state: dict[str, Any]) -> str:
    return "fail_gracefully" if state.get("status") == "error" else "validate"


def route_after_validate(state: dict[str, Any]) -> str:
    return "fail_gracefully" if state.get("status") == "error" else END


# ── Build ─────────────────────────────────────────────


def build_graph(deps: GraphDeps) -> StateGraph:
    graph = StateGraph(TurnState)

    graph.add_node("analyze", make_analyze_node(deps))
    graph.add_node("gather", make_gather_node(deps))
    graph.add_node("recommend", make_recommend_node(deps))
    graph.add_node("validate", make_validate_node(deps))
    graph.add_node("fail_gracefully", fail_gracefully_node)

    graph.add_conditional_edges(START, route_entry, {
        "analyze": "analyze",
        "recommend": "recommend",
    })
    graph.add_conditional_edges("analyze", route_after_analyze, {
        "gather": "gather",
        "recommend": "recommend",
    })
    graph.add_conditional_edges("gather", route_after_gather, {
        "fail_gracefully": "fail_gracefully",
        END: END,
    })
    graph.add_conditional_edges("recommend", route_after_recommend, {
        "validate": "validate",
        "fail_gracefully": "fail_gracefully",
    })
    graph.add_conditional_edges("validate", route_after_validate, {
        "fail_gracefully": "fail_gracefully",
        END: END,
    })
    graph.add_edge("fail_gracefully", END)

    return graph


def compile_graph(deps: GraphDeps):
    return build_graph(deps).compile()
