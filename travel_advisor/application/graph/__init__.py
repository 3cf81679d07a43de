"""Conversation graph entrypoints."""

from travel_advisor.application.graph.deps import GraphDeps
from travel_advisor.application.graph.workflow import build_graph, compile_graph

__all__ = ["GraphDeps", "build_graph", "compile_graph"]
