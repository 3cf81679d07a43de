from travel_advisor.application.graph.nodes.analyze import make_analyze_node
from travel_advisor.application.graph.nodes.fail_gracefully import fail_gracefully_node
from travel_advisor.application.graph.nodes.gather import make_gather_node
from travel_advisor.application.graph.nodes.recommend import make_recommend_node
from travel_advisor.application.graph.nodes.validate import make_validate_node

__all__ = [
    "fail_gracefully_node",
    "make_analyze_node",
    "make_gather_node",
    "make_recommend_node",
    "make_validate_node",
]
