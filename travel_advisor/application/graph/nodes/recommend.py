"""Recommend node: request the JSON plan set.

Chat turns send the whole log; map turns send a single generated user
instruction describing the selected location.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from travel_advisor.application.graph.deps import GraphDeps
from travel_advisor.domain.enums import Phase, Role
from travel_advisor.domain.models import Message
from travel_advisor.infrastructure.llm_gateway import Completion
from travel_advisor.infrastructure.logging import get_logger
from travel_advisor.infrastructure.retry import call_with_retry
from travel_advisor.prompting.builder import recommendation_prompt
from travel_advisor.prompting.geo import geo_user_prompt
from travel_advisor.shared.exceptions import AdvisorError


def make_recommend_node(deps: GraphDeps) -> Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]:
    async def recommend_node(state: dict[str, Any]) -> dict[str, Any]:
        logger = get_logger(state.get("trace_id"))
        logger.node_start("recommend")

        geo = state.get("geo")
        system_prompt = recommendation_prompt(
            geo,
            today=deps.clock().date(),
            currency=deps.settings.plan_currency,
        )
        if geo is not None:
            messages = [Message(role=Role.USER, content=geo_user_prompt(geo))]
        else:
            messages = state.get("messages", [])
        options = deps.recommendation_options()

        async def attempt() -> Completion:
            logger.llm_call(
                model=options.model or "",
                max_tokens=options.max_tokens,
                message_count=len(messages) + 1,
                phase="recommending",
                map_mode=geo is not None,
            )
            return await deps.gateway.complete(system_prompt, messages, options)

        try:
            completion = await call_with_retry(attempt, deps.retry_policy, logger=logger, sleep=deps.sleep)
        except AdvisorError as e:
            logger.node_end("recommend", status="error", code=e.code)
            return {"phase": Phase.RECOMMENDING.value, "status": "error", "error": e}

        logger.node_end("recommend", total_tokens=completion.usage.total_tokens)
        return {
            "phase": Phase.RECOMMENDING.value,
            "completion_text": completion.text,
            "usage": completion.usage,
            "model": completion.model,
        }

    return recommend_node
