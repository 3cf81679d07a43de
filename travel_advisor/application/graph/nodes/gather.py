"""Gather node: ask the model for the next follow-up question."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from travel_advisor.application.graph.deps import GraphDeps
from travel_advisor.domain.enums import InfoCategory
from travel_advisor.infrastructure.llm_gateway import Completion
from travel_advisor.infrastructure.logging import get_logger
from travel_advisor.infrastructure.retry import call_with_retry
from travel_advisor.prompting.builder import gathering_prompt
from travel_advisor.shared.exceptions import AdvisorError, EmptyCompletionError


def make_gather_node(deps: GraphDeps) -> Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]:
    async def gather_node(state: dict[str, Any]) -> dict[str, Any]:
        logger = get_logger(state.get("trace_id"))
        logger.node_start("gather")

        missing = [InfoCategory(m) for m in state.get("missing", [])]
        system_prompt = gathering_prompt(missing)
        messages = state.get("messages", [])
        options = deps.gathering_options()

        async def attempt() -> Completion:
            logger.llm_call(
                model=options.model or "",
                max_tokens=options.max_tokens,
                message_count=len(messages) + 1,
                phase="gathering",
            )
            completion = await deps.gateway.complete(system_prompt, messages, options)
            if not completion.text.strip():
                raise EmptyCompletionError("upstream returned an empty reply")
            return completion

        try:
            completion = await call_with_retry(attempt, deps.retry_policy, logger=logger, sleep=deps.sleep)
        except AdvisorError as e:
            logger.node_end("gather", status="error", code=e.code)
            return {"status": "error", "error": e}

        logger.node_end("gather", total_tokens=completion.usage.total_tokens)
        return {
            "reply": completion.text.strip(),
            "usage": completion.usage,
            "model": completion.model,
            "status": "gathered",
        }

    return gather_node
