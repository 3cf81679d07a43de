"""FailGracefully node: log the failure and build the caller-facing error body."""

from __future__ import annotations

from typing import Any

from travel_advisor.infrastructure.logging import get_logger
from travel_advisor.shared.exceptions import AdvisorError


def fail_gracefully_node(state: dict[str, Any]) -> dict[str, Any]:
    error = state.get("error") or AdvisorError("graph ended in error without an exception")
    logger = get_logger(state.get("trace_id"))
    logger.error(
        "fail_gracefully",
        str(error),
        code=error.code,
        error_type=type(error).__name__,
        retryable=error.retryable,
    )
    return {
        "status": "error",
        "error": error,
        "error_response": error.to_payload(),
    }
