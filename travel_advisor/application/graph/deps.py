"""Collaborators shared by every node of the conversation graph."""

from __future__ import annotations

import asyncio
import datetime as dt
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from travel_advisor.config.settings import AdvisorSettings
from travel_advisor.infrastructure.llm_gateway import CompletionOptions, LLMGateway
from travel_advisor.infrastructure.retry import RetryPolicy
from travel_advisor.parsing.completeness import CompletenessAnalyzer
from travel_advisor.validators.recommendation_validator import RecommendationValidator


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


@dataclass(frozen=True)
class GraphDeps:
    gateway: LLMGateway
    analyzer: CompletenessAnalyzer
    validator: RecommendationValidator
    settings: AdvisorSettings
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    clock: Callable[[], dt.datetime] = utc_now
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def gathering_options(self) -> CompletionOptions:
        return CompletionOptions(
            model=self.settings.llm_model,
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.gathering_max_tokens,
            want_json=False,
        )

    def recommendation_options(self) -> CompletionOptions:
        return CompletionOptions(
            model=self.settings.llm_model,
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.recommendation_max_tokens,
            want_json=True,
        )


__all__ = ["GraphDeps", "utc_now"]
