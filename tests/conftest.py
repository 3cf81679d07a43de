"""pytest fixtures: environment isolation and a scripted LLM gateway."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Sequence

import pytest

from travel_advisor.config.settings import AdvisorSettings
from travel_advisor.domain.models import Message, TokenUsage
from travel_advisor.infrastructure.llm_gateway import Completion, CompletionOptions
from travel_advisor.security.key_manager import LLM_KEY_NAMES, get_key_manager

_SETTINGS_ENV = (
    "LLM_MODEL", "LLM_BASE_URL", "OPENROUTER_MODEL", "LLM_TIMEOUT_SECONDS", "LLM_TEMPERATURE",
    "GATHERING_MAX_TOKENS", "RECOMMENDATION_MAX_TOKENS", "LLM_MAX_ATTEMPTS", "LLM_RETRY_BASE_DELAY",
    "TURN_TIMEOUT_SECONDS", "PLAN_CURRENCY", "CORS_ORIGINS", "ENABLE_DOCS",
)


@pytest.fixture(autouse=True)
def no_real_apis(monkeypatch):
    """Tests never see real API keys or a developer's .env overrides."""
    for name in LLM_KEY_NAMES:
        monkeypatch.delenv(name, raising=False)
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_key_manager().reload()
    yield
    get_key_manager().reload()


class FakeGateway:
    """Scripted ``LLMGateway``: each call consumes the next response.

    The last scripted response repeats once the script runs out. Strings
    become completions; exceptions are raised.
    """

    def __init__(self, *responses: Any):
        assert responses, "script at least one response"
        self._responses = list(responses)
        self.calls: list[SimpleNamespace] = []

    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[Message],
        options: CompletionOptions,
    ) -> Completion:
        self.calls.append(SimpleNamespace(system_prompt=system_prompt, messages=list(messages), options=options))
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, BaseException):
            raise item
        return Completion(
            text=item,
            usage=TokenUsage(prompt_tokens=30, completion_tokens=12, total_tokens=42),
            model="fake/model",
        )


async def _no_sleep(_delay: float) -> None:
    return None


@pytest.fixture
def fake_gateway():
    return FakeGateway


@pytest.fixture
def no_sleep():
    return _no_sleep


@pytest.fixture
def settings():
    return AdvisorSettings(llm_retry_base_delay=0.0, llm_model="test/model")


def make_plan(i: int = 1, **overrides: Any) -> dict[str, Any]:
    plan = {
        "id": f"plan-{i}",
        "destination": f"Spot {i}, Vancouver",
        "country": "Canada",
        "duration": {"startDate": "2026-07-01", "endDate": "2026-07-01", "nights": 0, "hours": 4},
        "budget": {
            "estimated": 120,
            "currency": "USD",
            "breakdown": {"admission": 65, "food": 25, "transportation": 30},
        },
        "highlights": ["Panoramic city views", "Alpine scenery"],
        "activities": ["Ride the gondola", "Hike the trails"],
    }
    plan.update(overrides)
    return plan


@pytest.fixture
def plan_factory():
    return make_plan
