"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from travel_advisor.application.conversation import ConversationOrchestrator
from travel_advisor.config.settings import AdvisorSettings, load_settings
from travel_advisor.infrastructure.llm_factory import build_gateway
from travel_advisor.infrastructure.llm_gateway import OpenRouterGateway


@dataclass
class AppContext:
    settings: AdvisorSettings
    gateway: OpenRouterGateway
    orchestrator: ConversationOrchestrator = field(init=False)

    def __post_init__(self) -> None:
        self.orchestrator = ConversationOrchestrator(self.gateway, settings=self.settings)

    async def aclose(self) -> None:
        await self.gateway.aclose()


def make_app_context(settings: Optional[AdvisorSettings] = None) -> AppContext:
    settings = settings or load_settings()
    return AppContext(settings=settings, gateway=build_gateway(settings))
