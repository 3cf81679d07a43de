"""Build the LLM gateway from settings.

Key lookup order: OPENROUTER_API_KEY, OPENAI_API_KEY, LLM_API_KEY. A missing
key is not an error here; the gateway raises ``KeyMissingError`` on the
first call so the API can still start and report CONFIG_ERROR per request.
"""

from __future__ import annotations

from typing import Optional

import httpx

from travel_advisor.config.settings import AdvisorSettings, load_settings
from travel_advisor.infrastructure.llm_gateway import OpenRouterGateway
from travel_advisor.security.key_manager import get_key_manager


def is_llm_available() -> bool:
    return get_key_manager().get_llm_key() is not None


def build_gateway(
    settings: Optional[AdvisorSettings] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> OpenRouterGateway:
    settings = settings or load_settings()
    return OpenRouterGateway(
        base_url=settings.llm_base_url,
        default_model=settings.llm_model,
        timeout=settings.llm_timeout_seconds,
        app_url=settings.app_url,
        app_title=settings.app_title,
        client=client,
        key_manager=get_key_manager(),
    )
