"""Runtime settings resolved from environment variables.

``.env`` is loaded by the entrypoints (CLI / API) before ``load_settings``
is called, so this module only reads ``os.environ``.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "meta-llama/llama-3.2-3b-instruct:free"

_TRUTHY = {"1", "true", "yes", "on"}


def _is_enabled(value: str | None) -> bool:
    return bool(value and value.strip().lower() in _TRUTHY)


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    return raw.strip() if raw and raw.strip() else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    return int(_env_float(name, default))


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in _env_str(name, default).split(",") if item.strip()]


class AdvisorSettings(BaseModel):
    llm_base_url: str = Field(default=OPENROUTER_API_URL)
    llm_model: str = Field(default=DEFAULT_MODEL)
    llm_timeout_seconds: float = Field(default=30.0, gt=0)
    llm_temperature: float = Field(default=0.7, ge=0, le=2)
    gathering_max_tokens: int = Field(default=300, gt=0)
    recommendation_max_tokens: int = Field(default=2000, gt=0)
    llm_max_attempts: int = Field(default=3, ge=1)
    llm_retry_base_delay: float = Field(default=0.5, ge=0)
    turn_timeout_seconds: float = Field(default=60.0, gt=0)
    app_url: str = Field(default="http://localhost:3000")
    app_title: str = Field(default="Voice Travel Advisor")
    plan_currency: str = Field(default="USD")
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    enable_docs: bool = Field(default=False)


def load_settings() -> AdvisorSettings:
    return AdvisorSettings(
        llm_base_url=_env_str("LLM_BASE_URL", OPENROUTER_API_URL),
        llm_model=_env_str("LLM_MODEL", _env_str("OPENROUTER_MODEL", DEFAULT_MODEL)),
        llm_timeout_seconds=_env_float("LLM_TIMEOUT_SECONDS", 30.0),
        llm_temperature=_env_float("LLM_TEMPERATURE", 0.7),
        gathering_max_tokens=_env_int("GATHERING_MAX_TOKENS", 300),
        recommendation_max_tokens=_env_int("RECOMMENDATION_MAX_TOKENS", 2000),
        llm_max_attempts=_env_int("LLM_MAX_ATTEMPTS", 3),
        llm_retry_base_delay=_env_float("LLM_RETRY_BASE_DELAY", 0.5),
        turn_timeout_seconds=_env_float("TURN_TIMEOUT_SECONDS", 60.0),
        app_url=_env_str("APP_URL", "http://localhost:3000"),
        app_title=_env_str("APP_TITLE", "Voice Travel Advisor"),
        plan_currency=_env_str("PLAN_CURRENCY", "USD").upper(),
        cors_origins=_env_list("CORS_ORIGINS", "http://localhost:3000"),
        enable_docs=_is_enabled(os.getenv("ENABLE_DOCS")),
    )


__all__ = ["AdvisorSettings", "DEFAULT_MODEL", "OPENROUTER_API_URL", "load_settings"]
