"""Chat-completion gateway for OpenRouter-compatible endpoints.

One ``complete`` call is exactly one HTTP request. Failures are classified
into the ``GatewayError`` family so callers can decide whether to retry;
retries themselves live in ``infrastructure.retry``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable

import httpx

from travel_advisor.config.settings import DEFAULT_MODEL, OPENROUTER_API_URL
from travel_advisor.domain.enums import Role
from travel_advisor.domain.models import Message, TokenUsage
from travel_advisor.security.key_manager import KeyManager, get_key_manager
from travel_advisor.shared.exceptions import (
    AuthError,
    GatewayError,
    KeyMissingError,
    NetworkError,
    RateLimitError,
    RequestError,
    UpstreamError,
)


@dataclass(frozen=True)
class CompletionOptions:
    model: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 1500
    want_json: bool = False


@dataclass(frozen=True)
class Completion:
    text: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    model: str = ""


@runtime_checkable
class LLMGateway(Protocol):
    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[Message],
        options: CompletionOptions,
    ) -> Completion: ...


def build_payload(
    system_prompt: str,
    messages: Sequence[Message],
    options: CompletionOptions,
    default_model: str,
) -> dict[str, Any]:
    """Request body; local fields such as ``timestamp`` never leave the process."""
    wire = [{"role": Role.SYSTEM.value, "content": system_prompt}]
    wire += [m.to_wire() for m in messages]
    payload: dict[str, Any] = {
        "model": options.model or default_model,
        "messages": wire,
        "temperature": options.temperature,
        "max_tokens": options.max_tokens,
    }
    if options.want_json:
        payload["response_format"] = {"type": "json_object"}
    return payload


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or "unknown error"
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if data.get("message"):
            return str(data["message"])
    return response.reason_phrase or "unknown error"


def _retry_after(response: httpx.Response) -> Optional[float]:
    raw = response.headers.get("retry-after")
    if not raw:
        return None
    try:
        return max(0.0, float(raw))
    except ValueError:
        return None


def classify_status(response: httpx.Response, scrub: Callable[[str], str]) -> GatewayError:
    status = response.status_code
    detail = scrub(_error_detail(response))
    if status == 401:
        return AuthError(f"upstream rejected credentials (401): {detail}")
    if status == 429:
        return RateLimitError(f"upstream rate limit (429): {detail}", retry_after=_retry_after(response))
    if status >= 500:
        return UpstreamError(f"upstream service error ({status}): {detail}", status_code=status)
    return RequestError(f"upstream rejected request ({status}): {detail}", status_code=status)


def parse_completion(data: Any, default_model: str) -> Completion:
    if not isinstance(data, dict):
        raise UpstreamError("upstream returned a non-object body")
    choices = data.get("choices") or []
    if not isinstance(choices, list):
        raise UpstreamError("upstream returned malformed choices")
    text = ""
    if choices and isinstance(choices[0], dict):
        message = choices[0].get("message") or {}
        if not isinstance(message, dict):
            raise UpstreamError("upstream returned a malformed message")
        text = message.get("content") or ""
    raw_usage = data.get("usage") or {}
    if not isinstance(raw_usage, dict):
        raise UpstreamError("upstream returned malformed usage")
    try:
        usage = TokenUsage(
            prompt_tokens=int(raw_usage.get("prompt_tokens") or 0),
            completion_tokens=int(raw_usage.get("completion_tokens") or 0),
            total_tokens=int(raw_usage.get("total_tokens") or 0),
        )
    except (TypeError, ValueError, OverflowError) as e:
        raise UpstreamError(f"upstream returned malformed usage: {e}") from None
    return Completion(text=str(text), usage=usage, model=str(data.get("model") or default_model))


class OpenRouterGateway:
    """``LLMGateway`` over an injected ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: str = OPENROUTER_API_URL,
        default_model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        app_url: str = "http://localhost:3000",
        app_title: str = "Voice Travel Advisor",
        client: Optional[httpx.AsyncClient] = None,
        key_manager: Optional[KeyManager] = None,
    ):
        self._km = key_manager or get_key_manager()
        self._api_key = api_key
        self._base_url = base_url
        self.default_model = default_model
        self._timeout = timeout
        self._headers = {
            "Content-Type": "application/json",
            "HTTP-Referer": app_url,
            "X-Title": app_title,
        }
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _resolve_key(self) -> str:
        key = self._api_key or self._km.get_llm_key()
        if not key:
            raise KeyMissingError("OPENROUTER_API_KEY")
        return key

    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[Message],
        options: CompletionOptions,
    ) -> Completion:
        headers = {**self._headers, "Authorization": f"Bearer {self._resolve_key()}"}
        payload = build_payload(system_prompt, messages, options, self.default_model)

        try:
            response = await self._client.post(
                self._base_url,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException:
            raise NetworkError(f"upstream timed out after {self._timeout}s") from None
        except httpx.HTTPError as e:
            raise NetworkError(f"upstream unreachable: {self._km.scrub_text(str(e))}") from None

        if not response.is_success:
            raise classify_status(response, self._km.scrub_text)

        try:
            data = response.json()
        except ValueError:
            raise UpstreamError(
                "upstream returned a non-JSON body",
                status_code=response.status_code,
            ) from None
        return parse_completion(data, payload["model"])

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
