"""OpenRouter gateway: request shape and failure classification."""

from __future__ import annotations

import json

import httpx
import pytest

from travel_advisor.domain.enums import Role
from travel_advisor.domain.models import Message
from travel_advisor.infrastructure.llm_gateway import CompletionOptions, LLMGateway, OpenRouterGateway
from travel_advisor.security.key_manager import KeyManager
from travel_advisor.shared.exceptions import (
    AuthError,
    KeyMissingError,
    NetworkError,
    RateLimitError,
    RequestError,
    UpstreamError,
)

API_KEY = "sk-or-v1-testkey-0123456789"
MESSAGES = [
    Message(role=Role.USER, content="I want to visit Japan", timestamp=1),
    Message(role=Role.ASSISTANT, content="When would you go?", timestamp=2),
]
OK_BODY = {
    "model": "meta-llama/llama-3.2-3b-instruct:free",
    "choices": [{"message": {"role": "assistant", "content": "What is your budget?"}}],
    "usage": {"prompt_tokens": 50, "completion_tokens": 8, "total_tokens": 58},
}


def _gateway(handler, **kwargs) -> OpenRouterGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("api_key", API_KEY)
    return OpenRouterGateway(client=client, **kwargs)


def _status(code: int, body=None, headers=None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(code, json=body or {"error": {"message": "nope"}}, headers=headers)

    return handler


async def test_request_carries_only_role_and_content():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=OK_BODY)

    gateway = _gateway(handler, app_url="https://advisor.example", app_title="Advisor")
    completion = await gateway.complete("SYSTEM", MESSAGES, CompletionOptions(max_tokens=300))

    body = json.loads(seen[0].content)
    assert body["messages"] == [
        {"role": "system", "content": "SYSTEM"},
        {"role": "user", "content": "I want to visit Japan"},
        {"role": "assistant", "content": "When would you go?"},
    ]
    assert body["max_tokens"] == 300
    assert "response_format" not in body
    assert seen[0].headers["authorization"] == f"Bearer {API_KEY}"
    assert seen[0].headers["http-referer"] == "https://advisor.example"
    assert seen[0].headers["x-title"] == "Advisor"

    assert completion.text == "What is your budget?"
    assert completion.usage.total_tokens == 58
    assert completion.model == OK_BODY["model"]


async def test_json_mode_sets_response_format():
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=OK_BODY)

    await _gateway(handler).complete("S", MESSAGES, CompletionOptions(want_json=True, model="x/y"))
    assert seen[0]["response_format"] == {"type": "json_object"}
    assert seen[0]["model"] == "x/y"


async def test_default_model_is_used_when_options_leave_it_empty():
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"choices": []})

    await _gateway(handler, default_model="fallback/model").complete("S", MESSAGES, CompletionOptions())
    assert seen[0]["model"] == "fallback/model"


@pytest.mark.parametrize("code, error_type, retryable", [
    (401, AuthError, False),
    (429, RateLimitError, True),
    (500, UpstreamError, True),
    (503, UpstreamError, True),
    (400, RequestError, False),
    (404, RequestError, False),
])
async def test_status_classification(code, error_type, retryable):
    with pytest.raises(error_type) as exc:
        await _gateway(_status(code)).complete("S", MESSAGES, CompletionOptions())
    assert exc.value.retryable is retryable


async def test_rate_limit_reads_retry_after():
    gateway = _gateway(_status(429, headers={"Retry-After": "2"}))
    with pytest.raises(RateLimitError) as exc:
        await gateway.complete("S", MESSAGES, CompletionOptions())
    assert exc.value.retry_after == 2.0


async def test_error_text_never_contains_the_key():
    body = {"error": {"message": f"bad key {API_KEY}"}}
    with pytest.raises(RequestError) as exc:
        await _gateway(_status(400, body=body)).complete("S", MESSAGES, CompletionOptions())
    assert API_KEY not in str(exc.value)


@pytest.mark.parametrize("transport_error", [
    httpx.ConnectError("connection refused"),
    httpx.ReadTimeout("read timed out"),
])
async def test_transport_failures_are_network_errors(transport_error):
    def handler(request: httpx.Request) -> httpx.Response:
        raise transport_error

    with pytest.raises(NetworkError) as exc:
        await _gateway(handler).complete("S", MESSAGES, CompletionOptions())
    assert exc.value.retryable is True


async def test_non_json_success_body_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(UpstreamError):
        await _gateway(handler).complete("S", MESSAGES, CompletionOptions())


async def test_missing_choices_yield_empty_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    completion = await _gateway(handler).complete("S", MESSAGES, CompletionOptions())
    assert completion.text == ""
    assert completion.usage.total_tokens == 0


@pytest.mark.parametrize("body", [
    {"choices": [{"message": "hello"}]},
    {"choices": {"0": {"message": {"content": "hi"}}}},
    {"choices": [{"message": {"content": "hi"}}], "usage": "lots"},
    {"choices": [{"message": {"content": "hi"}}], "usage": {"total_tokens": "many"}},
    {"choices": [{"message": {"content": "hi"}}], "usage": {"prompt_tokens": [1]}},
])
async def test_malformed_success_body_is_an_upstream_error(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(UpstreamError) as exc:
        await _gateway(handler).complete("S", MESSAGES, CompletionOptions())
    assert exc.value.code == "UPSTREAM_ERROR"
    assert exc.value.retryable is True


async def test_missing_key_fails_before_any_request():
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=OK_BODY)

    gateway = _gateway(handler, api_key=None, key_manager=KeyManager())
    with pytest.raises(KeyMissingError) as exc:
        await gateway.complete("S", MESSAGES, CompletionOptions())
    assert calls == []
    assert exc.value.code == "CONFIG_ERROR"
    assert isinstance(exc.value, AuthError)


async def test_key_is_read_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env-fallback-key-99")
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=OK_BODY)

    gateway = _gateway(handler, api_key=None, key_manager=KeyManager())
    await gateway.complete("S", MESSAGES, CompletionOptions())
    assert seen[0].headers["authorization"] == "Bearer sk-env-fallback-key-99"


def test_gateway_satisfies_protocol():
    assert isinstance(_gateway(_status(200)), LLMGateway)
