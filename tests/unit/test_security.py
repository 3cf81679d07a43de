"""Key lookup, redaction and log scrubbing."""

from __future__ import annotations

import io
import json

import pytest

from travel_advisor.infrastructure.logging import StructuredLogger
from travel_advisor.security.key_manager import KeyManager, get_key_manager
from travel_advisor.security.redact import redact_sensitive
from travel_advisor.shared.exceptions import KeyMissingError


def test_llm_key_priority(monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "generic-key-value")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key-value")
    km = KeyManager()
    assert km.get_llm_key() == "openai-key-value"

    monkeypatch.setenv("OPENROUTER_API_KEY", "openrouter-key-value")
    km.reload()
    assert km.get_llm_key() == "openrouter-key-value"


def test_missing_required_key():
    with pytest.raises(KeyMissingError) as exc:
        KeyManager().get_llm_key(required=True)
    assert exc.value.key_name == "OPENROUTER_API_KEY"
    assert exc.value.retryable is False


def test_reload_drops_removed_keys(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "temporary-key")
    km = KeyManager()
    assert km.get_llm_key() == "temporary-key"
    monkeypatch.delenv("OPENROUTER_API_KEY")
    km.reload("OPENROUTER_API_KEY")
    assert km.get_llm_key() is None


def test_redact_keeps_edges():
    assert KeyManager.redact("abcd1234efgh5678") == "abcd****5678"
    assert KeyManager.redact("short") == "****"


def test_scrub_text_replaces_known_keys(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "plain-secret-value-42")
    km = KeyManager()
    km.get_llm_key()
    scrubbed = km.scrub_text("upstream said plain-secret-value-42 is invalid")
    assert "plain-secret-value-42" not in scrubbed
    assert "OPENROUTER_API_KEY:***REDACTED***" in scrubbed


@pytest.mark.parametrize("text, secret", [
    ("Authorization: Bearer abc.def.ghi", "abc.def.ghi"),
    ("https://x.example/?api_key=topsecret&q=1", "topsecret"),
    ('{"token": "tok_123456"}', "tok_123456"),
    ("key sk-or-v1-0123456789abcdef leaked", "sk-or-v1-0123456789abcdef"),
])
def test_redact_sensitive_patterns(text, secret):
    assert secret not in redact_sensitive(text)


def test_logger_scrubs_every_line(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "plain-secret-value-42")
    get_key_manager().reload()
    out = io.StringIO()
    logger = StructuredLogger(trace_id="abc", output=out)
    logger.error("gather", "call failed with plain-secret-value-42")
    line = out.getvalue()
    assert "plain-secret-value-42" not in line
    assert json.loads(line)["trace_id"] == "abc"


def test_logger_node_timing():
    out = io.StringIO()
    logger = StructuredLogger(trace_id="t", output=out)
    logger.node_start("analyze")
    logger.node_end("analyze", phase="gathering")
    start, end = [json.loads(line) for line in out.getvalue().splitlines()]
    assert start["event"] == "node_start"
    assert end["event"] == "node_end"
    assert end["duration_ms"] >= 0
    assert end["phase"] == "gathering"
