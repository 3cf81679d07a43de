"""Helpers for redacting secrets in logs and error strings."""

from __future__ import annotations

import re

_REDACTED = "***REDACTED***"

_QUERY_VALUE_RE = re.compile(
    r"(?i)(?P<prefix>\b(?:key|api[_-]?key|token|secret|password)\s*=\s*)(?P<value>[^&\s\"']+)"
)
_JSON_KV_RE = re.compile(
    r"(?i)(?P<prefix>(?:[\"']?(?:api[_-]?key|authorization|token|secret|password)[\"']?\s*[:=]\s*[\"']?))"
    r"(?P<value>[^\"',\s}]+)"
)
_BEARER_RE = re.compile(r"(?i)(?P<prefix>\bbearer\s+)(?P<value>[A-Za-z0-9._~+/=-]+)")
# OpenRouter keys are sk-or-v1-..., OpenAI keys sk-...
_PROVIDER_KEY_RE = re.compile(r"\bsk-[A-Za-z0-9_-]{8,}\b")


def _replace_value(pattern: re.Pattern[str], text: str) -> str:
    return pattern.sub(lambda m: f"{m.group('prefix')}{_REDACTED}", text)


def redact_sensitive(text: str) -> str:
    """Redact bearer tokens, key=value pairs and provider keys."""
    if not text:
        return text

    redacted = str(text)
    for pattern in (_BEARER_RE, _QUERY_VALUE_RE, _JSON_KV_RE):
        redacted = _replace_value(pattern, redacted)
    return _PROVIDER_KEY_RE.sub(_REDACTED, redacted)


__all__ = ["redact_sensitive"]
