"""Shared (non-domain) exceptions.

Every error carries the caller-facing contract: a category, a short
non-technical message, a stable code and an explicit ``retryable`` flag.
The exception text itself is for logs only.
"""

from __future__ import annotations

from typing import Any, Optional


class AdvisorError(Exception):
    """Base error with a stable machine-readable code."""

    code = "INTERNAL_ERROR"
    category = "Internal server error"
    user_message = "An unexpected error occurred. Please try again."
    retryable = True
    http_status = 500

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        user_message: Optional[str] = None,
    ):
        if code is not None:
            self.code = code
        if user_message is not None:
            self.user_message = user_message
        super().__init__(message or self.user_message)

    def to_payload(self) -> dict[str, Any]:
        return {
            "error": self.category,
            "message": self.user_message,
            "code": self.code,
            "retryable": self.retryable,
        }


class GatewayError(AdvisorError):
    """Outcome of a failed LLM gateway call."""

    http_status = 502


class AuthError(GatewayError):
    """Upstream rejected our credentials (HTTP 401)."""

    code = "CONFIG_ERROR"
    category = "Configuration error"
    user_message = "The service is not properly configured. Please contact support."
    retryable = False
    http_status = 500


class KeyMissingError(AuthError):
    """Required key is missing."""

    def __init__(self, name: str):
        self.key_name = name
        super().__init__(f"Missing required API key: {name} (configure it in .env)")


class RateLimitError(GatewayError):
    """Upstream throttled the request (HTTP 429)."""

    code = "RATE_LIMIT"
    category = "Rate limit exceeded"
    user_message = "Too many requests. Please wait a moment and try again."
    http_status = 429

    def __init__(self, message: str = "", *, retry_after: Optional[float] = None, **kwargs: Any):
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class UpstreamError(GatewayError):
    """Upstream failed on its side (HTTP 5xx or an unreadable body)."""

    code = "UPSTREAM_ERROR"
    category = "AI service error"
    user_message = "The AI service is having trouble right now. Please try again."

    def __init__(self, message: str = "", *, status_code: Optional[int] = None, **kwargs: Any):
        self.status_code = status_code
        super().__init__(message, **kwargs)


class EmptyCompletionError(UpstreamError):
    """Upstream answered 2xx with no text."""

    code = "EMPTY_COMPLETION"
    user_message = "The assistant did not reply. Please try again."


class RequestError(GatewayError):
    """Upstream rejected the request as malformed (4xx other than 401/429)."""

    code = "BAD_UPSTREAM_REQUEST"
    category = "Invalid upstream request"
    user_message = "The request could not be processed. Please rephrase and try again."
    retryable = False

    def __init__(self, message: str = "", *, status_code: Optional[int] = None, **kwargs: Any):
        self.status_code = status_code
        super().__init__(message, **kwargs)


class NetworkError(GatewayError):
    """No response from upstream (transport failure or timeout)."""

    code = "NETWORK_ERROR"
    category = "Network error"
    user_message = "Unable to connect to the AI service. Please check your connection and try again."
    http_status = 503


class TurnTimeoutError(AdvisorError):
    """A whole conversation turn exceeded its time budget."""

    code = "TIMEOUT"
    category = "Timeout"
    user_message = "The assistant took too long to answer. Please try again."
    http_status = 503

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"turn timed out after {timeout}s")
