"""Shared cross-layer types and exceptions."""

from travel_advisor.shared.exceptions import (
    AdvisorError,
    AuthError,
    EmptyCompletionError,
    GatewayError,
    KeyMissingError,
    NetworkError,
    RateLimitError,
    RequestError,
    TurnTimeoutError,
    UpstreamError,
)

__all__ = [
    "AdvisorError",
    "GatewayError",
    "AuthError",
    "KeyMissingError",
    "RateLimitError",
    "UpstreamError",
    "EmptyCompletionError",
    "RequestError",
    "NetworkError",
    "TurnTimeoutError",
]
