"""Domain semantic exceptions."""

from __future__ import annotations

from typing import Optional

from travel_advisor.shared.exceptions import AdvisorError


class DomainError(AdvisorError):
    """Base domain exception."""


class RequestValidationError(DomainError):
    """Caller input is malformed; raised before any LLM call."""

    code = "INVALID_REQUEST"
    category = "Invalid request"
    user_message = "The request is missing required information."
    retryable = False
    http_status = 400


class ParseError(DomainError):
    """LLM output is not JSON, even after looking for an embedded object."""

    code = "PARSE_ERROR"
    category = "Invalid response format"
    user_message = "The AI returned an invalid response format. Please try again."
    http_status = 502


class SchemaError(DomainError):
    """LLM output parsed but does not have the required structure."""

    code = "SCHEMA_ERROR"
    category = "Invalid response format"
    user_message = "The AI returned an incomplete recommendation. Please try again."
    http_status = 502

    def __init__(self, message: str, *, field: str, plan_index: Optional[int] = None):
        self.field = field
        self.plan_index = plan_index
        if plan_index is not None:
            message = f"plan {plan_index + 1}: {message}"
        super().__init__(message)
