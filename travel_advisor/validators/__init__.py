"""Validation of LLM output."""

from travel_advisor.validators.recommendation_validator import (
    RecommendationValidator,
    validate_recommendation,
)

__all__ = ["RecommendationValidator", "validate_recommendation"]
