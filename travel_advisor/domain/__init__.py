"""Domain package exports."""

from travel_advisor.domain.enums import InfoCategory, Phase, Role
from travel_advisor.domain.exceptions import (
    DomainError,
    ParseError,
    RequestValidationError,
    SchemaError,
)
from travel_advisor.domain.message_log import MessageLog
from travel_advisor.domain.models import (
    Accommodation,
    Coordinates,
    GenerationMetadata,
    GeoContext,
    Message,
    NearbyAttraction,
    PlanBudget,
    PlanDuration,
    RecommendationSet,
    TokenUsage,
    Transportation,
    TravelPlan,
)

__all__ = [
    "Accommodation",
    "Coordinates",
    "DomainError",
    "GenerationMetadata",
    "GeoContext",
    "InfoCategory",
    "Message",
    "MessageLog",
    "NearbyAttraction",
    "ParseError",
    "Phase",
    "PlanBudget",
    "PlanDuration",
    "RecommendationSet",
    "RequestValidationError",
    "Role",
    "SchemaError",
    "TokenUsage",
    "Transportation",
    "TravelPlan",
]
