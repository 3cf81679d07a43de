"""Pydantic domain models.

Plan models accept and emit the camelCase field names used on the wire
(``startDate``, ``bestFor``...) while exposing snake_case attributes.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from travel_advisor.domain.enums import Role


def _require_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str = Field(min_length=1)
    timestamp: int = 0

    def to_wire(self) -> dict[str, str]:
        """Shape accepted by chat-completion APIs (no local fields)."""
        return {"role": self.role.value, "content": self.content}


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TokenUsage(_WireModel):
    prompt_tokens: int = Field(default=0, alias="promptTokens")
    completion_tokens: int = Field(default=0, alias="completionTokens")
    total_tokens: int = Field(default=0, alias="totalTokens")


class PlanDuration(_WireModel):
    start_date: dt.date = Field(alias="startDate")
    end_date: dt.date = Field(alias="endDate")
    nights: Optional[int] = Field(default=None, ge=0)
    hours: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_range(self) -> "PlanDuration":
        if self.start_date > self.end_date:
            raise ValueError("startDate is after endDate")
        if self.nights is None:
            self.nights = (self.end_date - self.start_date).days
        return self


class PlanBudget(_WireModel):
    estimated: float = Field(ge=0)
    currency: str = Field(default="USD", min_length=1)
    breakdown: dict[str, float] = Field(default_factory=dict)

    @field_validator("breakdown")
    @classmethod
    def _non_negative(cls, value: dict[str, float]) -> dict[str, float]:
        for category, amount in value.items():
            if amount < 0:
                raise ValueError(f"breakdown '{category}' is negative")
        return value


class Accommodation(_WireModel):
    type: str = ""
    description: str = ""


class Transportation(_WireModel):
    arrival: str = ""
    local: str = ""


class TravelPlan(_WireModel):
    id: str = ""
    destination: str = Field(min_length=1)
    country: str = Field(min_length=1)
    duration: PlanDuration
    budget: PlanBudget
    highlights: list[str] = Field(min_length=1)
    activities: list[str] = Field(min_length=1)
    accommodation: Accommodation = Field(default_factory=Accommodation)
    transportation: Transportation = Field(default_factory=Transportation)
    best_for: list[str] = Field(default_factory=list, alias="bestFor")
    considerations: list[str] = Field(default_factory=list)

    @field_validator("accommodation", "transportation", "best_for", "considerations", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None:
            return value
        return [] if info.field_name in {"best_for", "considerations"} else {}

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GenerationMetadata(_WireModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    generated_at: Optional[str] = Field(default=None, alias="generatedAt")
    based_on_preferences: dict[str, Any] = Field(default_factory=dict, alias="basedOnPreferences")
    model: Optional[str] = None
    token_usage: Optional[TokenUsage] = Field(default=None, alias="tokenUsage")


class RecommendationSet(_WireModel):
    summary: str = Field(min_length=1)
    plans: list[TravelPlan] = Field(min_length=1, max_length=3)
    metadata: GenerationMetadata = Field(default_factory=GenerationMetadata)


# ── Map mode ──────────────────────────────────────────

class Coordinates(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180, validation_alias=AliasChoices("lng", "lon"))

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _numeric(cls, value: Any) -> Any:
        return _require_number(value)


class NearbyAttraction(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(min_length=1)
    distance_meters: float = Field(
        default=0.0,
        ge=0,
        validation_alias=AliasChoices("distanceMeters", "distance_meters", "dist"),
    )
    rating: float = Field(default=0.0, validation_alias=AliasChoices("rating", "rate"))
    position: Optional[Coordinates] = Field(
        default=None,
        validation_alias=AliasChoices("position", "point"),
    )
    kinds: str = ""


class GeoContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    coordinates: Coordinates
    location_name: str = Field(
        default="",
        validation_alias=AliasChoices("locationName", "location_name"),
    )
    nearby_attractions: list[NearbyAttraction] = Field(
        default_factory=list,
        validation_alias=AliasChoices("nearbyAttractions", "nearby_attractions"),
    )
    nearby_cities: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("nearbyCities", "nearby_cities"),
    )

    @field_validator("location_name", mode="before")
    @classmethod
    def _name_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("nearby_attractions", "nearby_cities", mode="before")
    @classmethod
    def _list_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def display_name(self) -> str:
        name = self.location_name.strip()
        if name:
            return name
        return f"{self.coordinates.lat:.4f}, {self.coordinates.lng:.4f}"
