"""API request/response models.

Request models only pin down the outer shape; message and coordinate
content is validated by the orchestrator so that each failure gets its own
error code.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AssistantRequest(BaseModel):
    messages: list[Any] = Field(description="Full conversation so far, oldest first: [{role, content}]")


class MapRecommendationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    coordinates: Optional[Any] = Field(default=None, description="Selected point: {lat, lng}")
    location_name: Optional[str] = Field(default="", alias="locationName", description="Reverse-geocoded name")
    nearby_attractions: Optional[list[Any]] = Field(
        default=None,
        alias="nearbyAttractions",
        description="Points of interest near the selection: [{name, distanceMeters, rating, position, kinds}]",
    )
    nearby_cities: Optional[list[Any]] = Field(default=None, alias="nearbyCities", description="Nearby city names")


class AssistantMessageResponse(BaseModel):
    message: str = Field(description="Assistant follow-up question")


class RecommendationResponse(BaseModel):
    travelPlans: list[dict[str, Any]] = Field(description="2-3 validated travel plans")
    summary: str = Field(description="Overview of the plans")


class ErrorResponse(BaseModel):
    error: str = Field(description="Error category")
    message: str = Field(description="Short user-facing message")
    code: str = Field(description="Stable machine-readable code")
    retryable: bool = Field(description="Whether retrying the same request may succeed")


class HealthResponse(BaseModel):
    status: str = Field(default="ok")
