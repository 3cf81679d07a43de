"""Information the advisor needs before it can recommend."""

from __future__ import annotations

from typing import Iterable

from travel_advisor.domain.enums import InfoCategory

# Canonical order used when listing missing items back to the model
CATEGORY_ORDER = (InfoCategory.DESTINATION, InfoCategory.BUDGET, InfoCategory.DATES)

# Everything the gathering prompt tells the model to collect
FIELD_LABELS = {
    "destination": "Destination preferences (specific places, regions, or types of destinations)",
    "dates": "Travel dates or timeframe",
    "budget": "Budget range",
    "interests": "Interests and preferred activities",
    "constraints": "Any constraints (dietary, accessibility, etc.)",
}


def is_ready(present: Iterable[InfoCategory]) -> bool:
    """Destination plus at least one of budget or dates."""
    found = set(present)
    return InfoCategory.DESTINATION in found and bool(
        found & {InfoCategory.BUDGET, InfoCategory.DATES}
    )


def check_missing(present: Iterable[InfoCategory]) -> list[InfoCategory]:
    found = set(present)
    return [c for c in CATEGORY_ORDER if c not in found]
