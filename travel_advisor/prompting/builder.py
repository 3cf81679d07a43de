"""System prompts for the two conversation phases.

Prompts are plain strings built by pure functions; the schema embedded in the
recommendation prompt is the shape ``RecommendationValidator`` checks.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional

from travel_advisor.domain.enums import InfoCategory
from travel_advisor.domain.models import GeoContext
from travel_advisor.parsing.requirements import CATEGORY_ORDER, FIELD_LABELS
from travel_advisor.prompting.geo import format_attractions, format_cities

_PERSONA = "You are a helpful travel advisor assistant."

# ── Gathering ─────────────────────────────────────────


def _ordered(missing: Iterable[InfoCategory]) -> list[str]:
    found = set(missing)
    return [c.value for c in CATEGORY_ORDER if c in found]


def gathering_prompt(missing: Iterable[InfoCategory]) -> str:
    """Instruction for the question-asking phase."""
    missing_names = _ordered(missing)
    missing_text = ", ".join(missing_names) if missing_names else "none (confirm details)"
    collected = "\n".join(f"- {label}" for label in FIELD_LABELS.values())

    return f"""{_PERSONA} Your role is to gather travel requirements from users through natural conversation.

CURRENT PHASE: Information Gathering

You are collecting the following information from the user:
{collected}

MISSING INFORMATION: {missing_text}

GUIDELINES:
- Be conversational, friendly, and enthusiastic about travel
- Ask one or two questions at a time - don't overwhelm the user
- Focus on gathering the missing information: {missing_text}
- Show that you're listening by acknowledging what they've already shared
- Keep responses concise (2-3 sentences)
- Once you have destination and at least one of (budget OR dates), you'll be ready to provide recommendations

Do NOT generate travel recommendations yet. Do NOT output JSON. Just continue the conversation to gather information."""


# ── Recommending ──────────────────────────────────────

_SCHEMA_TEMPLATE = """{{
  "summary": "Brief overview of the recommendations (2-3 sentences)",
  "plans": [
    {{
      "id": "plan-1",
      "destination": "Attraction, City",
      "country": "Country Name",
      "duration": {{
        "startDate": "YYYY-MM-DD",
        "endDate": "YYYY-MM-DD",
        "nights": 0,
        "hours": 4
      }},
      "budget": {{
        "estimated": 150,
        "currency": "{currency}",
        "breakdown": {{
          "admission": 65,
          "activities": 40,
          "food": 30,
          "transportation": 15
        }}
      }},
      "highlights": ["Feature 1", "Feature 2", "Feature 3"],
      "activities": ["Activity 1", "Activity 2", "Activity 3"],
      "accommodation": {{
        "type": "hotel/hostel/resort/airbnb",
        "description": "Description of accommodation"
      }},
      "transportation": {{
        "arrival": "How to get there",
        "local": "How to get around locally"
      }},
      "bestFor": ["type of traveler", "another type"],
      "considerations": ["important note 1", "important note 2"]
    }}
  ],
  "metadata": {{
    "generatedAt": "{generated_at}",
    "basedOnPreferences": {{
      "budget": "extracted budget info",
      "dates": "extracted date info",
      "interests": ["interest1", "interest2"],
      "constraints": ["constraint1"]
    }}
  }}
}}"""

_FIELD_DEFINITIONS = """FIELD DEFINITIONS:
- "destination": The name of the attraction/location (e.g., "Grouse Mountain, Vancouver")
- "highlights": What makes this attraction SPECIAL/UNIQUE (features, views, experiences)
  Example for Grouse Mountain: ["Panoramic city views", "Grizzly bear habitat", "Alpine scenery"]
  NOT: ["Grouse Mountain"] - don't repeat the destination name!
- "activities": Specific things to DO at this attraction
  Example for Grouse Mountain: ["Ride the Skyride gondola", "Hike mountain trails", "Watch bear shows"]"""

_RULES_TEMPLATE = """CRITICAL RULES:
- Generate 2-3 SEPARATE plans (this means 2-3 items in the "plans" array)
- EACH plan focuses on ONE SINGLE attraction
- "highlights" = WHY this place is special (features, not the place name itself)
- "activities" = WHAT you can do there (specific actions)
- Budget should be DAY-TRIP focused (admission + activities + food + local transport)
  - NO flights or accommodation costs
  - Focus on what it costs to visit this ONE attraction for a day
- Duration should reflect REALISTIC visit time in hours
  - "hours": Estimated time needed to visit this attraction (e.g., 2-8 hours)
  - Examples: Museum (2-3h), Theme park (6-8h), Mountain (4-6h), Park (2-4h)
  - nights should be 0 (day trip)
  - startDate and endDate should be the same
- All budget amounts should be in {currency}
- Dates should be realistic based on the conversation and on or after {today}"""


def _geo_section(geo: GeoContext) -> str:
    coords = geo.coordinates
    return f"""LOCATION CONTEXT:
The user selected "{geo.display_name}" on a map (coordinates {coords.lat:.4f}, {coords.lng:.4f}).

Nearby attractions:
{format_attractions(geo.nearby_attractions)}

Nearby cities: {format_cities(geo.nearby_cities)}

LOCATION RULES:
1. ALL plans MUST be centered on the selected location, within 100km
2. ONLY use attractions from the "Nearby attractions" list above - do NOT add attractions from your general knowledge
3. Do NOT recommend destinations in other countries or distant cities
4. If the list is empty or limited, focus on the general area and local experiences rather than inventing specific attractions"""


def recommendation_prompt(
    geo: Optional[GeoContext] = None,
    *,
    today: Optional[dt.date] = None,
    currency: str = "USD",
) -> str:
    """Instruction for the JSON recommendation phase.

    With ``geo`` the prompt is additionally constrained to the supplied
    points of interest.
    """
    today = today or dt.date.today()
    schema = _SCHEMA_TEMPLATE.format(currency=currency, generated_at=f"{today.isoformat()}T00:00:00Z")

    sections = [
        f"{_PERSONA} You have gathered sufficient information from the user and are now "
        "ready to provide personalized travel recommendations.",
        "CURRENT PHASE: Recommendation Generation",
        "Based on the conversation, generate 2-3 distinct travel plan options that match the user's preferences.",
    ]
    if geo is not None:
        sections.append(_geo_section(geo))
    sections += [
        "CRITICAL: You MUST respond with ONLY a valid JSON object. Do not include any text before or after the JSON.",
        f"JSON FORMAT (respond with ONLY this structure, no additional text):\n{schema}",
        _FIELD_DEFINITIONS,
        _RULES_TEMPLATE.format(currency=currency, today=today.isoformat()),
        "Respond with ONLY the JSON object, no additional text",
    ]
    return "\n\n".join(sections)
