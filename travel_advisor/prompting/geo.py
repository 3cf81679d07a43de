"""Map-mode user instruction built from geocoding and POI lookups."""

from __future__ import annotations

import re
from typing import Sequence

from travel_advisor.domain.models import GeoContext, NearbyAttraction

MAX_ATTRACTIONS = 15
MAX_CITIES = 5
WATER_RADIUS_KM = 200
BASE_CAMP_RADIUS_KM = 100

_WATER_RE = re.compile(r"\b(?:ocean|sea|atlantic|pacific)\b", re.IGNORECASE)

# POI services report 3 when they have no real rating
_DEFAULT_RATING = 3


def is_water(geo: GeoContext) -> bool:
    return bool(_WATER_RE.search(geo.location_name))


def is_remote(geo: GeoContext) -> bool:
    return not geo.nearby_attractions and not geo.nearby_cities


def attraction_source(attractions: Sequence[NearbyAttraction]) -> str:
    if attractions and "wikipedia" in attractions[0].kinds:
        return "(from Wikipedia - notable places)"
    return "(from OpenTripMap - tourist attractions)"


def _attraction_line(index: int, attraction: NearbyAttraction) -> str:
    line = f"{index}. {attraction.name} - {attraction.distance_meters / 1000:.1f} km away"
    if attraction.rating > 0 and attraction.rating != _DEFAULT_RATING:
        line += f" (rating: {attraction.rating:g}/7)"
    return line


def format_attractions(attractions: Sequence[NearbyAttraction]) -> str:
    if not attractions:
        return "No major attractions found in the database for this area. Focus on general local experiences and culture."
    lines = [attraction_source(attractions)]
    lines += [_attraction_line(i, a) for i, a in enumerate(attractions[:MAX_ATTRACTIONS], start=1)]
    return "\n".join(lines)


def format_cities(cities: Sequence[str]) -> str:
    if not cities:
        return "No major cities found nearby"
    return ", ".join(cities[:MAX_CITIES])


def geo_user_prompt(geo: GeoContext) -> str:
    """Pick the water, remote or standard instruction for a map selection."""
    name = geo.display_name
    coords = f"{geo.coordinates.lat:.4f}, {geo.coordinates.lng:.4f}"

    if is_water(geo):
        return f"""The user clicked on a water location: {name}
Coordinates: {coords}

Nearby cities: {format_cities(geo.nearby_cities)}

IMPORTANT: Since this is a water location, recommend ONLY the nearest coastal cities and beach destinations.

Create 2-3 travel plans that:
1. Focus on the CLOSEST coastal cities to these coordinates
2. Include beach destinations and water-based activities in THIS REGION
3. Stay within {WATER_RADIUS_KM}km of the clicked location
4. Do NOT recommend distant countries or far-away destinations
5. Do NOT invent attractions that were not supplied

All destinations must be near the clicked coordinates: {coords}"""

    if is_remote(geo):
        return f"""The user clicked on a remote location: {name}
Coordinates: {coords}

IMPORTANT: This is a remote area with no attraction data. Recommend experiences focused on THIS SPECIFIC LOCATION.

Create 2-3 travel plans that:
1. Focus on {name} and its immediate surroundings
2. Include adventure and nature-focused experiences in THIS AREA
3. Suggest nearby towns (within {BASE_CAMP_RADIUS_KM}km) that could serve as base camps
4. Do NOT invent named attractions; describe the area itself
5. Do NOT recommend distant cities or other countries

All destinations must be centered around: {name}"""

    return f"""The user clicked on this location: {name}
Coordinates: {coords}

=== NEARBY ATTRACTIONS (USE ONLY THESE) ===
{format_attractions(geo.nearby_attractions)}
=== END OF ATTRACTIONS LIST ===

Nearby cities: {format_cities(geo.nearby_cities)}

IMPORTANT: Create 2-3 diverse travel plan options that are ALL focused on {name} and its immediate surroundings.

Requirements:
1. ALL plans must have "{name}" or a nearby location (within {BASE_CAMP_RADIUS_KM}km) as the destination
2. ONLY use attractions from the list above - these are the ACTUAL attractions near this location
3. Do NOT add attractions from your general knowledge that aren't in the list
4. Ignore pure infrastructure (stations, roads) in the list
5. Include day trip options to nearby cities ONLY if they are in the "Nearby cities" list

CRITICAL: Base your recommendations ONLY on the provided data. Keep everything focused on {name}."""
