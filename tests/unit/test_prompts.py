"""Prompt builder: gathering, recommendation and map-mode instructions."""

from __future__ import annotations

import datetime as dt

from travel_advisor.domain.enums import InfoCategory
from travel_advisor.domain.models import GeoContext
from travel_advisor.parsing.requirements import FIELD_LABELS
from travel_advisor.prompting import gathering_prompt, geo_user_prompt, recommendation_prompt

TODAY = dt.date(2026, 5, 1)


def _geo(**overrides) -> GeoContext:
    data = {
        "coordinates": {"lat": 49.38123, "lng": -123.08199},
        "locationName": "North Vancouver",
        "nearbyAttractions": [
            {"name": "Grouse Mountain", "dist": 1234, "rate": 7, "kinds": "natural,wikipedia"},
            {"name": "Capilano Suspension Bridge", "dist": 3000, "rate": 3, "kinds": "bridges"},
        ],
        "nearbyCities": ["Vancouver", "Burnaby"],
    }
    data.update(overrides)
    return GeoContext.model_validate(data)


# ── gathering ─────────────────────────────────────────


def test_gathering_prompt_lists_missing_in_canonical_order():
    prompt = gathering_prompt({InfoCategory.DATES, InfoCategory.DESTINATION})
    assert "MISSING INFORMATION: destination, dates" in prompt


def test_gathering_prompt_names_everything_collected():
    prompt = gathering_prompt({InfoCategory.BUDGET})
    for label in FIELD_LABELS.values():
        assert label in prompt


def test_gathering_prompt_limits_questions_and_forbids_plans():
    prompt = gathering_prompt({InfoCategory.BUDGET})
    assert "one or two questions at a time" in prompt
    assert "Do NOT generate travel recommendations" in prompt


# ── recommendation ────────────────────────────────────


def test_recommendation_prompt_embeds_validated_schema():
    prompt = recommendation_prompt(today=TODAY)
    for key in ('"summary"', '"plans"', '"destination"', '"country"', '"startDate"', '"endDate"',
                '"estimated"', '"highlights"', '"activities"', '"bestFor"', '"considerations"'):
        assert key in prompt


def test_recommendation_prompt_rules():
    prompt = recommendation_prompt(today=TODAY)
    assert "ONLY a valid JSON object" in prompt
    assert "Generate 2-3 SEPARATE plans" in prompt
    assert "Grouse Mountain" in prompt
    assert "don't repeat the destination name" in prompt
    assert "NO flights or accommodation costs" in prompt
    assert "nights should be 0" in prompt
    assert "startDate and endDate should be the same" in prompt
    assert "2026-05-01" in prompt
    assert "LOCATION CONTEXT" not in prompt


def test_recommendation_prompt_uses_configured_currency():
    prompt = recommendation_prompt(today=TODAY, currency="EUR")
    assert "All budget amounts should be in EUR" in prompt
    assert '"currency": "EUR"' in prompt


def test_recommendation_prompt_with_geo_restricts_attractions():
    prompt = recommendation_prompt(_geo(), today=TODAY)
    assert "LOCATION CONTEXT" in prompt
    assert '"North Vancouver"' in prompt
    assert "49.3812, -123.0820" in prompt
    assert "1. Grouse Mountain - 1.2 km away (rating: 7/7)" in prompt
    assert "ONLY use attractions from the" in prompt


def test_recommendation_prompt_is_pure():
    assert recommendation_prompt(_geo(), today=TODAY) == recommendation_prompt(_geo(), today=TODAY)


# ── map mode ──────────────────────────────────────────


def test_standard_variant_enumerates_attractions():
    prompt = geo_user_prompt(_geo())
    assert "USE ONLY THESE" in prompt
    assert "(from Wikipedia - notable places)" in prompt
    assert "2. Capilano Suspension Bridge - 3.0 km away" in prompt
    assert "Nearby cities: Vancouver, Burnaby" in prompt
    assert "Do NOT add attractions" in prompt


def test_default_rating_is_hidden():
    prompt = geo_user_prompt(_geo())
    assert "Capilano Suspension Bridge - 3.0 km away (rating" not in prompt


def test_source_label_defaults_to_opentripmap():
    geo = _geo(nearbyAttractions=[{"name": "Lonsdale Quay", "dist": 500, "kinds": "markets"}])
    assert "(from OpenTripMap - tourist attractions)" in geo_user_prompt(geo)


def test_attractions_and_cities_are_capped():
    attractions = [{"name": f"Place {i:02d}", "dist": i * 100} for i in range(1, 21)]
    cities = [f"City {i}" for i in range(1, 8)]
    prompt = geo_user_prompt(_geo(nearbyAttractions=attractions, nearbyCities=cities))
    assert "Place 15" in prompt
    assert "Place 16" not in prompt
    assert "City 5" in prompt
    assert "City 6" not in prompt


def test_water_variant():
    geo = _geo(locationName="North Pacific Ocean", nearbyAttractions=[], nearbyCities=["Tofino"])
    prompt = geo_user_prompt(geo)
    assert "water location" in prompt
    assert "coastal cities" in prompt
    assert "within 200km" in prompt
    assert "Do NOT invent attractions" in prompt


def test_water_detection_uses_whole_words():
    prompt = geo_user_prompt(_geo(locationName="Seattle"))
    assert "water location" not in prompt


def test_remote_variant_without_any_nearby_data():
    geo = _geo(locationName="Yukon wilderness", nearbyAttractions=[], nearbyCities=[])
    prompt = geo_user_prompt(geo)
    assert "remote location: Yukon wilderness" in prompt
    assert "within 100km" in prompt
    assert "Do NOT invent named attractions" in prompt


def test_missing_location_name_falls_back_to_coordinates():
    prompt = geo_user_prompt(_geo(locationName=None, nearbyAttractions=[], nearbyCities=[]))
    assert "remote location: 49.3812, -123.0820" in prompt
