from travel_advisor.prompting.builder import gathering_prompt, recommendation_prompt
from travel_advisor.prompting.geo import geo_user_prompt

__all__ = ["gathering_prompt", "recommendation_prompt", "geo_user_prompt"]
