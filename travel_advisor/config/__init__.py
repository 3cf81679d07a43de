from travel_advisor.config.settings import AdvisorSettings, load_settings

__all__ = ["AdvisorSettings", "load_settings"]
