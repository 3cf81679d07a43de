"""Domain enums."""

from enum import Enum


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Phase(str, Enum):
    GATHERING = "gathering"
    RECOMMENDING = "recommending"


class InfoCategory(str, Enum):
    DESTINATION = "destination"
    BUDGET = "budget"
    DATES = "dates"
