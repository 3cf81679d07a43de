"""Deterministic parsing helpers."""

from travel_advisor.parsing.completeness import (
    AnalysisResult,
    CompletenessAnalyzer,
    KeywordCompletenessAnalyzer,
)
from travel_advisor.parsing.requirements import CATEGORY_ORDER, FIELD_LABELS, check_missing, is_ready

__all__ = [
    "AnalysisResult",
    "CompletenessAnalyzer",
    "KeywordCompletenessAnalyzer",
    "CATEGORY_ORDER",
    "FIELD_LABELS",
    "check_missing",
    "is_ready",
]
