"""Keyword heuristics deciding whether a conversation is ready for recommendations.

This is intentionally cheap: false negatives on unusual phrasing and false
positives on coincidental keywords are accepted. Analyzers must be pure so
the phase can be recomputed from the full log on every turn.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, runtime_checkable

from travel_advisor.domain.enums import InfoCategory, Role
from travel_advisor.domain.models import Message
from travel_advisor.parsing.requirements import CATEGORY_ORDER, check_missing, is_ready

# ── Destination ─────────────────────────────

_DESTINATION_INTENT_RE = re.compile(
    r"\b(?:want to|going to|visit|travel to|interested in|thinking about)\s+\w+"
)
_DESTINATION_NOUN_RE = re.compile(
    r"\b(?:beach(?:es)?|mountains?|city|cities|europe|asia|africa|america|oceania|"
    r"caribbean|middle east|scandinavia|country|island|islands)\b"
)

# ── Budget ──────────────────────────────────

_BUDGET_AMOUNT_RE = re.compile(r"[$€£¥]\s?\d+")
_BUDGET_WORD_RE = re.compile(
    r"\b(?:budget|spend(?:ing)?|afford(?:able)?|costs?|prices?|cheap(?:er)?|expensive)\b"
)
_BUDGET_CURRENCY_RE = re.compile(
    r"\d+(?:[.,]\d+)?\s*(?:k\s*)?(?:dollars|bucks|usd|eur|euros?|pounds|gbp|yen|jpy)\b"
)

# ── Dates ───────────────────────────────────

_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_MONTH_RE = re.compile(
    r"\b(?:january|february|march|april|may|june|july|august|september|october|november|december)\b"
)
_NEXT_PERIOD_RE = re.compile(r"\bnext (?:week|month|year|summer|winter|spring|fall|autumn)\b")
_IN_N_PERIOD_RE = re.compile(r"\bin \d+ (?:days?|weeks?|months?)\b")
_VAGUE_TIME_RE = re.compile(r"\b(?:soon|later|planning)\b")

_SIGNALS: dict[InfoCategory, tuple[re.Pattern[str], ...]] = {
    InfoCategory.DESTINATION: (_DESTINATION_INTENT_RE, _DESTINATION_NOUN_RE),
    InfoCategory.BUDGET: (_BUDGET_AMOUNT_RE, _BUDGET_WORD_RE, _BUDGET_CURRENCY_RE),
    InfoCategory.DATES: (_YEAR_RE, _MONTH_RE, _NEXT_PERIOD_RE, _IN_N_PERIOD_RE, _VAGUE_TIME_RE),
}


@dataclass(frozen=True)
class AnalysisResult:
    ready: bool
    missing: frozenset[InfoCategory]

    @property
    def missing_ordered(self) -> list[InfoCategory]:
        return [c for c in CATEGORY_ORDER if c in self.missing]


@runtime_checkable
class CompletenessAnalyzer(Protocol):
    def analyze(self, messages: Sequence[Message]) -> AnalysisResult: ...


def build_corpus(messages: Iterable[Message], roles: Iterable[Role]) -> str:
    allowed = set(roles)
    return " ".join(m.content for m in messages if m.role in allowed).lower()


def detect_signals(corpus: str) -> set[InfoCategory]:
    """Categories with at least one matching pattern in the corpus."""
    return {
        category
        for category, patterns in _SIGNALS.items()
        if any(p.search(corpus) for p in patterns)
    }


class KeywordCompletenessAnalyzer:
    """Regex analyzer over user and assistant turns."""

    def __init__(self, roles: Iterable[Role] = (Role.USER, Role.ASSISTANT)):
        self._roles = tuple(roles)

    def analyze(self, messages: Sequence[Message]) -> AnalysisResult:
        present = detect_signals(build_corpus(messages, self._roles))
        return AnalysisResult(
            ready=is_ready(present),
            missing=frozenset(check_missing(present)),
        )


__all__ = [
    "AnalysisResult",
    "CompletenessAnalyzer",
    "KeywordCompletenessAnalyzer",
    "build_corpus",
    "detect_signals",
]
