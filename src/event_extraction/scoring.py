"""Confidence scoring for extracted calendar events.

Two rule sets coexist: the almanac profile (academic calendars, strict
about long descriptions) and the generic profile (plain "DATE: text"
documents). Both start at 0.5 and are clamped to [0.0, 1.0].
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.event_extraction.normalizer import DAY_MONTH_YEAR, ISO_DATE, MONTH_DAY_COMMA_YEAR, SLASH_DATE
from src.event_extraction.patterns import CLOCK_TIME


@dataclass(frozen=True)
class ConfidenceProfile:
    """
    Parameters for one confidence formula.

    Attributes:
        name: Profile identifier ("almanac" or "generic").
        date_rules: (pattern, bonus) pairs tested against the date token;
            each rule contributes at most once.
        category_types: Event types that earn category_bonus.
        terms: Words that earn term_bonus when found in the description.
        long_limit: Descriptions longer than this lose long_penalty.
    """

    name: str
    date_rules: tuple[tuple[re.Pattern[str], float], ...]
    category_types: frozenset[str]
    terms: tuple[str, ...]
    long_limit: int
    base: float = 0.5
    category_bonus: float = 0.2
    term_bonus: float = 0.1
    short_limit: int = 10
    short_penalty: float = 0.2
    long_penalty: float = 0.1
    time_bonus: float = 0.1
    unresolved_penalty: float = 0.2


ALMANAC_PROFILE = ConfidenceProfile(
    name="almanac",
    date_rules=(
        (DAY_MONTH_YEAR, 0.3),
        (MONTH_DAY_COMMA_YEAR, 0.4),
    ),
    category_types=frozenset(
        {"Registration", "Examination", "Academic", "Graduation", "Orientation"}
    ),
    terms=("udsm", "university", "students", "academic", "semester", "examination"),
    long_limit=100,
)

GENERIC_PROFILE = ConfidenceProfile(
    name="generic",
    date_rules=(
        (SLASH_DATE, 0.3),
        (ISO_DATE, 0.3),
        (MONTH_DAY_COMMA_YEAR, 0.4),
    ),
    category_types=frozenset(),
    terms=("meeting", "event", "conference", "deadline", "appointment", "party", "celebration"),
    term_bonus=0.2,
    long_limit=150,
)

PROFILES: dict[str, ConfidenceProfile] = {
    ALMANAC_PROFILE.name: ALMANAC_PROFILE,
    GENERIC_PROFILE.name: GENERIC_PROFILE,
}


class ConfidenceScorer:
    """
    Scores an event candidate against a ConfidenceProfile.

    Usage:
        scorer = ConfidenceScorer(ALMANAC_PROFILE)
        scorer.score("Registration Begins", "1st September 2025", "Registration")
    """

    def __init__(self, profile: ConfidenceProfile = ALMANAC_PROFILE):
        self.profile = profile

    @classmethod
    def for_profile(cls, name: str) -> "ConfidenceScorer":
        try:
            return cls(PROFILES[name])
        except KeyError:
            raise ValueError(f"Unknown confidence profile: {name!r}") from None

    def score(
        self,
        description: str,
        date_token: str | None,
        event_type: str,
        date_resolved: bool = True,
    ) -> float:
        """
        Compute the confidence score.

        Args:
            description: Cleaned event description.
            date_token: Raw date substring from the text, if any.
            event_type: Classified event type.
            date_resolved: False when the event has no canonical date.

        Returns:
            Score in [0.0, 1.0], rounded to 2 decimals.
        """
        p = self.profile
        confidence = p.base

        if date_token:
            for pattern, bonus in p.date_rules:
                if pattern.search(date_token):
                    confidence += bonus

        if event_type in p.category_types:
            confidence += p.category_bonus

        lower = description.lower()
        if any(term in lower for term in p.terms):
            confidence += p.term_bonus

        if len(description) < p.short_limit:
            confidence -= p.short_penalty
        if len(description) > p.long_limit:
            confidence -= p.long_penalty

        if CLOCK_TIME.search(description):
            confidence += p.time_bonus

        if not date_resolved:
            confidence -= p.unresolved_penalty

        return round(min(1.0, max(0.0, confidence)), 2)
