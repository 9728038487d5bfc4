"""Keyword and phrase rules for almanac event extraction.

Every heuristic table the classifier and builder consult lives here as
ordered (category, pattern) rules, so a rule set can be extended or
swapped per institution without touching control flow.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from src.event_extraction.normalizer import MONTH_NAMES, ORDINAL, WEEKDAY_NAMES


@dataclass(frozen=True)
class ClassifierRule:
    """
    A single (category, pattern) heuristic.

    Attributes:
        category: Label assigned when the pattern matches.
        pattern: Compiled regex tested with search().
    """

    category: str
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rules(table: list[tuple[str, str]], flags: int = re.IGNORECASE) -> tuple[ClassifierRule, ...]:
    return tuple(ClassifierRule(name, re.compile(p, flags)) for name, p in table)


# Ordered: first match wins
CATEGORY_RULES: tuple[ClassifierRule, ...] = _rules([
    ("Registration", r"registration|enrol"),
    ("Examination", r"exam|test|assessment"),
    ("Academic", r"semester|teaching|classes|academic"),
    ("Holiday", r"holiday|break|vacation"),
    ("Graduation", r"graduation|commencement|convocation"),
    ("Deadline", r"deadline|\bdue\b|submi(?:t|ssion)"),
    ("Orientation", r"orientation|induction"),
])

ACADEMIC_KEYWORDS: tuple[str, ...] = (
    "semester", "registration", "orientation", "examination", "graduation",
    "commencement", "convocation", "deadline", "begins", "ends",
    "holiday", "break", "vacation", "teaching", "classes",
    "assessment", "project", "thesis", "dissertation", "defense",
)

# Structural headers are printed in capitals
SECTION_RULES: tuple[ClassifierRule, ...] = _rules([
    ("calendar", r"ACADEMIC\s+CALENDAR"),
    ("semester", r"SEMESTER\s+\d+"),
    ("semester", r"(?:FIRST|SECOND|THIRD)\s+SEMESTER"),
    ("examination", r"EXAMINATION\s+PERIOD"),
    ("vacation", r"VACATION"),
    ("holiday", r"HOLIDAY"),
    ("registration", r"REGISTRATION"),
], flags=0)

ACTIVITY_RULES: tuple[ClassifierRule, ...] = _rules([
    ("start", r"\b(?:begins?|starts?|commences?)\b"),
    ("end", r"\b(?:ends?|concludes?|finishes?)\b"),
    ("due", r"\b(?:due|deadline|submit)\b"),
    ("range", r"\b(?:from|to|until)\b"),
])

# Splits column text just before a weekday name or a "day month year" token
BLOCK_BOUNDARY = re.compile(
    rf"(?=\b(?:{WEEKDAY_NAMES}|\d{{1,2}}{ORDINAL}\s+{MONTH_NAMES}\s+\d{{4}}))",
    re.IGNORECASE,
)

# Optional weekday, optional day, month, year, then the description
BLOCK_DATE_EVENT = re.compile(
    rf"(?P<weekday>{WEEKDAY_NAMES})?,?\s*(?:(?P<day>\d{{1,2}}){ORDINAL}\s+)?"
    rf"\b(?P<month>{MONTH_NAMES})\s+(?P<year>\d{{4}})\s*[-–—:]?\s*(?P<description>.*)",
    re.IGNORECASE | re.DOTALL,
)

BLOCK_KEYWORDS: tuple[str, ...] = (
    "Lecture Sessions End", "Results Release", "Start Working", "Complete Working",
    "Public Holiday", "Field Work", "Job Fair", "Begins", "Ends", "Release",
    "Marking", "Compilation", "Report", "Registration", "Ceremony", "Holiday",
    "Break", "Assessment", "Examinations", "Vacation", "Practice", "Training",
    "Meeting", "Board", "Committee", "Session", "Conference", "Festival",
    "Competition", "Game", "Campaign", "Deadline", "Admission", "Appeals",
    "Approval", "Processing", "Opening", "Closing", "Launch", "Fair",
    "Address", "Appointment", "Graduation", "Orientation", "Ball", "Test",
    "Presentation", "Empowerment", "Moderation", "Innovation", "Practical",
    "Project", "Selection", "Semester", "Results",
)

BLOCK_KEYWORD_EVENT = re.compile(
    r"\b(?P<keyword>" + "|".join(re.escape(k) for k in BLOCK_KEYWORDS) + r")\b"
    r"\s*[:-]?\s*(?P<description>.*)",
    re.IGNORECASE | re.DOTALL,
)

# "DATE: description" / "DATE - description" entries in generic documents
DATED_ENTRY_RULES: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d{1,2}/\d{1,2}/\d{4})\s*[:-]\s*(.+)"),
    re.compile(rf"(\b{MONTH_NAMES}\s+\d{{1,2}},\s+\d{{4}}):\s*(.+)", re.IGNORECASE),
    re.compile(r"(\d{1,2}-\d{1,2}-\d{4}):\s*(.+)"),
    re.compile(r"(\d{4}-\d{1,2}-\d{1,2}):\s*(.+)"),
)

CLOCK_TIME = re.compile(r"\b\d{1,2}:\d{2}\b")


@dataclass(frozen=True)
class RuleSet:
    """Bundle of rule tables used by the classifier and builder."""

    categories: tuple[ClassifierRule, ...] = CATEGORY_RULES
    sections: tuple[ClassifierRule, ...] = SECTION_RULES
    activities: tuple[ClassifierRule, ...] = ACTIVITY_RULES
    keywords: tuple[str, ...] = field(default=ACADEMIC_KEYWORDS)

    def categorize(self, text: str) -> str:
        """Return the first matching category, or "General"."""
        for rule in self.categories:
            if rule.matches(text):
                return rule.category
        return "General"

    def has_keyword(self, text: str) -> bool:
        lower = text.lower()
        return any(keyword in lower for keyword in self.keywords)

    def is_keyword_token(self, token: str) -> bool:
        lower = token.lower()
        return any(keyword in lower for keyword in self.keywords)


DEFAULT_RULES = RuleSet()
