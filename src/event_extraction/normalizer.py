"""Date normalizer for calendar event extraction.

Converts the heterogeneous date substrings found in almanac text
("15th September 2024", "September 15, 2024", "15/09/2024", "2024-09-15")
into canonical ISO YYYY-MM-DD strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Literal

SlashOrder = Literal["dmy", "mdy"]

# Month name → number mapping
_MONTH_MAP: dict[str, int] = {
    "january": 1, "february": 2, "march": 3, "april": 4,
    "may": 5, "june": 6, "july": 7, "august": 8,
    "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4,
    "jun": 6, "jul": 7, "aug": 8, "sep": 9,
    "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Reusable pattern fragments
MONTH_NAMES = (
    r"(?:January|February|March|April|May|June|July|August|September|October|November|December"
    r"|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec)"
)
WEEKDAY_NAMES = r"(?:Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday)"
ORDINAL = r"(?:st|nd|rd|th)?"

DAY_MONTH_YEAR = re.compile(
    rf"\b(?P<day>\d{{1,2}}){ORDINAL}\s+(?P<month>{MONTH_NAMES})\b\.?,?\s+(?P<year>\d{{4}})\b",
    re.IGNORECASE,
)
MONTH_DAY_YEAR = re.compile(
    rf"\b(?P<month>{MONTH_NAMES})\b\.?\s+(?P<day>\d{{1,2}}){ORDINAL},?\s+(?P<year>\d{{4}})\b",
    re.IGNORECASE,
)
MONTH_DAY_COMMA_YEAR = re.compile(
    rf"\b{MONTH_NAMES}\s+\d{{1,2}},\s*\d{{4}}\b",
    re.IGNORECASE,
)
SLASH_DATE = re.compile(r"\b(?P<first>\d{1,2})/(?P<second>\d{1,2})/(?P<year>\d{4})\b")
ISO_DATE = re.compile(r"\b(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})\b")
DASH_DATE = re.compile(r"\b(?P<first>\d{1,2})-(?P<second>\d{1,2})-(?P<year>\d{4})\b")

# "<label>: <rest>" where the label reads like a time reference
_DATE_LABEL = re.compile(r"^\s*(?P<label>[^:]{2,40}?)\s*:\s*(?P<rest>\S.*)$")
_TEMPORAL_CUE = re.compile(
    rf"\b(?:TBD|TBA|sometime|future|soon|later|{WEEKDAY_NAMES}|{MONTH_NAMES})\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class DateMatch:
    """
    A date located in a line of text.

    Attributes:
        raw: The substring as it appeared in the text.
        canonical: YYYY-MM-DD value, or None if it could not be resolved.
        shape: Name of the pattern that located the substring.
    """

    raw: str
    canonical: str | None
    shape: str

    @property
    def resolved(self) -> bool:
        return self.canonical is not None


def month_number(name: str) -> int | None:
    """Resolve a month name or abbreviation, case-insensitively."""
    return _MONTH_MAP.get(name.lower().rstrip("."))


def to_canonical(year: int, month: int, day: int) -> str | None:
    """
    Build a YYYY-MM-DD string from a (year, month, day) triple.

    Returns None when the triple is not a valid Gregorian date, so
    "31 February" is rejected instead of rolling over into March.
    """
    if not 1 <= month <= 12:
        return None
    try:
        resolved = date(year, month, day)
    except ValueError:
        return None
    if resolved.year != year:
        return None
    return resolved.isoformat()


class DateNormalizer:
    """
    Stateless normalizer for calendar date substrings.

    Shapes are tried in a fixed order (day-month-year, month-day-year,
    slash, ISO, dash); the first one that yields a valid date wins.

    Args:
        slash_order: "dmy" reads 03/04/2025 as 3 April (calendar documents),
            "mdy" reads it as 4 March (generic documents).
    """

    def __init__(self, slash_order: SlashOrder = "dmy"):
        if slash_order not in ("dmy", "mdy"):
            raise ValueError(f"Unknown slash date order: {slash_order!r}")
        self.slash_order = slash_order
        self._shapes: list[tuple[str, re.Pattern[str], Callable[[re.Match], str | None]]] = [
            ("day_month_year", DAY_MONTH_YEAR, self._from_month_name),
            ("month_day_year", MONTH_DAY_YEAR, self._from_month_name),
            ("slash", SLASH_DATE, self._from_numeric),
            ("iso", ISO_DATE, self._from_iso),
            ("dash", DASH_DATE, self._from_numeric),
        ]

    def normalize(self, text: str | None) -> str | None:
        """
        Normalize a date substring.

        Args:
            text: Raw date-like text.

        Returns:
            Canonical YYYY-MM-DD string, or None if nothing valid matched.
        """
        found = self.find(text)
        return found.canonical if found else None

    def find(self, text: str | None) -> DateMatch | None:
        """
        Locate the first recognized date substring in a piece of text.

        A valid date from a later shape beats an invalid one from an
        earlier shape; if no candidate resolves, the first raw match is
        returned with canonical set to None.
        """
        if not text or not text.strip():
            return None

        unresolved: DateMatch | None = None
        for name, pattern, resolve in self._shapes:
            m = pattern.search(text)
            if not m:
                continue
            canonical = resolve(m)
            if canonical is not None:
                return DateMatch(raw=m.group(0), canonical=canonical, shape=name)
            if unresolved is None:
                unresolved = DateMatch(raw=m.group(0), canonical=None, shape=name)
        return unresolved

    def find_label(self, line: str) -> DateMatch | None:
        """
        Find an unrecognized date label such as "Sometime in May: ...".

        Only used when find() located nothing; the label is kept as a raw,
        unresolved date token.
        """
        m = _DATE_LABEL.match(line)
        if not m:
            return None
        label = m.group("label").strip()
        if not _TEMPORAL_CUE.search(label):
            return None
        return DateMatch(raw=label, canonical=None, shape="label")

    def has_date(self, text: str) -> bool:
        """Check whether any recognized date shape occurs in the text."""
        return any(pattern.search(text) for _, pattern, _ in self._shapes)

    @staticmethod
    def _from_month_name(m: re.Match) -> str | None:
        month = month_number(m.group("month"))
        if month is None:
            return None
        return to_canonical(int(m.group("year")), month, int(m.group("day")))

    @staticmethod
    def _from_iso(m: re.Match) -> str | None:
        return to_canonical(int(m.group("year")), int(m.group("month")), int(m.group("day")))

    def _from_numeric(self, m: re.Match) -> str | None:
        first, second = int(m.group("first")), int(m.group("second"))
        if self.slash_order == "dmy":
            day, month = first, second
        else:
            month, day = first, second
        return to_canonical(int(m.group("year")), month, day)
