"""Tests for DateNormalizer."""

import pytest

from src.event_extraction.normalizer import DateNormalizer, month_number, to_canonical


class TestMonthNameShapes:
    """Tests for day-month-year and month-day-year inputs."""

    def test_ordinal_day_month_year(self, normalizer):
        assert normalizer.normalize("15th September 2024") == "2024-09-15"

    def test_plain_day_month_year(self, normalizer):
        assert normalizer.normalize("1 September 2025") == "2025-09-01"

    def test_all_ordinal_suffixes(self, normalizer):
        assert normalizer.normalize("1st March 2025") == "2025-03-01"
        assert normalizer.normalize("2nd March 2025") == "2025-03-02"
        assert normalizer.normalize("3rd March 2025") == "2025-03-03"
        assert normalizer.normalize("4th March 2025") == "2025-03-04"

    def test_month_day_comma_year(self, normalizer):
        assert normalizer.normalize("September 15, 2024") == "2024-09-15"

    def test_month_day_year_without_comma(self, normalizer):
        assert normalizer.normalize("September 15 2024") == "2024-09-15"

    def test_case_insensitive_month(self, normalizer):
        assert normalizer.normalize("15 SEPTEMBER 2024") == "2024-09-15"
        assert normalizer.normalize("15 september 2024") == "2024-09-15"

    def test_abbreviated_months(self, normalizer):
        assert normalizer.normalize("15 Sept 2025") == "2025-09-15"
        assert normalizer.normalize("Jan 5, 2026") == "2026-01-05"

    def test_date_inside_line(self, normalizer):
        line = "Monday, 22nd September 2025 - Teaching Begins"
        assert normalizer.normalize(line) == "2025-09-22"


class TestNumericShapes:
    """Tests for slash, ISO and dash inputs."""

    def test_iso(self, normalizer):
        assert normalizer.normalize("2024-09-15") == "2024-09-15"

    def test_iso_pads_single_digits(self, normalizer):
        assert normalizer.normalize("2024-9-5") == "2024-09-05"

    def test_slash_day_first_by_default(self, normalizer):
        assert normalizer.normalize("15/09/2024") == "2024-09-15"
        assert normalizer.normalize("03/04/2025") == "2025-04-03"

    def test_slash_month_first(self):
        norm = DateNormalizer("mdy")
        assert norm.normalize("09/15/2024") == "2024-09-15"
        assert norm.normalize("03/04/2025") == "2025-03-04"

    def test_dash_follows_slash_order(self):
        assert DateNormalizer("dmy").normalize("03-04-2025") == "2025-04-03"
        assert DateNormalizer("mdy").normalize("03-04-2025") == "2025-03-04"

    def test_unknown_slash_order_rejected(self):
        with pytest.raises(ValueError):
            DateNormalizer("ymd")


class TestInvalidDates:
    """Tests for inputs that must not normalize."""

    def test_empty_and_none(self, normalizer):
        assert normalizer.normalize("") is None
        assert normalizer.normalize("   ") is None
        assert normalizer.normalize(None) is None

    def test_no_date(self, normalizer):
        assert normalizer.normalize("Registration Begins") is None

    def test_impossible_day_rejected(self, normalizer):
        assert normalizer.normalize("31st February 2025") is None
        assert normalizer.normalize("2025-02-30") is None

    def test_leap_day(self, normalizer):
        assert normalizer.normalize("29 February 2024") == "2024-02-29"
        assert normalizer.normalize("29 February 2025") is None

    def test_month_out_of_range(self, normalizer):
        assert normalizer.normalize("15/13/2025") is None

    def test_month_inside_word_ignored(self, normalizer):
        assert normalizer.normalize("Grammar 2025 workshop") is None


class TestFind:
    """Tests for DateNormalizer.find()."""

    def test_returns_raw_substring(self, normalizer):
        found = normalizer.find("1st September 2025 - Registration Begins")
        assert found.raw == "1st September 2025"
        assert found.canonical == "2025-09-01"
        assert found.shape == "day_month_year"
        assert found.resolved

    def test_unresolved_match_kept(self, normalizer):
        found = normalizer.find("Deadline 45/13/2025")
        assert found is not None
        assert found.raw == "45/13/2025"
        assert found.canonical is None
        assert not found.resolved

    def test_later_valid_shape_beats_earlier_invalid(self, normalizer):
        found = normalizer.find("31st February 2025 moved to 2025-03-01")
        assert found.canonical == "2025-03-01"
        assert found.shape == "iso"

    def test_nothing_found(self, normalizer):
        assert normalizer.find("Teaching continues") is None

    def test_has_date(self, normalizer):
        assert normalizer.has_date("Exams on 15/01/2026")
        assert not normalizer.has_date("Exams next week")


class TestFindLabel:
    """Tests for loose date labels such as "Sometime in May: ..."."""

    def test_temporal_label(self, normalizer):
        found = normalizer.find_label("Sometime in the future: TBD event")
        assert found.raw == "Sometime in the future"
        assert found.canonical is None
        assert found.shape == "label"

    def test_weekday_label(self, normalizer):
        found = normalizer.find_label("Every Friday: Staff seminar")
        assert found.raw == "Every Friday"

    def test_non_temporal_label_ignored(self, normalizer):
        assert normalizer.find_label("Note: bring your student ID") is None

    @pytest.mark.parametrize(
        "line", ["Semester 1: Teaching begins", "Week 2: Orientation", "Day 3: Field work"]
    )
    def test_counter_label_ignored(self, normalizer, line):
        assert normalizer.find_label(line) is None

    def test_line_without_colon(self, normalizer):
        assert normalizer.find_label("Registration Begins") is None


class TestRoundTrip:
    """Normalizing a canonical date returns the same date."""

    @pytest.mark.parametrize(
        "raw",
        ["15th September 2024", "September 15, 2024", "15/09/2024", "2024-09-15", "15-09-2024"],
    )
    def test_canonical_is_stable(self, normalizer, raw):
        canonical = normalizer.normalize(raw)
        assert canonical == "2024-09-15"
        assert normalizer.normalize(canonical) == canonical


class TestHelpers:
    """Tests for module-level helpers."""

    def test_month_number(self):
        assert month_number("January") == 1
        assert month_number("sept") == 9
        assert month_number("Dec.") == 12
        assert month_number("Smarch") is None

    def test_to_canonical(self):
        assert to_canonical(2025, 9, 1) == "2025-09-01"
        assert to_canonical(2025, 0, 1) is None
        assert to_canonical(2025, 4, 31) is None
