"""Tests for line segmentation and LineClassifier."""

from src.event_extraction.classifier import (
    has_reliable_line_breaks,
    segment_lines,
    split_blocks,
)
from src.event_extraction.schemas import LineContext


class TestSegmentation:
    """Tests for segment_lines() and split_blocks()."""

    def test_segment_lines_handles_all_line_endings(self):
        assert segment_lines("a\r\n\n  b  \rc\n") == ["a", "b", "c"]

    def test_segment_empty(self):
        assert segment_lines("") == []
        assert segment_lines("\n \n") == []

    def test_split_blocks_before_weekdays_and_dates(self, column_text):
        blocks = split_blocks(column_text)
        starts = [block.strip().split()[0] for _, block in blocks]
        assert starts[:4] == ["Monday", "1st", "Tuesday", "2nd"]

    def test_split_blocks_offsets(self):
        text = "Intro Monday 1st September 2025 Registration"
        blocks = split_blocks(text)
        for offset, block in blocks:
            assert text[offset:offset + len(block)] == block
        assert blocks[0][1] == "Intro "

    def test_split_blocks_empty(self):
        assert split_blocks("") == []

    def test_reliable_line_breaks(self, almanac_text, column_text):
        assert has_reliable_line_breaks(almanac_text, 160)
        assert not has_reliable_line_breaks(column_text, 160)
        assert not has_reliable_line_breaks("", 160)


class TestSectionHeaders:
    """Tests for section header detection."""

    def test_structural_phrase(self, classifier):
        assert classifier.is_section_header("FIRST SEMESTER")
        assert classifier.is_section_header("ACADEMIC CALENDAR 2025/2026 FOR ALL UNDERGRADUATE PROGRAMMES")

    def test_short_upper_case_line(self, classifier):
        assert classifier.is_section_header("UNIVERSITY OF DAR ES SALAAM")

    def test_too_many_words(self, classifier):
        assert not classifier.is_section_header("THIS LINE HAS FAR TOO MANY WORDS TO COUNT")

    def test_mixed_case_is_not_header(self, classifier):
        assert not classifier.is_section_header("Registration Begins")

    def test_line_with_date_is_never_header(self, classifier):
        assert not classifier.is_section_header("1ST SEPTEMBER 2025 - REGISTRATION")


class TestLineClassification:
    """Tests for LineClassifier.step()."""

    def test_header_updates_section(self, classifier):
        context, item = classifier.step(LineContext(), "FIRST SEMESTER", 0)
        assert item.is_section_header
        assert not item.is_event_line
        assert context.section == "FIRST SEMESTER"

    def test_resolved_date_updates_current_date(self, classifier):
        context, item = classifier.step(
            LineContext(section="FIRST SEMESTER"),
            "1st September 2025 - Registration Begins",
            3,
        )
        assert item.is_date_bearing
        assert item.is_event_line
        assert item.has_keyword
        assert item.index == 3
        assert context.current_date == "2025-09-01"
        assert context.section == "FIRST SEMESTER"

    def test_unresolved_date_keeps_current_date(self, classifier):
        start = LineContext(current_date="2025-09-01")
        context, item = classifier.step(start, "Sometime in the future: TBD event", 1)
        assert item.date.raw == "Sometime in the future"
        assert not item.date.resolved
        assert context.current_date == "2025-09-01"

    def test_step_does_not_mutate_context(self, classifier):
        start = LineContext()
        classifier.step(start, "FIRST SEMESTER", 0)
        assert start.section == ""
        assert start.current_date is None

    def test_activity_line_without_keyword(self, classifier):
        _, item = classifier.step(LineContext(), "Lunch starts at noon", 0)
        assert item.is_event_line
        assert not item.is_strong

    def test_plain_text_is_not_event(self, classifier):
        _, item = classifier.step(LineContext(), "Dar es Salaam, Tanzania", 0)
        assert not item.is_event_line


class TestScan:
    """Tests for folding step() over a document."""

    def test_context_threads_through_lines(self, classifier, almanac_text):
        results = list(classifier.scan(segment_lines(almanac_text)))
        by_line = {item.line: context for context, item in results}

        assert by_line["Mid Semester Test"].current_date == "2025-09-22"
        assert by_line["Mid Semester Test"].section == "FIRST SEMESTER"
        assert by_line["8th December 2025 - University Examinations Begin"].section == (
            "EXAMINATION PERIOD"
        )

    def test_scan_indices_are_sequential(self, classifier, almanac_text):
        lines = segment_lines(almanac_text)
        indices = [item.index for _, item in classifier.scan(lines)]
        assert indices == list(range(len(lines)))
