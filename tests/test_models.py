"""Tests for sync data models."""

import pytest
from pydantic import ValidationError

from template_sync.sync.classifier import classify_file
from template_sync.sync.hasher import content_hash
from template_sync.sync.models import (
    ClassificationReport,
    ComparisonResult,
    FileAction,
    LineRange,
)


class TestLineRange:
    def test_single_line_str(self):
        assert str(LineRange(start=12, end=12)) == "12"

    def test_span_str(self):
        assert str(LineRange(start=12, end=20)) == "12-20"

    def test_length(self):
        assert LineRange(start=3, end=7).length == 5


class TestFrozen:
    def test_line_range_immutable(self):
        r = LineRange(start=1, end=2)
        with pytest.raises(ValidationError):
            r.start = 5

    def test_file_state_immutable(self):
        state = classify_file("a.md", None, None, None)
        with pytest.raises(ValidationError):
            state.action = FileAction.ADD


class TestComparisonResult:
    def test_defaults(self):
        result = ComparisonResult()
        assert result.has_changes is False
        assert result.context_lines == 3


class TestClassificationReport:
    def test_filters_and_summary(self):
        base = content_hash("base")
        report = ClassificationReport(
            states=[
                classify_file("a.md", None, None, base),
                classify_file("b.md", base, base, None),
                classify_file("c.md", base, base, base),
            ],
            errors={"d.md": "boom"},
            started_at="2026-01-01T00:00:00+00:00",
        )
        assert [s.path for s in report.to_add] == ["a.md"]
        assert [s.path for s in report.to_remove] == ["b.md"]
        assert [s.path for s in report.skipped] == ["c.md"]
        assert report.conflicts == []

        summary = report.summary()
        assert "Add:       1" in summary
        assert "Errors:    1" in summary
        assert "Total:     4" in summary
