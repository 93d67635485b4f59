"""Tests for the severity model."""

import pytest

from guardian_core.models.risk import Severity, max_severity


class TestSeverity:
    """Tests for Severity ordering and parsing."""

    def test_ordering(self):
        assert Severity.LOW < Severity.MEDIUM < Severity.HIGH < Severity.CRITICAL
        assert Severity.CRITICAL >= Severity.CRITICAL
        assert sorted(Severity)[0] == Severity.LOW
        assert max(Severity) == Severity.CRITICAL

    @pytest.mark.parametrize("text", ["high", "HIGH", " High "])
    def test_parse_any_casing(self, text):
        assert Severity.parse(text) == Severity.HIGH

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Severity.parse("urgent")

    def test_max_severity(self):
        assert max_severity(None, None) is None
        assert max_severity(None, Severity.LOW) == Severity.LOW
        assert max_severity(Severity.HIGH, None) == Severity.HIGH
        assert max_severity(Severity.MEDIUM, Severity.CRITICAL) == Severity.CRITICAL
