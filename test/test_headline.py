"""
Tests for release headline parsing
"""
import pytest
from datetime import datetime, timezone

from domain.changelog.parse.headline import parse_headline
from domain.changelog.version import SemanticVersion


class TestParseHeadline:
    """Test the headline grammar."""

    def test_unreleased(self):
        """Test an Unreleased headline without a date."""
        headline = parse_headline("## Unreleased\n")

        assert headline.level == 2
        assert headline.version is None
        assert headline.version_prefix == ""
        assert headline.date is None

    def test_unreleased_is_case_insensitive(self):
        assert parse_headline("### unReleased") is not None

    def test_version_with_prefix_and_date(self):
        """Test a prefixed version followed by a date."""
        headline = parse_headline("### v1.0.0 (2021-09-09)\n")

        assert headline.level == 3
        assert headline.version_prefix == "v"
        assert headline.version == SemanticVersion(1, 0, 0)
        assert headline.date == datetime(2021, 9, 9, tzinfo=timezone.utc)

    def test_version_without_prefix(self):
        headline = parse_headline("# 0.3.0-alpha.2")

        assert headline.level == 1
        assert headline.version_prefix == ""
        assert headline.version == SemanticVersion.parse("0.3.0-alpha.2")

    def test_trailing_whitespace_is_allowed(self):
        assert parse_headline("## 1.0.0 (2021-01-01)   \n") is not None

    @pytest.mark.parametrize("line", [
        "Unreleased",
        "##Unreleased",
        "## Added",
        "## 1.0",
        "## 1.0.0 some words",
        "## 1.0.0(2021-01-01)",
        "## 1.0.0 (2021-13-01)",
        "## 1.0.0 (2021-02-30)",
        "## 1.0.0 (21-01-01)",
        "## 1.0.0 (\u0662\u0660\u0662\u0661-01-01)",
        "## 1.0.0 (2021-\u0660\u0661-01)",
        "## \u0661.0.0",
        "- ## 1.0.0",
    ])
    def test_not_a_headline(self, line):
        """Test lines that must be treated as ordinary content."""
        assert parse_headline(line) is None
