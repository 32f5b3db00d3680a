"""
Tests for version module
"""
import pytest

from domain.changelog.version import UNRELEASED, SemanticVersion, Unreleased, parse_version


class TestSemanticVersion:
    """Test SemVer parsing and precedence."""

    def test_parse_full_version(self):
        """Test parsing a version with prerelease and build metadata."""
        version = SemanticVersion.parse("1.2.3-alpha.1+build.5")

        assert (version.major, version.minor, version.patch) == (1, 2, 3)
        assert version.prerelease == ("alpha", "1")
        assert version.build == ("build", "5")
        assert str(version) == "1.2.3-alpha.1+build.5"

    @pytest.mark.parametrize("text", ["1.2", "01.2.3", "1.2.3-", "foo", "1.2.3.4", "", "\u0661.2.3", "1.2.3-\u0662"])
    def test_parse_rejects_invalid(self, text):
        """Test that non-SemVer strings are rejected."""
        with pytest.raises(ValueError):
            SemanticVersion.parse(text)

    def test_precedence_order(self):
        """Test the precedence example from semver.org."""
        ordered = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
            "1.0.1",
            "1.1.0",
            "2.0.0",
        ]
        versions = [SemanticVersion.parse(text) for text in ordered]

        assert sorted(reversed(versions)) == versions

    def test_numeric_components_compare_numerically(self):
        """Test that 1.10.0 is newer than 1.9.0."""
        assert SemanticVersion.parse("1.10.0") > SemanticVersion.parse("1.9.0")


class TestUnreleased:
    """Test the Unreleased version."""

    def test_unreleased_is_greater_than_any_release(self):
        """Test that Unreleased sorts above every semantic version."""
        assert UNRELEASED > SemanticVersion(999, 0, 0)
        assert SemanticVersion(0, 0, 1) < UNRELEASED

    def test_unreleased_equality(self):
        """Test that all Unreleased values are equal."""
        assert Unreleased() == UNRELEASED
        assert not UNRELEASED < Unreleased()

    def test_sorting_descending(self):
        """Test sorting a mixed list newest first."""
        versions = [SemanticVersion(1, 0, 0), UNRELEASED, SemanticVersion(2, 0, 0)]

        assert sorted(versions, reverse=True) == [UNRELEASED, SemanticVersion(2, 0, 0), SemanticVersion(1, 0, 0)]


class TestParseVersion:
    """Test parse_version helper."""

    @pytest.mark.parametrize("text", ["Unreleased", "unreleased", " UNRELEASED "])
    def test_unreleased(self, text):
        assert parse_version(text) == UNRELEASED

    def test_v_prefix_is_accepted(self):
        assert parse_version("v1.2.3") == SemanticVersion(1, 2, 3)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_version("next")
