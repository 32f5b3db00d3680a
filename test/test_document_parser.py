"""
Tests for whole-document changelog parsing
"""
from datetime import datetime, timezone

from domain.changelog.parse import parse_changelog
from domain.changelog.section import Release, Verbatim
from domain.changelog.segment import PARSED, Statistics, User
from domain.changelog.version import UNRELEASED, SemanticVersion


class TestParseChangelog:
    """Test splitting a document into verbatim and release sections."""

    def test_sample_document(self, sample_changelog_text):
        """Test the prologue, release order and segment kinds of a realistic changelog."""
        changelog = parse_changelog(sample_changelog_text)
        sections = changelog.sections

        assert len(sections) == 4
        assert sections[0] == Verbatim(
            text="# Changelog\n\nAll notable changes to this project will be documented in this file.\n\n",
            generated=False,
        )
        assert [s.name for s in sections[1:]] == [UNRELEASED, SemanticVersion(1, 0, 0), SemanticVersion(0, 9, 0)]

        unreleased, v100, v090 = sections[1:]
        assert unreleased.segments == [User(markdown="### Added\n\n- a shiny new feature\n")]
        assert v100.version_prefix == "v"
        assert v100.date == datetime(2021, 9, 9, tzinfo=timezone.utc)
        assert v100.segments == [User(markdown="The first stable release.\n"), Statistics(PARSED)]
        assert v090.segments == [User(markdown="- initial preview\n")]

    def test_no_headline_is_single_verbatim(self):
        changelog = parse_changelog("just some notes\n\nmore\n")

        assert changelog.sections == [Verbatim(text="just some notes\n\nmore\n", generated=False)]

    def test_empty_text(self):
        changelog = parse_changelog("")

        assert changelog.sections == [Verbatim(text="", generated=False)]

    def test_releases_are_sorted_descending(self):
        """Test that out-of-order releases are sorted newest first."""
        text = "## 1.0.0\n\na\n\n## Unreleased\n\nb\n\n## 2.0.0\n\nc\n"
        changelog = parse_changelog(text)

        assert [s.name for s in changelog.sections] == [
            UNRELEASED,
            SemanticVersion(2, 0, 0),
            SemanticVersion(1, 0, 0),
        ]

    def test_heading_level_is_normalized_to_first_headline(self):
        text = "## 2.0.0\n\n### 1.0.0\n"
        changelog = parse_changelog(text)

        assert [s.heading_level for s in changelog.sections] == [2, 2]

    def test_text_after_last_release_belongs_to_it(self):
        text = "## 1.0.0\n\n- item\n\n[1.0.0]: https://example.com/compare\n"
        changelog = parse_changelog(text)

        assert len(changelog.sections) == 1
        release = changelog.sections[0]
        assert isinstance(release, Release)
        assert release.segments == [User(markdown="- item\n\n[1.0.0]: https://example.com/compare\n")]

    def test_non_headline_headings_stay_in_body(self):
        """Test that a heading with an invalid version is ordinary content."""
        text = "## Unreleased\n\n## Migration notes\n\ntext\n"
        changelog = parse_changelog(text)

        assert len(changelog.sections) == 1
        assert changelog.sections[0].segments == [User(markdown="## Migration notes\n\ntext\n")]

    def test_find_release(self, sample_changelog_text):
        changelog = parse_changelog(sample_changelog_text)

        assert changelog.find_release(SemanticVersion(0, 9, 0)).date == datetime(2021, 8, 1, tzinfo=timezone.utc)
        assert changelog.find_release(SemanticVersion(3, 0, 0)) is None
        assert len(list(changelog.releases())) == 3
