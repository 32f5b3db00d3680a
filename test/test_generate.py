"""
Tests for generating changelogs from commit history
"""
from datetime import datetime, timedelta, timezone

from domain.changelog.generate import (
    DEFAULT_PROLOGUE,
    CommitItem,
    ReleaseWindow,
    build_clippy,
    build_details,
    build_statistics,
    extract_issues,
    generate_changelog,
    generate_release,
)
from domain.changelog.merge import validate_generated
from domain.changelog.section import Verbatim
from domain.changelog.segment import (
    UNCATEGORIZED,
    Category,
    Clippy,
    Details,
    Message,
    Selection,
    Statistics,
)
from domain.changelog.version import UNRELEASED, SemanticVersion


class TestExtractIssues:
    """Test issue extraction from commit titles."""

    def test_issues_in_order_without_duplicates(self):
        assert extract_issues("Fix #7 and #12, again #7") == ["7", "12"]

    def test_no_issues(self):
        assert extract_issues("Refactor parser") == []


class TestBuilders:
    """Test payload builders."""

    def test_statistics(self, release_window):
        stats = build_statistics(release_window)

        assert stats.count == 3
        assert stats.duration == timedelta(days=4)
        assert stats.unique_issues == [Category("12"), Category("7")]
        assert stats.time_passed_since_last_release == timedelta(days=39)

    def test_statistics_single_commit_has_no_duration(self):
        window = ReleaseWindow(version=UNRELEASED, commits=[CommitItem(id="a", title="one")])
        stats = build_statistics(window)

        assert stats.count == 1
        assert stats.duration is None
        assert stats.unique_issues == []
        assert stats.time_passed_since_last_release is None

    def test_details_grouped_by_category(self, release_window):
        details = build_details(release_window)

        assert details.sorted_categories() == [Category("12"), Category("7"), UNCATEGORIZED]
        assert details.commits_by_category[Category("12")] == [
            Message(title="Add parser (#12)", id="a" * 40),
            Message(title="Fix merge of #12 and #7", id="c" * 40),
        ]
        assert details.commits_by_category[UNCATEGORIZED] == [Message(title="thanks clippy", id="b" * 40)]

    def test_clippy_counts_thanks_commits(self, release_window):
        assert build_clippy(release_window).count == 1

    def test_clippy_absent_without_thanks_commits(self):
        window = ReleaseWindow(version=UNRELEASED, commits=[CommitItem(id="a", title="Add feature")])

        assert build_clippy(window) is None


class TestGenerateRelease:
    """Test generation of a single release."""

    def test_all_segments(self, release_window):
        release = generate_release(release_window)

        assert release.name == SemanticVersion(1, 0, 0)
        assert release.heading_level == 2
        assert release.version_prefix == ""
        assert release.date == datetime(2021, 9, 9, tzinfo=timezone.utc)
        assert [type(s) for s in release.segments] == [Clippy, Statistics, Details]
        assert release.unknown == ""

    def test_selection_limits_segments(self, release_window):
        release = generate_release(release_window, Selection.COMMIT_DETAILS)

        assert [type(s) for s in release.segments] == [Details]

    def test_no_commits_no_segments(self):
        release = generate_release(ReleaseWindow(version=UNRELEASED))

        assert release.segments == []


class TestGenerateChangelog:
    """Test generation of a whole changelog."""

    def test_prologue_then_releases_newest_first(self, release_window, unreleased_window):
        changelog = generate_changelog([release_window, unreleased_window])

        assert changelog.sections[0] == Verbatim(text=DEFAULT_PROLOGUE, generated=True)
        assert [s.name for s in changelog.sections[1:]] == [UNRELEASED, SemanticVersion(1, 0, 0)]

    def test_without_prologue(self, unreleased_window):
        changelog = generate_changelog([unreleased_window], prologue=None)

        assert [s.name for s in changelog.sections] == [UNRELEASED]

    def test_generated_changelog_satisfies_invariants(self, release_window, unreleased_window):
        validate_generated(generate_changelog([release_window, unreleased_window]))
