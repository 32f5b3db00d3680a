"""
Test configuration and fixtures
"""
import pytest
from datetime import datetime, timezone

from domain.changelog.changelog_service import reset_changelog_service
from domain.changelog.generate import CommitItem, ReleaseWindow
from domain.changelog.version import UNRELEASED, SemanticVersion


def utc(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_service():
    """Reset the global changelog service between tests."""
    reset_changelog_service()
    yield
    reset_changelog_service()


@pytest.fixture
def sample_changelog_text():
    """A hand-edited changelog with a prologue, user notes and generated segments."""
    return (
        "# Changelog\n"
        "\n"
        "All notable changes to this project will be documented in this file.\n"
        "\n"
        "## Unreleased\n"
        "\n"
        "### Added\n"
        "\n"
        "- a shiny new feature\n"
        "\n"
        "## v1.0.0 (2021-09-09)\n"
        "\n"
        "The first stable release.\n"
        "\n"
        "### Commit Statistics\n"
        "\n"
        "<csr-read-only-do-not-edit/>\n"
        "\n"
        " - 3 commits contributed to the release.\n"
        "\n"
        "## v0.9.0 (2021-08-01)\n"
        "\n"
        "- initial preview\n"
    )


@pytest.fixture
def sample_commits():
    """Commits of one release window."""
    return [
        CommitItem(id="a" * 40, title="Add parser (#12)", time=utc(2021, 9, 1), issues=["12"]),
        CommitItem(id="b" * 40, title="thanks clippy", time=utc(2021, 9, 3), issues=[]),
        CommitItem(id="c" * 40, title="Fix merge of #12 and #7", time=utc(2021, 9, 5), issues=["12", "7"]),
    ]


@pytest.fixture
def unreleased_window(sample_commits):
    return ReleaseWindow(version=UNRELEASED, commits=sample_commits)


@pytest.fixture
def release_window(sample_commits):
    return ReleaseWindow(
        version=SemanticVersion(1, 0, 0),
        commits=sample_commits,
        date=utc(2021, 9, 9),
        previous_release_date=utc(2021, 8, 1),
    )
