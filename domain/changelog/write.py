"""
Changelog 마크다운 렌더링 모듈

병합된 ChangeLog를 디스크에 쓸 텍스트로 변환합니다.
User 세그먼트는 원문 그대로 쓰고, 생성 세그먼트는 페이로드로부터 매번 같은 결과를 만듭니다.
"""
from datetime import timedelta
from typing import List, Optional

from .repository_url import RepositoryUrl
from .section import ChangeLog, Release, Section, Verbatim
from .segment import (
    Category,
    Clippy,
    CommitDetails,
    CommitStatistics,
    Details,
    Parsed,
    Segment,
    Selection,
    Statistics,
    ThanksClippy,
    User,
)
from .version import Unreleased

SHORT_ID_LENGTH = 7


def _plural(count: int, singular: str, plural: Optional[str] = None) -> str:
    if count == 1:
        return f"{count} {singular}"
    return f"{count} {plural or singular + 's'}"


def _days(duration: timedelta) -> int:
    return max(duration.days, 0)


def release_heading(release: Release) -> str:
    """'## v1.0.0 (2021-09-09)' 형태의 헤드라인"""
    if isinstance(release.name, Unreleased):
        title = "Unreleased"
    else:
        title = f"{release.version_prefix}{release.name}"
    heading = f"{'#' * release.heading_level} {title}"
    if release.date is not None:
        heading += f" ({release.date:%Y-%m-%d})"
    return heading


class MarkdownWriter:
    """ChangeLog -> 마크다운 텍스트"""

    def __init__(self, selection: Selection = Selection.all(), repository_url: Optional[str] = None):
        self.selection = selection
        self.repository = RepositoryUrl(repository_url) if repository_url else None

    # ------------------------------------------------------------
    # 링크
    # ------------------------------------------------------------

    def _category_label(self, category: Category) -> str:
        if category.is_uncategorized or self.repository is None:
            return str(category)
        url = self.repository.issue_url(category.issue)
        return f"[{category}]({url})" if url else str(category)

    def _commit_label(self, commit_id: str) -> str:
        short_id = commit_id[:SHORT_ID_LENGTH]
        url = self.repository.commit_url(commit_id) if self.repository else None
        return f"[`{short_id}`]({url})" if url else short_id

    # ------------------------------------------------------------
    # 세그먼트 본문
    # ------------------------------------------------------------

    def _clippy_body(self, clippy: ThanksClippy) -> List[str]:
        return [
            f"[Clippy](https://github.com/rust-lang/rust-clippy) helped {_plural(clippy.count, 'time')} "
            "to make code idiomatic."
        ]

    def _statistics_body(self, stats: CommitStatistics) -> List[str]:
        line = f" - {_plural(stats.count, 'commit')} contributed to the release"
        if stats.duration is not None:
            line += f" over the course of {_plural(_days(stats.duration), 'calendar day')}"
        lines = [line + "."]
        if stats.time_passed_since_last_release is not None:
            lines.append(f" - {_plural(_days(stats.time_passed_since_last_release), 'day')} passed between releases.")
        if stats.unique_issues:
            verb = "was" if len(stats.unique_issues) == 1 else "were"
            issues = ", ".join(self._category_label(c) for c in stats.unique_issues)
            lines.append(f" - {_plural(len(stats.unique_issues), 'unique issue')} {verb} worked on: {issues}")
        else:
            lines.append(" - 0 issues like '(#ID)' were seen in commit messages")
        return lines

    def _details_body(self, details: CommitDetails) -> List[str]:
        lines = [CommitDetails.HTML_PREFIX, ""]
        for category in details.sorted_categories():
            lines.append(f" * **{self._category_label(category)}**")
            for message in details.commits_by_category[category]:
                lines.append(f"    - {message.title} ({self._commit_label(message.id)})")
        lines.append(CommitDetails.HTML_PREFIX_END)
        return lines

    def _read_only_segment(self, segment: Segment, level: int) -> Optional[str]:
        if isinstance(segment, Clippy):
            flag, title, body = Selection.CLIPPY, ThanksClippy.TITLE, self._clippy_body
        elif isinstance(segment, Statistics):
            flag, title, body = Selection.COMMIT_STATISTICS, CommitStatistics.TITLE, self._statistics_body
        elif isinstance(segment, Details):
            flag, title, body = Selection.COMMIT_DETAILS, CommitDetails.TITLE, self._details_body
        else:
            raise TypeError(f"Unsupported segment: {segment!r}")

        if not self.selection & flag:
            return None
        heading = f"{'#' * level} {title}\n"
        if isinstance(segment.data, Parsed):
            # 제목만 남겨서 다시 파싱하면 같은 마커가 되도록 함
            return heading
        lines = ["", Section.READ_ONLY_TAG, ""] + body(segment.data)
        return heading + "\n".join(lines) + "\n"

    # ------------------------------------------------------------
    # 섹션
    # ------------------------------------------------------------

    @staticmethod
    def _unknown_block(text: str) -> str:
        if text and not text.endswith("\n"):
            text += "\n"
        return f"{Section.UNKNOWN_TAG_START}\n{text}{Section.UNKNOWN_TAG_END}\n\n"

    def write_release(self, release: Release) -> str:
        parts = [release_heading(release) + "\n\n"]
        # 위치가 기록된 센티널 구간은 원래 자리의 세그먼트 앞에 쓴다
        pending_blocks = sorted(release.unknown_blocks, key=lambda block: block.position)
        for index, segment in enumerate(release.segments):
            while pending_blocks and pending_blocks[0].position <= index:
                parts.append(self._unknown_block(pending_blocks.pop(0).text))
            if isinstance(segment, User):
                text = segment.markdown
            else:
                text = self._read_only_segment(segment, release.heading_level + 1)
                if text is None:
                    continue
            if not text.endswith("\n"):
                text += "\n"
            parts.append(text + "\n")
        for block in pending_blocks:
            parts.append(self._unknown_block(block.text))
        if release.unknown and not release.unknown_blocks:
            parts.append(self._unknown_block(release.unknown))
        return "".join(parts)

    def write(self, changelog: ChangeLog) -> str:
        parts = []
        for section in changelog.sections:
            if isinstance(section, Verbatim):
                text = section.text
                if text and not text.endswith("\n"):
                    text += "\n"
                parts.append(text)
            else:
                parts.append(self.write_release(section))
        return "".join(parts)


def render_changelog(
    changelog: ChangeLog,
    selection: Selection = Selection.all(),
    repository_url: Optional[str] = None,
) -> str:
    """ChangeLog를 마크다운 텍스트로 렌더링"""
    return MarkdownWriter(selection=selection, repository_url=repository_url).write(changelog)
