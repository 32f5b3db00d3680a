"""
Changelog 생성 모듈

릴리스 구간별 커밋 목록으로부터 생성된(generated) ChangeLog를 만듭니다.
결과는 항상 생성 문서 불변식(User/PARSED/unknown 없음, Verbatim은 맨 앞)을 만족합니다.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from app.logging_config import get_logger

from .section import ChangeLog, Release, Verbatim
from .segment import (
    UNCATEGORIZED,
    Category,
    Clippy,
    CommitDetails,
    CommitStatistics,
    Details,
    Message,
    Segment,
    Selection,
    Statistics,
    ThanksClippy,
)
from .version import Version

logger = get_logger("generate")

ISSUE_PATTERN = re.compile(r"#([0-9]+)\b")
CLIPPY_TITLE_PREFIX = "thanks clippy"

DEFAULT_PROLOGUE = (
    "# Changelog\n"
    "\n"
    "All notable changes to this project will be documented in this file.\n"
    "\n"
    "The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/),\n"
    "and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).\n"
    "\n"
)


@dataclass
class CommitItem:
    """커밋 히스토리 항목"""
    id: str
    title: str
    time: Optional[datetime] = None
    issues: List[str] = field(default_factory=list)


@dataclass
class ReleaseWindow:
    """하나의 릴리스에 속하는 커밋 구간"""
    version: Version
    commits: List[CommitItem] = field(default_factory=list)
    date: Optional[datetime] = None
    previous_release_date: Optional[datetime] = None


def extract_issues(title: str) -> List[str]:
    """커밋 제목에서 '#123' 형태의 이슈 번호 추출 (중복 제거, 등장 순서 유지)"""
    seen: Dict[str, None] = {}
    for issue in ISSUE_PATTERN.findall(title):
        seen.setdefault(issue, None)
    return list(seen)


def _categories(commit: CommitItem) -> List[Category]:
    if not commit.issues:
        return [UNCATEGORIZED]
    return [Category(issue=issue) for issue in commit.issues]


def build_statistics(window: ReleaseWindow) -> CommitStatistics:
    times = [c.time for c in window.commits if c.time is not None]
    duration = None
    if len(window.commits) > 1 and len(times) > 1:
        duration = max(times) - min(times)

    unique = {Category(issue=i) for c in window.commits for i in c.issues}

    time_passed = None
    if window.previous_release_date is not None:
        reference = window.date or (max(times) if times else None)
        if reference is not None:
            time_passed = reference - window.previous_release_date

    return CommitStatistics(
        count=len(window.commits),
        duration=duration,
        unique_issues=sorted(unique, key=Category.sort_key),
        time_passed_since_last_release=time_passed,
    )


def build_details(window: ReleaseWindow) -> CommitDetails:
    grouped: Dict[Category, List[Message]] = {}
    for commit in window.commits:
        for category in _categories(commit):
            grouped.setdefault(category, []).append(Message(title=commit.title, id=commit.id))
    return CommitDetails(
        commits_by_category={c: grouped[c] for c in sorted(grouped, key=Category.sort_key)}
    )


def build_clippy(window: ReleaseWindow) -> Optional[ThanksClippy]:
    count = sum(1 for c in window.commits if c.title.lower().startswith(CLIPPY_TITLE_PREFIX))
    return ThanksClippy(count=count) if count else None


def generate_release(window: ReleaseWindow, selection: Selection = Selection.all()) -> Release:
    """
    릴리스 구간 하나로부터 생성된 Release 섹션 만들기

    Args:
        window: 버전, 커밋 목록, 날짜 정보
        selection: 생성할 읽기 전용 세그먼트 종류

    Returns:
        heading_level=2, 접두사 없는 Release (병합 시 앵커 스타일로 바뀜)
    """
    segments: List[Segment] = []
    if window.commits:
        if selection & Selection.CLIPPY:
            clippy = build_clippy(window)
            if clippy is not None:
                segments.append(Clippy(clippy))
        if selection & Selection.COMMIT_STATISTICS:
            segments.append(Statistics(build_statistics(window)))
        if selection & Selection.COMMIT_DETAILS:
            segments.append(Details(build_details(window)))

    logger.debug("Generated release", extra={
        "version": str(window.version),
        "commits": len(window.commits),
        "segments": len(segments),
    })
    return Release(
        name=window.version,
        version_prefix="",
        date=window.date,
        heading_level=2,
        segments=segments,
        unknown="",
        removed_messages=[],
    )


def generate_changelog(
    windows: Iterable[ReleaseWindow],
    selection: Selection = Selection.all(),
    prologue: Optional[str] = DEFAULT_PROLOGUE,
) -> ChangeLog:
    """생성된 머리말 + 최신순 릴리스로 구성된 ChangeLog 생성"""
    releases = [generate_release(window, selection) for window in windows]
    releases.sort(key=lambda release: release.name, reverse=True)
    sections = [Verbatim(text=prologue, generated=True)] if prologue else []
    return ChangeLog(sections=sections + releases)
