from datetime import date, datetime, time, timezone
from typing import List, Optional

from pydantic import BaseModel

from .generate import CommitItem, ReleaseWindow, extract_issues
from .section import ChangeLog, Release, Verbatim
from .segment import Clippy, Details, Parsed, Segment, Statistics, User
from .version import Unreleased, parse_version


def _utc_midnight(day: Optional[date]) -> Optional[datetime]:
    if day is None:
        return None
    return datetime.combine(day, time(0, 0), tzinfo=timezone.utc)


# 1. 요청 스키마
class CommitSchema(BaseModel):
    id: str
    title: str
    time: Optional[datetime] = None
    issues: Optional[List[str]] = None  # 생략하면 제목의 '#123'에서 추출

    def to_item(self) -> CommitItem:
        issues = self.issues if self.issues is not None else extract_issues(self.title)
        return CommitItem(id=self.id, title=self.title, time=self.time, issues=list(issues))


class ReleaseWindowSchema(BaseModel):
    version: str = "Unreleased"
    release_date: Optional[date] = None
    previous_release_date: Optional[date] = None
    commits: List[CommitSchema] = []

    def to_window(self) -> ReleaseWindow:
        """ValueError: 버전 문자열이 잘못된 경우"""
        return ReleaseWindow(
            version=parse_version(self.version),
            commits=[commit.to_item() for commit in self.commits],
            date=_utc_midnight(self.release_date),
            previous_release_date=_utc_midnight(self.previous_release_date),
        )


class ParseRequest(BaseModel):
    markdown: str


class GenerateRequest(BaseModel):
    release: ReleaseWindowSchema
    selection: Optional[str] = None
    repository_url: Optional[str] = None


class MergeRequest(BaseModel):
    markdown: str
    releases: List[ReleaseWindowSchema] = []
    include_prologue: bool = True
    selection: Optional[str] = None
    repository_url: Optional[str] = None


# 2. 응답 스키마
class SegmentResponse(BaseModel):
    kind: str  # user / clippy / statistics / details
    markdown: Optional[str] = None
    parsed: bool = False


class SectionResponse(BaseModel):
    kind: str  # verbatim / release
    text: Optional[str] = None
    generated: Optional[bool] = None
    version: Optional[str] = None
    version_prefix: Optional[str] = None
    date: Optional[datetime] = None
    heading_level: Optional[int] = None
    segments: List[SegmentResponse] = []
    unknown: Optional[str] = None


class ChangeLogResponse(BaseModel):
    sections: List[SectionResponse]

    @classmethod
    def from_changelog(cls, changelog: ChangeLog) -> "ChangeLogResponse":
        return cls(sections=[_section_response(section) for section in changelog.sections])


class ChangeLogFileResponse(BaseModel):
    path: str
    markdown: str
    changelog: ChangeLogResponse


class GenerateResponse(BaseModel):
    markdown: str


class MergeResponse(BaseModel):
    markdown: str
    changed: bool
    changelog: ChangeLogResponse


_SEGMENT_KINDS = ((User, "user"), (Clippy, "clippy"), (Statistics, "statistics"), (Details, "details"))


def _segment_response(segment: Segment) -> SegmentResponse:
    kind = next(name for segment_type, name in _SEGMENT_KINDS if isinstance(segment, segment_type))
    if isinstance(segment, User):
        return SegmentResponse(kind=kind, markdown=segment.markdown)
    return SegmentResponse(kind=kind, parsed=isinstance(segment.data, Parsed))


def _section_response(section) -> SectionResponse:
    if isinstance(section, Verbatim):
        return SectionResponse(kind="verbatim", text=section.text, generated=section.generated)
    assert isinstance(section, Release)
    return SectionResponse(
        kind="release",
        version="Unreleased" if isinstance(section.name, Unreleased) else str(section.name),
        version_prefix=section.version_prefix,
        date=section.date,
        heading_level=section.heading_level,
        segments=[_segment_response(segment) for segment in section.segments],
        unknown=section.unknown,
    )
