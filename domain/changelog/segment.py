"""
릴리스 섹션 본문 세그먼트 모델

Segment = User | Clippy | Statistics | Details

- User: 사람이 작성/편집한 마크다운 (생성기는 절대 만들지 않음)
- Clippy / Statistics / Details: 커밋 히스토리로부터 생성되는 읽기 전용 세그먼트.
  파싱된 문서에서는 본문 대신 PARSED 마커만 가지며, 생성된 문서에서는 항상 실제 페이로드를 가진다.
"""
import enum
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Parsed:
    """기존 문서에서 해당 세그먼트 제목만 인식했음을 나타내는 마커 (본문은 항상 재생성)"""


PARSED = Parsed()


# ============================================================
# 생성 페이로드
# ============================================================

@dataclass(frozen=True)
class Category:
    """커밋 분류: 이슈 번호(`#123`) 또는 Uncategorized(issue=None)"""
    issue: Optional[str] = None

    @property
    def is_uncategorized(self) -> bool:
        return self.issue is None

    def sort_key(self) -> Tuple[bool, str]:
        # 이슈 분류가 Uncategorized보다 먼저 온다
        return (self.issue is None, self.issue or "")

    def __str__(self) -> str:
        if self.issue is None:
            return "Uncategorized"
        return f"#{self.issue}"


UNCATEGORIZED = Category()


@dataclass(frozen=True)
class Message:
    """상세 목록에 표시되는 커밋 하나"""
    title: str
    id: str


@dataclass
class CommitDetails:
    """분류별 커밋 목록"""
    commits_by_category: Dict[Category, List[Message]] = field(default_factory=dict)

    TITLE = "Commit Details"
    HTML_PREFIX = "<details><summary>view details</summary>"
    HTML_PREFIX_END = "</details>"

    def sorted_categories(self) -> List[Category]:
        return sorted(self.commits_by_category, key=Category.sort_key)


@dataclass
class CommitStatistics:
    """릴리스에 기여한 커밋 통계"""
    # 릴리스에 포함된 커밋 수
    count: int
    # 첫 커밋부터 마지막 커밋까지의 기간 (커밋이 둘 이상일 때만)
    duration: Optional[timedelta] = None
    # 커밋 메시지에서 참조된 이슈들
    unique_issues: List[Category] = field(default_factory=list)
    # 직전 릴리스로부터 지난 시간 (첫 릴리스가 아닐 때만)
    time_passed_since_last_release: Optional[timedelta] = None

    TITLE = "Commit Statistics"


@dataclass
class ThanksClippy:
    count: int

    TITLE = "Thanks Clippy"


class Selection(enum.Flag):
    """생성/렌더링할 읽기 전용 세그먼트 선택"""
    NONE = 0
    CLIPPY = enum.auto()
    COMMIT_DETAILS = enum.auto()
    COMMIT_STATISTICS = enum.auto()

    @classmethod
    def all(cls) -> "Selection":
        return cls.CLIPPY | cls.COMMIT_DETAILS | cls.COMMIT_STATISTICS

    @classmethod
    def parse(cls, text: str) -> "Selection":
        """
        쉼표로 구분된 설정 문자열 파싱 (예: "clippy,commit-details")

        Raises:
            ValueError: 알 수 없는 항목이 있는 경우
        """
        names = {
            "clippy": cls.CLIPPY,
            "commit-details": cls.COMMIT_DETAILS,
            "commit-statistics": cls.COMMIT_STATISTICS,
        }
        selection = cls.NONE
        for raw in re.split(r"[,\s]+", text.strip()):
            if not raw:
                continue
            name = raw.lower().replace("_", "-")
            if name == "all":
                selection |= cls.all()
            elif name in names:
                selection |= names[name]
            else:
                raise ValueError(f"Unknown changelog segment selection: {raw!r}")
        return selection


# ============================================================
# 세그먼트
# ============================================================

class Segment:
    """세그먼트 공통 베이스"""

    def is_read_only(self) -> bool:
        return False


@dataclass
class User(Segment):
    markdown: str


@dataclass
class Clippy(Segment):
    data: Union[ThanksClippy, Parsed]

    def is_read_only(self) -> bool:
        return True


@dataclass
class Statistics(Segment):
    data: Union[CommitStatistics, Parsed]

    def is_read_only(self) -> bool:
        return True


@dataclass
class Details(Segment):
    data: Union[CommitDetails, Parsed]

    def is_read_only(self) -> bool:
        return True


ReadOnlySegment = Union[Clippy, Statistics, Details]

# 인식 대상 소제목 -> 파싱 시 생성할 마커 세그먼트 타입
READ_ONLY_TITLES = (
    (ThanksClippy.TITLE, Clippy),
    (CommitStatistics.TITLE, Statistics),
    (CommitDetails.TITLE, Details),
)
