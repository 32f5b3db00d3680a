"""
Changelog 문서 구조

ChangeLog는 Section의 순서 있는 목록이며, 순서 자체가 문서 구조를 나타냅니다.

Section = Verbatim | Release
- Verbatim: 헤드라인이 없는 텍스트 (문서 맨 앞/맨 뒤에만 위치)
- Release: 버전 헤드라인과 그 본문
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional, Union

from .segment import Segment
from .version import Version


class Section:
    """섹션 공통 베이스"""

    UNKNOWN_TAG_START = "<csr-unknown>"
    UNKNOWN_TAG_END = "<csr-unknown/>"
    READ_ONLY_TAG = "<csr-read-only-do-not-edit/>"


@dataclass
class Verbatim(Section):
    text: str
    generated: bool = False


@dataclass(frozen=True)
class UnknownBlock:
    """센티널 구간 하나: 앞에 오는 세그먼트 수(position)와 원문"""
    position: int
    text: str


@dataclass
class Release(Section):
    name: Version
    version_prefix: str = ""
    date: Optional[datetime] = None
    heading_level: int = 2
    segments: List[Segment] = field(default_factory=list)
    # 구조적으로 분류하지 못한 센티널 구간 내용 (바이트 단위로 보존)
    unknown: str = ""
    removed_messages: List[str] = field(default_factory=list)
    # unknown을 구성하는 구간들의 원래 위치 (렌더링 시 같은 자리에 다시 씀)
    unknown_blocks: List[UnknownBlock] = field(default_factory=list)


AnySection = Union[Verbatim, Release]


@dataclass
class ChangeLog:
    sections: List[AnySection] = field(default_factory=list)

    def releases(self) -> Iterator[Release]:
        for section in self.sections:
            if isinstance(section, Release):
                yield section

    def find_release(self, version: Version) -> Optional[Release]:
        for release in self.releases():
            if release.name == version:
                return release
        return None
