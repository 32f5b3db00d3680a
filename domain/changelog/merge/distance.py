"""
버전 거리 기반 삽입 위치 결정

정확히 일치하는 릴리스가 없을 때, 새 릴리스를 가장 가까운 기존 릴리스 옆에 넣습니다.
"""
import sys
from dataclasses import dataclass
from typing import List, Tuple, Union

from ..section import AnySection, Release
from ..version import SemanticVersion, Unreleased, Version

Distance = Tuple[int, int, int]

MAX_DISTANCE: Distance = (sys.maxsize, sys.maxsize, sys.maxsize)
ZERO_DISTANCE: Distance = (0, 0, 0)


@dataclass(frozen=True)
class MergeWith:
    """기존 섹션과 병합"""
    position: int


@dataclass(frozen=True)
class InsertAt:
    """해당 위치에 새 섹션 삽입"""
    position: int


Insertion = Union[MergeWith, InsertAt]


def version_distance(existing: Version, wanted: SemanticVersion) -> Distance:
    """(wanted - existing)의 major/minor/patch 성분별 부호 있는 거리"""
    if isinstance(existing, Unreleased):
        return MAX_DISTANCE
    return (
        wanted.major - existing.major,
        wanted.minor - existing.minor,
        wanted.patch - existing.patch,
    )


def abs_distance(distance: Distance) -> Distance:
    major, minor, patch = distance
    return (abs(major), abs(minor), abs(patch))


def find_target_section(wanted: Version, sections: List[AnySection], first_release_index: int) -> Insertion:
    """
    생성된 릴리스가 들어갈 위치 결정

    1. 같은 버전의 릴리스가 있으면 그 섹션과 병합
    2. Unreleased는 첫 릴리스(앵커) 위치에 삽입
    3. 그 외에는 절대 거리가 가장 작은 섹션을 찾고 (동률이면 먼저 나온 섹션),
       부호 있는 거리가 음수(더 오래된 버전)면 그 뒤에, 아니면 그 앞에 삽입
    """
    if not sections:
        return InsertAt(0)

    for index, section in enumerate(sections):
        if isinstance(section, Release) and section.name == wanted:
            return MergeWith(index)

    if isinstance(wanted, Unreleased):
        return InsertAt(first_release_index)

    position = None
    min_distance = MAX_DISTANCE
    for index, section in enumerate(sections):
        if isinstance(section, Release):
            distance = version_distance(section.name, wanted)
        else:
            distance = MAX_DISTANCE
        if abs_distance(distance) < abs_distance(min_distance):
            min_distance = distance
            position = index

    if position is None:
        # 비교할 대상이 없으면 맨 끝에 추가
        position = len(sections)

    if min_distance < ZERO_DISTANCE:
        return InsertAt(position + 1)
    return InsertAt(position)
