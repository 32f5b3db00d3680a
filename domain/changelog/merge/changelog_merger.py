"""
Changelog 병합 모듈

파싱된(권위 있는) changelog에 새로 생성된 changelog를 합쳐, 사람이 편집한 내용은 그대로 두고
생성 내용만 갱신합니다. 두 입력은 변경하지 않고 새 ChangeLog를 반환합니다.
"""
import copy
from collections import deque
from typing import Deque, List

from app.logging_config import get_logger

from ..errors import ContractViolation
from ..section import AnySection, ChangeLog, Release, Verbatim
from ..segment import Parsed, User
from .distance import InsertAt, MergeWith, find_target_section
from .section_merger import merge_release

logger = get_logger("changelog_merger")


def validate_generated(generated: ChangeLog) -> None:
    """
    생성된 changelog의 불변식 검사

    - Verbatim은 맨 앞에만, 그리고 generated=True여야 함
    - Release에는 unknown 내용, User 세그먼트, PARSED 마커가 없어야 함

    Raises:
        ContractViolation: 불변식을 위반한 경우 (생성기 버그)
    """
    seen_release = False
    for index, section in enumerate(generated.sections):
        if isinstance(section, Verbatim):
            if not section.generated:
                raise ContractViolation(f"generated changelog has a non-generated verbatim section at {index}")
            if seen_release:
                raise ContractViolation("generated changelogs may only have verbatim sections at the beginning")
            continue

        seen_release = True
        if section.unknown or section.unknown_blocks:
            raise ContractViolation(f"generated release {section.name} carries 'unknown' content")
        for segment in section.segments:
            if isinstance(segment, User):
                raise ContractViolation(f"generated release {section.name} carries a User segment")
            if isinstance(getattr(segment, "data", None), Parsed):
                raise ContractViolation(f"generated release {section.name} carries a parsed marker instead of data")


def _move_generated_verbatim_to_front(pending: Deque[AnySection], sections: List[AnySection]) -> None:
    """
    생성된 머리말을 파싱된 문서 앞으로 이동

    파싱된 문서의 첫 섹션이 Release 또는 생성된 Verbatim일 때만 이동하므로
    사람이 쓴 머리말은 절대 건드리지 않는다.
    """
    insert_at = 0
    while pending and isinstance(pending[0], Verbatim):
        verbatim = pending.popleft()
        first = sections[0]
        if isinstance(first, Release) or (isinstance(first, Verbatim) and first.generated):
            sections.insert(insert_at, verbatim)
            insert_at += 1
        else:
            logger.debug("Keeping hand-written prologue, generated prologue dropped")


def merge_generated(parsed: ChangeLog, generated: ChangeLog) -> ChangeLog:
    """
    생성된 changelog를 파싱된 changelog에 병합

    Args:
        parsed: 디스크에서 읽어 파싱한 문서 (권위 있음)
        generated: 커밋 히스토리로부터 새로 생성한 문서 (일회성)

    Returns:
        병합된 새 ChangeLog

    Raises:
        ContractViolation: generated가 생성 문서 불변식을 위반한 경우
    """
    validate_generated(generated)

    if not parsed.sections:
        return copy.deepcopy(generated)

    sections: List[AnySection] = copy.deepcopy(parsed.sections)
    pending: Deque[AnySection] = deque(copy.deepcopy(generated.sections))

    _move_generated_verbatim_to_front(pending, sections)

    anchor = next(
        ((index, section) for index, section in enumerate(sections) if isinstance(section, Release)),
        None,
    )
    if anchor is None:
        sections.extend(pending)
        return ChangeLog(sections=sections)

    first_release_index, first_release = anchor
    anchor_level = first_release.heading_level
    anchor_prefix = first_release.version_prefix

    for section in pending:
        # validate_generated가 앞쪽 이후의 Verbatim을 이미 걸러냄
        target = find_target_section(section.name, sections, first_release_index)
        if isinstance(target, MergeWith):
            merge_release(sections[target.position], section)
        elif isinstance(target, InsertAt):
            section.heading_level = anchor_level
            section.version_prefix = anchor_prefix
            sections.insert(target.position, section)
            logger.info(f"Inserted release {section.name} at position {target.position}")

    return ChangeLog(sections=sections)
