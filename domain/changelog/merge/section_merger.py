"""
릴리스 세그먼트 병합

기존(파싱된) 릴리스에 생성된 릴리스를 합칩니다.
- 날짜는 항상 생성된 값으로 덮어씀
- 읽기 전용 세그먼트는 같은 종류를 모두 교체
- 기존 릴리스에 읽기 전용 세그먼트가 하나라도 있으면, 없는 종류는 사람이 지운 것으로 보고 되살리지 않음
- User 세그먼트는 건드리지 않음
"""
import copy
import enum
from typing import List

from app.logging_config import get_logger

from ..errors import ContractViolation
from ..section import Release
from ..segment import Parsed, Segment, User

logger = get_logger("section_merger")


class ReplaceMode(enum.Enum):
    REPLACE_ALL_OR_APPEND = "replace_all_or_append"
    REPLACE_ALL_OR_APPEND_IF_PRESENT_IN_DEST = "replace_all_or_append_if_present_in_dest"


def merge_read_only_segment(dest: List[Segment], insert: Segment, mode: ReplaceMode) -> None:
    """dest에서 insert와 같은 종류의 세그먼트를 모두 교체하고, 없으면 mode에 따라 추가"""
    found = False
    for index, segment in enumerate(dest):
        if type(segment) is type(insert):
            dest[index] = copy.deepcopy(insert)
            found = True
    if not found and mode is ReplaceMode.REPLACE_ALL_OR_APPEND:
        dest.append(insert)


def merge_release(dest: Release, src: Release) -> None:
    """
    생성된 릴리스(src)를 기존 릴리스(dest)에 병합 (dest를 제자리에서 수정)

    Raises:
        ContractViolation: src에 생성될 수 없는 내용(unknown, User, PARSED)이 있는 경우
    """
    if src.unknown or src.unknown_blocks:
        raise ContractViolation("generated releases must never carry 'unknown' content")

    has_read_only = any(segment.is_read_only() for segment in dest.segments)
    mode = (
        ReplaceMode.REPLACE_ALL_OR_APPEND_IF_PRESENT_IN_DEST
        if has_read_only
        else ReplaceMode.REPLACE_ALL_OR_APPEND
    )

    for segment in src.segments:
        if isinstance(segment, User):
            raise ContractViolation("User segments are never auto-generated")
        if isinstance(getattr(segment, "data", None), Parsed):
            raise ContractViolation("generated read-only segments must carry data, not a parsed marker")
        merge_read_only_segment(dest.segments, segment, mode)

    dest.date = src.date
    logger.debug("Merged generated release", extra={"version": str(dest.name), "mode": mode.value})
