"""
Changelog 병합 모듈

파싱된 문서에 생성된 문서를 비파괴적으로 합칩니다.
"""

from .distance import (
    Distance,
    InsertAt,
    MergeWith,
    abs_distance,
    find_target_section,
    version_distance,
)
from .section_merger import ReplaceMode, merge_read_only_segment, merge_release
from .changelog_merger import merge_generated, validate_generated

__all__ = [
    'Distance',
    'InsertAt',
    'MergeWith',
    'abs_distance',
    'find_target_section',
    'version_distance',
    'ReplaceMode',
    'merge_read_only_segment',
    'merge_release',
    'merge_generated',
    'validate_generated',
]
