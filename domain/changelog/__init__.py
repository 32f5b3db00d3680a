"""
Changelog 도메인 모듈

일부는 사람이 쓰고 일부는 릴리스마다 생성되는 changelog 문서를 다룹니다.
파싱 -> 병합 -> 렌더링 흐름은 모두 메모리 상의 순수 함수입니다.
"""
from .version import UNRELEASED, SemanticVersion, Unreleased, Version, parse_version
from .segment import (
    PARSED,
    Category,
    Clippy,
    CommitDetails,
    CommitStatistics,
    Details,
    Message,
    Parsed,
    Segment,
    Selection,
    Statistics,
    ThanksClippy,
    User,
)
from .section import ChangeLog, Release, Section, Verbatim
from .errors import ChangelogError, ContractViolation
from .parse import parse_changelog
from .merge import merge_generated
from .write import render_changelog
from .generate import CommitItem, ReleaseWindow, generate_changelog, generate_release

__all__ = [
    "UNRELEASED",
    "SemanticVersion",
    "Unreleased",
    "Version",
    "parse_version",
    "PARSED",
    "Category",
    "Clippy",
    "CommitDetails",
    "CommitStatistics",
    "Details",
    "Message",
    "Parsed",
    "Segment",
    "Selection",
    "Statistics",
    "ThanksClippy",
    "User",
    "ChangeLog",
    "Release",
    "Section",
    "Verbatim",
    "ChangelogError",
    "ContractViolation",
    "parse_changelog",
    "merge_generated",
    "render_changelog",
    "CommitItem",
    "ReleaseWindow",
    "generate_changelog",
    "generate_release",
]
