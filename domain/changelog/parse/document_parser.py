"""
Changelog 문서 파싱 모듈

문서 전체를 헤드라인 단위로 나누어 섹션을 만들고 다음 순서로 정렬합니다.
    [머리말 Verbatim] + [Release들, 버전 내림차순] + [나머지 Verbatim]
이해하지 못한 내용은 모두 해당 섹션 안에 그대로 남깁니다.
"""
from typing import List, Optional

from app.logging_config import get_logger

from ..section import AnySection, ChangeLog, Release, Verbatim
from .headline import Headline, parse_headline
from .section_parser import parse_release_section
from .tokens import iter_lines

logger = get_logger("document_parser")


def _sort_sections(sections: List[AnySection]) -> List[AnySection]:
    """Release는 버전 내림차순으로 정렬하고 Verbatim은 원래 자리(앞/뒤)를 유지"""
    insert_sorted_at = 1 if sections and isinstance(sections[0], Verbatim) else 0
    verbatim = [s for s in sections if isinstance(s, Verbatim)]
    releases = [s for s in sections if isinstance(s, Release)]
    releases.sort(key=lambda release: release.name, reverse=True)
    return verbatim[:insert_sorted_at] + releases + verbatim[insert_sorted_at:]


def parse_changelog(text: str) -> ChangeLog:
    """
    마크다운 텍스트에서 ChangeLog 구조 추출

    Args:
        text: changelog 파일 전체 내용

    Returns:
        파싱된(권위 있는) ChangeLog. 헤드라인이 하나도 없으면 전체가 Verbatim 하나가 된다.
    """
    sections: List[AnySection] = []
    body_parts: List[str] = []
    previous: Optional[Headline] = None
    first_level: Optional[int] = None

    for _, line in iter_lines(text):
        headline = parse_headline(line)
        if headline is None:
            body_parts.append(line)
            continue

        if first_level is None:
            first_level = headline.level
        body = "".join(body_parts)
        body_parts = []
        if previous is not None:
            previous.level = first_level
            sections.append(parse_release_section(previous, body))
        elif body:
            sections.append(Verbatim(text=body, generated=False))
        previous = headline

    body = "".join(body_parts)
    if previous is not None:
        previous.level = first_level
        sections.append(parse_release_section(previous, body))
    else:
        sections.append(Verbatim(text=body, generated=False))

    logger.debug("Parsed changelog", extra={
        "sections": len(sections),
        "releases": sum(1 for s in sections if isinstance(s, Release)),
    })
    return ChangeLog(sections=_sort_sections(sections))
