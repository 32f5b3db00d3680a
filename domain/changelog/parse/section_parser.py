"""
릴리스 섹션 파싱 모듈

헤드라인 하나와 그 본문을 Release 섹션으로 변환합니다.

- 인식된 생성 소제목(Thanks Clippy / Commit Statistics / Commit Details)은 PARSED 마커로 남기고
  이전 본문은 버립니다 (항상 재생성되므로 다시 파싱하지 않음).
- 센티널 주석 사이의 내용은 unknown 문자열에 그대로 보존하고, 세그먼트 사이의 위치도 기록합니다.
- 그 외 모든 내용은 원본 그대로의 User 세그먼트가 됩니다.
"""
from typing import List, Optional, Tuple

from app.logging_config import get_logger

from ..section import Release, UnknownBlock
from ..segment import PARSED, READ_ONLY_TITLES, Segment, User
from ..version import UNRELEASED
from .headline import Headline
from .tokens import Token, TokenCursor, TokenKind, tokenize

logger = get_logger("section_parser")

Range = Tuple[int, int]


def _extend_range(current: Optional[Range], token: Token) -> Range:
    # 겹치거나 인접한 구간은 끝만 늘린다
    if current is None:
        return (token.start, token.end)
    start, end = current
    return (start, max(end, token.end))


def _flush_range(segments: List[Segment], current: Optional[Range], body: str) -> None:
    if current is not None:
        start, end = current
        segments.append(User(markdown=body[start:end]))


def _read_only_marker(title: str) -> Optional[Segment]:
    for known_title, segment_type in READ_ONLY_TITLES:
        if title.startswith(known_title):
            return segment_type(PARSED)
    return None


def parse_release_section(headline: Headline, body: str) -> Release:
    """
    헤드라인과 본문 텍스트로 Release 섹션 생성

    Args:
        headline: 파싱된 헤드라인 (level은 호출자가 정규화)
        body: 헤드라인 다음 줄부터 다음 헤드라인 전까지의 원본 텍스트

    Returns:
        User 세그먼트와 PARSED 마커가 원래 순서대로 섞인 Release
    """
    cursor = TokenCursor(tokenize(body))
    segments: List[Segment] = []
    unknown_blocks: List[UnknownBlock] = []
    unknown_range: Optional[Range] = None

    while not cursor.at_end():
        token = cursor.advance()

        if token.kind is TokenKind.UNKNOWN_START:
            _flush_range(segments, unknown_range, body)
            unknown_range = None
            cursor.take_until(lambda t: t.kind is TokenKind.UNKNOWN_END)
            end_tag = cursor.advance()
            # 태그 줄 사이의 원문 전체 (닫는 태그가 없으면 본문 끝까지)
            unknown_blocks.append(UnknownBlock(
                position=len(segments),
                text=body[token.end:end_tag.start if end_tag else len(body)],
            ))
            continue

        if token.kind is TokenKind.HEADING:
            _flush_range(segments, unknown_range, body)
            unknown_range = None
            marker = _read_only_marker(token.title)
            if marker is not None:
                segments.append(marker)
                cursor.skip_to_heading(token.level)
                continue
            # 인식하지 못한 제목은 일반 사용자 내용
            unknown_range = _extend_range(unknown_range, token)
            continue

        if token.kind is TokenKind.UNKNOWN_END:
            logger.debug("Stray unknown-content end tag kept as user content", extra={"offset": token.start})

        unknown_range = _extend_range(unknown_range, token)

    _flush_range(segments, unknown_range, body)

    return Release(
        name=headline.version if headline.version is not None else UNRELEASED,
        version_prefix=headline.version_prefix,
        date=headline.date,
        heading_level=headline.level,
        segments=segments,
        unknown="".join(block.text for block in unknown_blocks),
        removed_messages=[],
        unknown_blocks=unknown_blocks,
    )
