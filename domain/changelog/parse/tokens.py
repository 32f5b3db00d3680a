"""
릴리스 본문 토크나이저

본문을 줄 단위 블록 토큰으로 나누고, 각 토큰은 원본 본문에 대한 [start, end) 오프셋을 가집니다.
빈 줄은 토큰이 되지 않습니다. 전체 CommonMark가 아니라 섹션 분류에 필요한 블록만 구분합니다.
"""
import enum
import re
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from ..section import Section

ATX_HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*\r?\n?$")
FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")


class TokenKind(enum.Enum):
    HEADING = "heading"
    UNKNOWN_START = "unknown_start"
    UNKNOWN_END = "unknown_end"
    CODE_BLOCK = "code_block"
    LINE = "line"


@dataclass
class Token:
    kind: TokenKind
    start: int
    end: int
    # HEADING 전용
    level: int = 0
    title: str = ""


def iter_lines(text: str) -> Iterator[Tuple[int, str]]:
    """'\\n' 기준으로 줄바꿈을 포함한 (오프셋, 줄) 순회"""
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        end = len(text) if end == -1 else end + 1
        yield start, text[start:end]
        start = end


def tokenize(body: str) -> List[Token]:
    """
    릴리스 본문을 블록 토큰 목록으로 변환

    Args:
        body: 헤드라인 다음부터 다음 헤드라인 전까지의 원본 텍스트

    Returns:
        원본 순서대로 정렬된 토큰 목록
    """
    tokens: List[Token] = []
    lines = list(iter_lines(body))
    index = 0
    while index < len(lines):
        offset, line = lines[index]
        stripped = line.strip()
        index += 1

        if not stripped:
            continue

        if stripped.startswith(Section.UNKNOWN_TAG_START):
            tokens.append(Token(TokenKind.UNKNOWN_START, offset, offset + len(line)))
            continue
        if stripped.startswith(Section.UNKNOWN_TAG_END):
            tokens.append(Token(TokenKind.UNKNOWN_END, offset, offset + len(line)))
            continue

        fence = FENCE_PATTERN.match(line)
        if fence:
            # 닫는 펜스(같은 문자, 같거나 긴 길이)까지 하나의 토큰, 없으면 마지막 비어 있지 않은 줄까지
            marker = fence.group(1)
            end = offset + len(line)
            while index < len(lines):
                inner_offset, inner_line = lines[index]
                index += 1
                closing = inner_line.strip()
                if closing:
                    end = inner_offset + len(inner_line)
                if closing.startswith(marker) and closing == marker[0] * len(closing):
                    break
            tokens.append(Token(TokenKind.CODE_BLOCK, offset, end))
            continue

        heading = ATX_HEADING_PATTERN.match(line)
        if heading:
            tokens.append(Token(
                TokenKind.HEADING,
                offset,
                offset + len(line),
                level=len(heading.group(1)),
                title=(heading.group(2) or "").strip(),
            ))
            continue

        tokens.append(Token(TokenKind.LINE, offset, offset + len(line)))
    return tokens


class TokenCursor:
    """한 토큰 앞을 내다볼 수 있는 토큰 커서"""

    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._position = 0

    def peek(self) -> Optional[Token]:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def advance(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self._position += 1
        return token

    def at_end(self) -> bool:
        return self._position >= len(self._tokens)

    def take_until(self, stop: Callable[[Token], bool]) -> List[Token]:
        """stop을 만족하는 토큰 직전까지 소비 (stop 토큰은 소비하지 않음)"""
        taken = []
        while not self.at_end() and not stop(self.peek()):
            taken.append(self.advance())
        return taken

    def skip_to_heading(self, level: int) -> None:
        """같은 레벨의 다음 제목 직전까지 건너뛰기 (알 수 없는 내용의 시작 태그에서도 멈춤)"""
        self.take_until(
            lambda token: token.kind is TokenKind.UNKNOWN_START
            or (token.kind is TokenKind.HEADING and token.level == level)
        )
