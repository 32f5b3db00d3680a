"""
Changelog 파싱 모듈

손으로 편집된 마크다운을 구조화된 ChangeLog로 변환합니다.
"""

from .headline import Headline, parse_headline
from .tokens import Token, TokenCursor, TokenKind, tokenize
from .section_parser import parse_release_section
from .document_parser import parse_changelog

__all__ = [
    'Headline',
    'parse_headline',
    'Token',
    'TokenCursor',
    'TokenKind',
    'tokenize',
    'parse_release_section',
    'parse_changelog',
]
