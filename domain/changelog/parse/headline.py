"""
릴리스 헤드라인 문법

    #+ <공백> ( v?<semver> | unreleased ) [ <공백> (YYYY-MM-DD) ] <공백>*

헤드라인이 아닌 줄은 오류가 아니라 일반 본문입니다 (None 반환).
"""
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..version import SemanticVersion

HEADLINE_PATTERN = re.compile(
    r"^(?P<hashes>#+)\s+"
    r"(?:(?P<unreleased>(?i:unreleased))|(?P<prefix>v)?(?P<version>\S+)(?!\S))"
    r"(?:\s*\((?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})\))?"
    r"\s*$"
)


@dataclass
class Headline:
    level: int
    version_prefix: str
    version: Optional[SemanticVersion]
    date: Optional[datetime]


def parse_headline(line: str) -> Optional[Headline]:
    """
    한 줄이 릴리스 헤드라인인지 판별

    Args:
        line: 줄바꿈 문자를 포함할 수 있는 한 줄

    Returns:
        헤드라인이면 Headline, 아니면 None
    """
    match = HEADLINE_PATTERN.match(line)
    if not match:
        return None

    version = None
    prefix = ""
    if match.group("unreleased") is None:
        try:
            version = SemanticVersion.parse(match.group("version"))
        except ValueError:
            return None
        prefix = match.group("prefix") or ""

    date = None
    if match.group("year") is not None:
        try:
            date = datetime(
                int(match.group("year")),
                int(match.group("month")),
                int(match.group("day")),
                tzinfo=timezone.utc,
            )
        except ValueError:
            # 잘못된 월/일이면 줄 전체가 헤드라인이 아니다
            return None

    return Headline(
        level=len(match.group("hashes")),
        version_prefix=prefix,
        version=version,
        date=date,
    )
