"""
릴리스 버전 모델

Version = Unreleased | SemanticVersion

릴리스 목록은 최신순으로 나열되므로 Unreleased는 모든 시맨틱 버전보다 큰 값으로 취급합니다.
"""
import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple, Union

# https://semver.org 의 권장 정규식 (접두사 'v'는 헤드라인 파서가 따로 처리)
SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9][0-9]*)\.(?P<minor>0|[1-9][0-9]*)\.(?P<patch>0|[1-9][0-9]*)"
    r"(?:-(?P<prerelease>(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def _identifier_key(identifier: str) -> Tuple[int, int, str]:
    # 숫자 식별자는 숫자로 비교하며 문자 식별자보다 항상 작다
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


def _identifiers_key(identifiers: Tuple[str, ...]) -> Tuple[Tuple[int, int, str], ...]:
    return tuple(_identifier_key(i) for i in identifiers)


@total_ordering
@dataclass(frozen=True)
class Unreleased:
    """아직 릴리스되지 않은 변경사항"""

    def __str__(self) -> str:
        return "Unreleased"

    def __lt__(self, other: object) -> bool:
        if isinstance(other, (Unreleased, SemanticVersion)):
            return False
        return NotImplemented


@total_ordering
@dataclass(frozen=True)
class SemanticVersion:
    """SemVer 2.0 버전 (major.minor.patch[-prerelease][+build])"""
    major: int
    minor: int
    patch: int
    prerelease: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion":
        """
        문자열을 시맨틱 버전으로 파싱

        Raises:
            ValueError: SemVer 형식이 아닌 경우
        """
        match = SEMVER_PATTERN.match(text)
        if not match:
            raise ValueError(f"Invalid semantic version: {text!r}")
        prerelease = match.group("prerelease")
        build = match.group("build")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )

    def _precedence_key(self):
        # 프리릴리스가 없는 버전이 같은 major.minor.patch의 프리릴리스보다 크다
        return (
            self.major,
            self.minor,
            self.patch,
            0 if self.prerelease else 1,
            _identifiers_key(self.prerelease),
            _identifiers_key(self.build),
        )

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Unreleased):
            return True
        if isinstance(other, SemanticVersion):
            return self._precedence_key() < other._precedence_key()
        return NotImplemented

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


Version = Union[Unreleased, SemanticVersion]

UNRELEASED = Unreleased()


def parse_version(text: str) -> Version:
    """'Unreleased'(대소문자 무시) 또는 'v' 접두사가 붙을 수 있는 시맨틱 버전 파싱"""
    stripped = text.strip()
    if stripped.lower() == "unreleased":
        return UNRELEASED
    if stripped.startswith("v"):
        stripped = stripped[1:]
    return SemanticVersion.parse(stripped)
