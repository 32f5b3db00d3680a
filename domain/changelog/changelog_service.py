"""
Changelog 처리 서비스
파일을 읽어 파싱하고, 생성된 changelog와 병합한 뒤 다시 쓰는 흐름을 담당
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from app.config import CHANGELOG_PATH, CHANGELOG_SELECTION, REPOSITORY_URL
from app.logging_config import get_logger, log_error

from domain.release.git import latest_release_tag, load_commit_history, tag_date

from .errors import ContractViolation
from .generate import ReleaseWindow, generate_changelog
from .merge import merge_generated
from .parse import parse_changelog
from .section import ChangeLog
from .segment import Selection
from .version import UNRELEASED
from .write import render_changelog

logger = get_logger("changelog_service")


class ChangelogService:
    """Changelog 파일 처리 서비스"""

    def __init__(
        self,
        path: Union[str, Path] = CHANGELOG_PATH,
        selection: Optional[Selection] = None,
        repository_url: Optional[str] = REPOSITORY_URL,
    ):
        self.path = Path(path)
        self.selection = selection if selection is not None else Selection.parse(CHANGELOG_SELECTION)
        self.repository_url = repository_url

    def read_text(self) -> str:
        """changelog 파일 내용 (파일이 없으면 빈 문자열)"""
        if not self.path.exists():
            logger.info(f"Changelog not found, starting empty: {self.path}")
            return ""
        return self.path.read_text(encoding="utf-8")

    def load(self) -> ChangeLog:
        return parse_changelog(self.read_text())

    def render(self, changelog: ChangeLog) -> str:
        return render_changelog(changelog, selection=self.selection, repository_url=self.repository_url)

    def merge_text(self, existing_text: str, generated: ChangeLog) -> Dict[str, Any]:
        """
        기존 텍스트와 생성된 changelog 병합

        빈 텍스트는 섹션이 없는 문서로 취급하여 생성된 문서가 그대로 결과가 된다.

        Returns:
            {"changelog": 병합된 ChangeLog, "markdown": 렌더링 결과, "changed": 원문과 다른지 여부}

        Raises:
            ContractViolation: 생성된 changelog가 불변식을 위반한 경우
        """
        parsed = parse_changelog(existing_text) if existing_text else ChangeLog()
        merged = merge_generated(parsed, generated)
        markdown = self.render(merged)
        return {
            "changelog": merged,
            "markdown": markdown,
            "changed": markdown != existing_text,
        }

    def regenerate(self, windows: List[ReleaseWindow], write: bool = False) -> Dict[str, Any]:
        """
        릴리스 구간들로 changelog를 다시 생성해 병합하고, write=True면 파일에 저장

        Returns:
            merge_text 결과 + {"success", "written", "path"}
        """
        generated = generate_changelog(windows, selection=self.selection)
        existing = self.read_text()
        try:
            result = self.merge_text(existing, generated)
        except ContractViolation as e:
            log_error(e, {"path": str(self.path)})
            raise

        written = False
        if write and result["changed"]:
            self.path.write_text(result["markdown"], encoding="utf-8")
            written = True
            logger.info(f"Changelog written: {self.path}", extra={"bytes": len(result["markdown"])})
        elif not result["changed"]:
            logger.info("Changelog is up to date")

        result.update({"success": True, "written": written, "path": str(self.path)})
        return result

    def unreleased_window(self, repo: Union[str, Path] = ".") -> ReleaseWindow:
        """최근 태그 이후의 커밋으로 Unreleased 릴리스 구간 구성"""
        tag = latest_release_tag(repo)
        revision_range = f"{tag}..HEAD" if tag else None
        commits = load_commit_history(repo, revision_range)
        logger.info(f"Collected {len(commits)} unreleased commits", extra={"since": tag})
        return ReleaseWindow(
            version=UNRELEASED,
            commits=commits,
            previous_release_date=tag_date(tag, repo) if tag else None,
        )


# 전역 서비스 인스턴스
_service_instance: Optional[ChangelogService] = None


def get_changelog_service() -> ChangelogService:
    """changelog 서비스 싱글톤 인스턴스 반환"""
    global _service_instance
    if _service_instance is None:
        _service_instance = ChangelogService()
    return _service_instance


def reset_changelog_service():
    """서비스 인스턴스 리셋 (테스트용)"""
    global _service_instance
    _service_instance = None
