"""
Git 연동

- 변경된 파일 커밋 (dry-run이면 커밋하지 않음)
- changelog 생성을 위한 커밋 히스토리 조회
"""
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from app.config import GIT_BIN
from app.logging_config import get_logger, log_release_step

from domain.changelog.generate import CommitItem, extract_issues

from .errors import ReleaseError

logger = get_logger("git")

FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"


def _git(repo: Union[str, Path], *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [GIT_BIN, *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        check=False,
    )


def commit_changes(
    message: str,
    dry_run: bool,
    empty_commit_possible: bool = False,
    repo: Union[str, Path] = ".",
) -> Optional[str]:
    """
    작업 트리의 변경사항을 커밋

    Args:
        message: 커밋 메시지
        dry_run: True면 명령만 기록하고 커밋하지 않음
        empty_commit_possible: 변경사항이 없어도 커밋 허용 (--allow-empty)
        repo: 저장소 경로

    Returns:
        새 HEAD 커밋 id, dry-run이면 None

    Raises:
        ReleaseError: git commit 또는 HEAD 조회 실패
    """
    args = ["commit", "-am", message]
    if empty_commit_possible:
        args.append("--allow-empty")
    log_release_step("run git commit", dry_run=dry_run, command=" ".join([GIT_BIN, *args]))
    if dry_run:
        return None

    result = _git(repo, *args)
    if result.returncode != 0:
        logger.error("git commit failed", extra={"stderr": result.stderr.strip()})
        raise ReleaseError("Failed to commit changed manifests")

    head = _git(repo, "rev-parse", "HEAD")
    if head.returncode != 0:
        raise ReleaseError("Failed to resolve HEAD after commit")
    return head.stdout.strip()


def latest_release_tag(repo: Union[str, Path] = ".") -> Optional[str]:
    """가장 최근 태그, 태그가 없으면 None"""
    result = _git(repo, "describe", "--tags", "--abbrev=0")
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def tag_date(tag: str, repo: Union[str, Path] = ".") -> Optional[datetime]:
    """태그가 가리키는 커밋의 커밋 시각"""
    result = _git(repo, "log", "-1", "--format=%ct", tag)
    if result.returncode != 0 or not result.stdout.strip():
        return None
    return datetime.fromtimestamp(int(result.stdout.strip()), tz=timezone.utc)


def parse_log_output(output: str) -> List[CommitItem]:
    """`git log --format=%H%x1f%ct%x1f%s%x1e` 출력 파싱"""
    items = []
    for record in output.split(RECORD_SEPARATOR):
        record = record.strip("\n")
        if not record:
            continue
        commit_id, timestamp, title = record.split(FIELD_SEPARATOR, 2)
        items.append(CommitItem(
            id=commit_id,
            title=title,
            time=datetime.fromtimestamp(int(timestamp), tz=timezone.utc),
            issues=extract_issues(title),
        ))
    return items


def load_commit_history(repo: Union[str, Path] = ".", revision_range: Optional[str] = None) -> List[CommitItem]:
    """
    커밋 히스토리 조회 (오래된 커밋이 먼저)

    Raises:
        ReleaseError: git log 실패
    """
    args = ["log", "--reverse", "--format=%H%x1f%ct%x1f%s%x1e"]
    if revision_range:
        args.append(revision_range)
    result = _git(repo, *args)
    if result.returncode != 0:
        raise ReleaseError(f"Failed to read commit history: {result.stderr.strip()}")
    items = parse_log_output(result.stdout)
    logger.debug("Loaded commit history", extra={"commits": len(items), "range": revision_range})
    return items
