"""
Changelog 갱신 스크립트
최근 태그 이후의 커밋으로 Unreleased 섹션을 만들어 CHANGELOG에 병합하고,
필요하면 커밋과 패키지 배포까지 진행합니다.
"""
import sys
from pathlib import Path

# 프로젝트 루트를 Python path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.config import CHANGELOG_PATH, CHANGELOG_SELECTION
from app.logging_config import get_logger, setup_logging_from_env
from domain.changelog.changelog_service import ChangelogService
from domain.changelog.errors import ChangelogError, ContractViolation
from domain.changelog.segment import Selection
from domain.release import ReleaseError, ReleaseOptions, commit_changes, publish_crate

logger = get_logger("changelog_cli")

# 생성기가 만든 문서가 병합 계약을 어긴 경우 (입력 문제가 아니라 버그)
EXIT_GENERATOR_BUG = 3


def update_changelog(path: str, repo: str, selection: Selection, write: bool):
    """
    changelog 갱신

    Returns:
        ChangelogService.regenerate 결과, 실패 시 None

    Raises:
        ContractViolation: 생성된 changelog가 병합 계약을 어긴 경우
    """
    try:
        service = ChangelogService(path=path, selection=selection)
        window = service.unreleased_window(repo)
        result = service.regenerate([window], write=write)
    except ContractViolation as e:
        logger.critical(f"Generated changelog violates the merge contract (generator bug): {e}", exc_info=True)
        raise
    except (ChangelogError, ReleaseError) as e:
        logger.error(f"Changelog update failed: {e}", exc_info=True)
        return None

    if not write and result["changed"]:
        # 미리보기
        print(result["markdown"])
    return result


def main():
    """메인 실행 함수"""
    import argparse

    parser = argparse.ArgumentParser(description="Changelog update script")
    parser.add_argument("--path", default=CHANGELOG_PATH, help="Changelog file to update")
    parser.add_argument("--repo", default=".", help="Git repository to read commits from")
    parser.add_argument("--selection", default=CHANGELOG_SELECTION,
                        help="Generated segments to render (comma separated, 'all' or 'none')")
    parser.add_argument("--write", action="store_true", help="Write the merged changelog back to --path")
    parser.add_argument("--commit", action="store_true", help="Commit the changed changelog")
    parser.add_argument("--allow-empty", action="store_true", help="Allow an empty commit")
    parser.add_argument("--publish", action="store_true", help="Run cargo publish after committing")
    parser.add_argument("--manifest-path", default="Cargo.toml", help="Manifest of the crate to publish")
    parser.add_argument("--package", default=None, help="Crate name passed with --package")
    parser.add_argument("--dry-run", action="store_true", help="Only log what would be done")
    parser.add_argument("--dry-run-cargo-publish", action="store_true",
                        help="Run 'cargo publish --dry-run' during a dry run")
    parser.add_argument("--no-verify", action="store_true", help="Pass --no-verify to cargo publish")
    parser.add_argument("--allow-dirty", action="store_true", help="Pass --allow-dirty to cargo publish")
    parser.add_argument("--verbose", action="store_true", help="Log every external command")

    args = parser.parse_args()
    setup_logging_from_env()

    logger.info("Changelog script started", extra={"path": args.path, "dry_run": args.dry_run})

    try:
        selection = Selection.parse(args.selection)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)

    try:
        result = update_changelog(args.path, args.repo, selection, write=args.write and not args.dry_run)
    except ContractViolation:
        sys.exit(EXIT_GENERATOR_BUG)
    if result is None:
        sys.exit(1)

    options = ReleaseOptions(
        dry_run=args.dry_run,
        dry_run_cargo_publish=args.dry_run_cargo_publish,
        skip_publish=not args.publish,
        allow_dirty=args.allow_dirty,
        no_verify=args.no_verify,
        verbose=args.verbose,
    )

    try:
        if args.commit:
            commit_id = commit_changes(
                "Update changelog",
                dry_run=args.dry_run,
                empty_commit_possible=args.allow_empty,
                repo=args.repo,
            )
            if commit_id:
                logger.info(f"Committed changelog as {commit_id}")
        publish_crate(
            args.manifest_path,
            args.package,
            options,
            prevent_default_members=args.package is not None,
        )
    except ReleaseError as e:
        logger.error(f"Release failed: {e}")
        sys.exit(1)

    logger.info("Changelog script completed successfully")


if __name__ == "__main__":
    main()
