"""
패키지 레지스트리 배포

`cargo publish`를 실행하고, 일시적인 실패를 배제하기 위해 최대 N회까지 재시도합니다.
dry-run 중 실패는 재시도 없이 바로 실패 처리합니다.
"""
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from app.config import CARGO_BIN, CARGO_PUBLISH_MAX_ATTEMPTS
from app.logging_config import get_logger, log_release_step

from .errors import ReleaseError
from .options import ReleaseOptions

logger = get_logger("cargo")


def build_publish_command(
    manifest_path: Union[str, Path],
    package_name: Optional[str],
    options: ReleaseOptions,
    prevent_default_members: bool = False,
) -> List[str]:
    """cargo publish 명령줄 구성"""
    cmd = [CARGO_BIN, "publish"]
    if options.allow_dirty:
        cmd.append("--allow-dirty")
    if options.no_verify:
        cmd.append("--no-verify")
    if options.dry_run and options.dry_run_cargo_publish:
        cmd.append("--dry-run")
    cmd.extend(["--manifest-path", str(manifest_path)])
    if prevent_default_members and package_name:
        cmd.extend(["--package", package_name])
    return cmd


def publish_crate(
    manifest_path: Union[str, Path],
    package_name: Optional[str],
    options: ReleaseOptions,
    prevent_default_members: bool = False,
    max_attempts: int = CARGO_PUBLISH_MAX_ATTEMPTS,
) -> None:
    """
    패키지 배포

    Args:
        manifest_path: 배포할 패키지의 Cargo.toml 경로
        package_name: 패키지 이름 (--package 지정 시 사용)
        options: dry-run/검증 생략/dirty 허용 등 옵션
        prevent_default_members: 워크스페이스 기본 멤버 대신 패키지를 직접 지정
        max_attempts: 최대 시도 횟수

    Raises:
        ReleaseError: 마지막 시도까지 실패했거나 dry-run 중 실패한 경우
    """
    if options.skip_publish:
        return

    uses_cargo_dry_run = options.dry_run and options.dry_run_cargo_publish
    cargo_must_run = not options.dry_run or uses_cargo_dry_run
    cmd = build_publish_command(manifest_path, package_name, options, prevent_default_members)

    for attempt in range(1, max_attempts + 1):
        if options.verbose:
            log_release_step("run cargo publish", dry_run=not cargo_must_run, command=" ".join(cmd))
        if not cargo_must_run:
            break

        result = subprocess.run(cmd, check=False)
        if result.returncode == 0:
            logger.info(f"Published {package_name or manifest_path}")
            break
        if attempt == max_attempts or options.dry_run:
            raise ReleaseError("Could not successfully execute 'cargo publish'.")
        logger.warning(
            f"'cargo publish' run {attempt} failed but we retry up to {max_attempts} times to rule out flakiness",
            extra={"attempt": attempt, "returncode": result.returncode},
        )
