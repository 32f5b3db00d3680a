"""
릴리스 실행 옵션
"""
from dataclasses import dataclass


@dataclass
class ReleaseOptions:
    # 아무것도 바꾸지 않고 실행될 명령만 기록
    dry_run: bool = True
    # dry_run일 때 `cargo publish --dry-run`은 실제로 실행
    dry_run_cargo_publish: bool = False
    skip_publish: bool = False
    allow_dirty: bool = False
    no_verify: bool = False
    verbose: bool = False
