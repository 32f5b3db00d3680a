"""
릴리스 과정 모듈

changelog 갱신 이후의 커밋과 패키지 배포를 담당합니다.
"""
from .errors import ReleaseError
from .options import ReleaseOptions
from .cargo import build_publish_command, publish_crate
from .git import commit_changes, latest_release_tag, load_commit_history, tag_date

__all__ = [
    "ReleaseError",
    "ReleaseOptions",
    "build_publish_command",
    "publish_crate",
    "commit_changes",
    "latest_release_tag",
    "load_commit_history",
    "tag_date",
]
