"""
저장소 URL 정규화

https, git://, ssh:// 그리고 scp 형식(git@github.com:owner/repo.git)의 원격 주소를
링크에 쓸 수 있는 https://github.com/<owner>/<repo> 형태로 바꿉니다.
"""
import re
from typing import Optional
from urllib.parse import urlparse

SCP_LIKE_PATTERN = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")


class RepositoryUrl:
    """원격 저장소 주소"""

    def __init__(self, url: str):
        self.url = url.strip()
        self.host, self.path = self._split(self.url)

    @staticmethod
    def _split(url: str):
        if "://" in url:
            parsed = urlparse(url)
            return (parsed.hostname or ""), parsed.path
        match = SCP_LIKE_PATTERN.match(url)
        if match:
            return match.group("host"), match.group("path")
        return "", url

    def github_https(self) -> Optional[str]:
        """GitHub 저장소면 https 주소, 아니면 None"""
        if self.host != "github.com":
            return None
        path = self.path.strip("/")
        if path.endswith(".git"):
            path = path[: -len(".git")]
        if path.count("/") != 1:
            return None
        return f"https://github.com/{path}"

    def commit_url(self, commit_id: str) -> Optional[str]:
        base = self.github_https()
        return f"{base}/commit/{commit_id}" if base else None

    def issue_url(self, issue: str) -> Optional[str]:
        base = self.github_https()
        return f"{base}/issues/{issue}" if base else None
