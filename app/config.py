"""
애플리케이션 설정

.env 파일과 환경변수에서 changelog/릴리스 관련 설정을 읽어옵니다.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Changelog
CHANGELOG_PATH = os.getenv("CHANGELOG_PATH", "CHANGELOG.md")
CHANGELOG_SELECTION = os.getenv("CHANGELOG_SELECTION", "clippy,commit-statistics,commit-details")
REPOSITORY_URL = os.getenv("REPOSITORY_URL") or None

# 외부 명령
CARGO_BIN = os.getenv("CARGO_BIN", "cargo")
GIT_BIN = os.getenv("GIT_BIN", "git")
CARGO_PUBLISH_MAX_ATTEMPTS = int(os.getenv("CARGO_PUBLISH_MAX_ATTEMPTS", "3"))

# 로깅
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None
