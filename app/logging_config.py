"""
로깅 설정 모듈

모든 모듈은 get_logger(name)으로 `changelog.<name>` 로거를 받아 사용합니다.
logger.info(..., extra={...})로 넘긴 필드는 포매터가 `key=value` 형태로 뒤에 붙입니다.
"""
import logging
import sys
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "changelog"

# LogRecord 기본 속성 (extra 필드와 구분하기 위함)
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class ExtraFieldsFormatter(logging.Formatter):
    """extra로 전달된 필드를 메시지 뒤에 덧붙이는 포매터"""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return base
        fields = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{base} | {fields}"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    changelog 로거 계층 초기화

    Args:
        level: 로그 레벨 이름 (DEBUG, INFO, ...)
        log_file: 지정 시 파일에도 기록

    Returns:
        루트 changelog 로거
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # 재호출 시 핸들러 중복 방지
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = ExtraFieldsFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def setup_logging_from_env() -> logging.Logger:
    """환경변수(LOG_LEVEL, LOG_FILE) 기반 로깅 초기화"""
    from app.config import LOG_FILE, LOG_LEVEL

    return setup_logging(level=LOG_LEVEL, log_file=LOG_FILE)


def get_logger(name: str) -> logging.Logger:
    """모듈별 로거 반환"""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_release_step(step: str, dry_run: bool, **fields: Any) -> None:
    """릴리스 단계(commit, publish 등) 실행 기록"""
    logger = get_logger("release")
    verb = "WOULD" if dry_run else "WILL"
    logger.info(f"{verb} {step}", extra={"step": step, "dry_run": dry_run, **fields})


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """예외와 컨텍스트를 함께 기록"""
    logger = get_logger("error")
    logger.error(
        f"{type(error).__name__}: {error}",
        extra={"error_type": type(error).__name__, **(context or {})},
        exc_info=error,
    )
