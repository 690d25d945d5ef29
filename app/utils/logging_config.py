"""
로깅 설정
애플리케이션 전역 로거를 한 번만 구성
"""
import logging
from app.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "visitor_pass"


def setup_logger() -> logging.Logger:
    """애플리케이션 로거 생성"""
    logger = logging.getLogger(LOGGER_NAME)

    # 리로드 시 핸들러 중복 방지
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """모듈별 하위 로거 반환 (예: visitor_pass.services)"""
    setup_logger()
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


logger = setup_logger()
