"""
사용자 정의 예외 클래스
서비스 계층에서 발생시키고 FastAPI가 HTTP 응답으로 변환
"""
from contextlib import contextmanager
from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.utils.logging_config import get_logger

logger = get_logger("errors")


class NotFoundException(HTTPException):
    """패스, 부동산, 작업 지시 등을 찾을 수 없을 때"""
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedException(HTTPException):
    """토큰 누락, 만료 또는 비활성 계정"""
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenException(HTTPException):
    """역할이 부족할 때 (예: 경비원이 패스를 취소하려는 경우)"""
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ValidationException(HTTPException):
    """스키마를 통과했지만 서비스 규칙에 맞지 않는 입력"""
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class DuplicateException(HTTPException):
    """이미 존재하는 사용자명, 이메일 또는 호수"""
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class StoreException(HTTPException):
    """
    저장소(데이터베이스) 호출 실패 또는 재시도 한도를 넘긴 충돌
    검증 결과(success/invalid 등)와 구분되는 운영 오류
    """
    def __init__(self, detail: str = "Record store unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


def handle_store_error(error: Exception, operation: str) -> StoreException:
    """
    저장소 오류를 기록하고 StoreException으로 변환
    발생시키지 않고 반환하므로 호출부에서 `raise ... from error` 사용
    """
    logger.error("%s: %s", operation, error, exc_info=error)
    return StoreException(detail=f"{operation} failed")


@contextmanager
def store_errors(db: Session, operation: str):
    """
    저장소 호출 구간
    SQLAlchemyError는 롤백 후 StoreException(503)으로 변환, 그 외 예외는 그대로 전달
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        raise handle_store_error(exc, operation) from exc
