"""
인증 및 보안 관련 함수
JWT 토큰 생성, 검증, 비밀번호 해싱
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
from app.config import settings
from app.models.user import UserRole
from app.schemas.user import TokenPayload

# 비밀번호 해싱 설정
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """비밀번호 해싱"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """비밀번호 검증"""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, role: UserRole, expires_delta: Optional[timedelta] = None) -> str:
    """JWT 액세스 토큰 생성 (역할은 게이트 / 관리 권한 확인에 사용)"""
    issued_at = datetime.now(timezone.utc)
    if expires_delta:
        expire = issued_at + expires_delta
    else:
        expire = issued_at + timedelta(minutes=settings.access_token_expire_minutes)

    # sub 클레임은 문자열이어야 함
    to_encode = {
        "sub": str(user_id),
        "role": UserRole(role).value,
        "iat": issued_at,
        "exp": expire
    }

    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_token(token: str) -> Optional[TokenPayload]:
    """
    JWT 토큰 검증 및 페이로드 반환
    서명/만료 오류 또는 sub/role 클레임이 맞지 않으면 None
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return TokenPayload(**payload)
    except (JWTError, ValidationError):
        return None
