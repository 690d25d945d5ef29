"""
애플리케이션 설정 파일
환경 변수를 통해 설정 관리
"""
from pydantic_settings import BaseSettings
from pathlib import Path
import string


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 데이터베이스 설정
    database_url: str = "sqlite:///./visitor_passes.db"

    # JWT 설정
    secret_key: str = "your-secret-key-here-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # 애플리케이션 설정
    app_name: str = "Visitor Pass Management System"
    debug: bool = False
    log_level: str = "INFO"

    # CORS 설정
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # 방문 패스 설정
    pass_code_length: int = 8
    pass_code_alphabet: str = string.ascii_uppercase + string.digits
    pass_code_max_attempts: int = 5  # 코드 충돌 시 재생성 횟수
    redeem_max_attempts: int = 3  # 조건부 업데이트 충돌 시 재판정 횟수
    audit_unknown_codes: bool = False  # 존재하지 않는 코드도 감사 로그에 기록할지 여부

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")
        case_sensitive = False


settings = Settings()
