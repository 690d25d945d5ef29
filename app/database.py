"""
데이터베이스 연결 설정
SQLAlchemy를 사용한 데이터베이스 관리 (방문 패스 저장소)
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from app.config import settings

_is_sqlite = settings.database_url.startswith("sqlite")


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """SQLite는 연결마다 외래 키 검사를 켜야 함"""
    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# 데이터베이스 엔진 생성
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,   # 연결 검사
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)
if _is_sqlite:
    enable_sqlite_foreign_keys(engine)

# 세션 팩토리 생성
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """모델 기본 클래스"""
    pass


def get_db():
    """데이터베이스 세션 의존성 (요청 단위)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
