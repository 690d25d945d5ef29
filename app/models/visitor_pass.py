"""
방문 패스 / 검증 이벤트 모델 (데이터베이스 테이블)
"""
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, CheckConstraint, Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import enum
from app.database import Base
from app.utils.time import utc_now


class VisitorPassStatus(str, enum.Enum):
    """패스 상태 (저장값)"""
    ACTIVE = "active"  # 사용 가능
    USED = "used"  # 사용 횟수 소진
    EXPIRED = "expired"  # 표시용 파생 상태, 검증 경로에서는 저장하지 않음
    REVOKED = "revoked"  # 관리자가 취소


class VisitorEventResult(str, enum.Enum):
    """검증 결과"""
    SUCCESS = "success"
    INVALID = "invalid"
    OUTSIDE_TIME_WINDOW = "outside_time_window"
    MAX_USES_EXCEEDED = "max_uses_exceeded"


class VisitorPass(Base):
    """방문 패스 테이블"""
    __tablename__ = "visitor_passes"
    __table_args__ = (
        CheckConstraint("max_uses >= 1", name="ck_visitor_passes_max_uses_positive"),
        CheckConstraint("used_count >= 0", name="ck_visitor_passes_used_count_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    unit_id = Column(Integer, ForeignKey("units.id"), nullable=True)
    code = Column(String(32), unique=True, index=True, nullable=False)
    starts_at = Column(DateTime, nullable=False)
    ends_at = Column(DateTime, nullable=False)
    max_uses = Column(Integer, default=1, nullable=False)
    used_count = Column(Integer, default=0, nullable=False)
    status = Column(
        SQLEnum(VisitorPassStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        default=VisitorPassStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    purpose = Column(String(200), nullable=True)
    notes = Column(String(500), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    revoked_at = Column(DateTime, nullable=True)
    revoked_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    # 관계
    property = relationship("Property", back_populates="visitor_passes")
    creator = relationship("User", back_populates="issued_passes", foreign_keys=[created_by])
    events = relationship("VisitorEvent", back_populates="visitor_pass", order_by="VisitorEvent.id")

    def __repr__(self):
        return f"<VisitorPass(id={self.id}, code={self.code}, status={self.status}, used={self.used_count}/{self.max_uses})>"


class VisitorEvent(Base):
    """패스 검증 이벤트 테이블 (추가 전용 감사 로그)"""
    __tablename__ = "visitor_events"

    id = Column(Integer, primary_key=True, index=True)
    visitor_pass_id = Column(Integer, ForeignKey("visitor_passes.id"), nullable=True, index=True)
    validated_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    code = Column(String(32), nullable=True)  # 입력된 코드 그대로
    result = Column(
        SQLEnum(VisitorEventResult, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    created_at = Column(DateTime, default=utc_now, nullable=False)

    visitor_pass = relationship("VisitorPass", back_populates="events")

    def __repr__(self):
        return f"<VisitorEvent(id={self.id}, pass_id={self.visitor_pass_id}, result={self.result})>"
