"""
작업 지시(유지보수) 모델 (데이터베이스 테이블)
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum
from app.database import Base
from app.utils.time import utc_now


class WorkOrderPriority(str, enum.Enum):
    """우선순위"""
    CRITICAL = "critical"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class WorkOrderCategory(str, enum.Enum):
    """작업 분류"""
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    HVAC = "hvac"
    PAINTING = "painting"
    CARPENTRY = "carpentry"
    APPLIANCE = "appliance"
    PEST = "pest"
    LANDSCAPING = "landscaping"
    OTHER = "other"


class WorkOrderStatus(str, enum.Enum):
    """작업 상태"""
    NEW = "new"
    TRIAGED = "triaged"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    AWAITING_PARTS = "awaiting_parts"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class WorkOrder(Base):
    """작업 지시 테이블"""
    __tablename__ = "work_orders"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    unit_id = Column(Integer, ForeignKey("units.id"), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(String(2000), nullable=False, default="")
    category = Column(SQLEnum(WorkOrderCategory), default=WorkOrderCategory.OTHER, nullable=False)
    priority = Column(SQLEnum(WorkOrderPriority), default=WorkOrderPriority.NORMAL, nullable=False)
    status = Column(SQLEnum(WorkOrderStatus), default=WorkOrderStatus.NEW, nullable=False, index=True)
    sla_due_at = Column(DateTime, nullable=True, index=True)
    completed_at = Column(DateTime, nullable=True)
    closed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    property = relationship("Property")

    def __repr__(self):
        return f"<WorkOrder(id={self.id}, priority={self.priority}, status={self.status})>"
