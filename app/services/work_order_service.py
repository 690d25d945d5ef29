"""
작업 지시 관리 서비스
비즈니스 로직 계층 (우선순위별 SLA 마감 시각 계산 포함)
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, timedelta
from app.models.work_order import WorkOrder, WorkOrderPriority, WorkOrderStatus
from app.schemas.work_order import WorkOrderCreate
from app.services.property_service import PropertyService
from app.utils.exceptions import NotFoundException, store_errors
from app.utils.logging_config import get_logger
from app.utils.time import to_naive_utc, utc_now

logger = get_logger("work_orders")

# 우선순위별 처리 기한 (시간)
SLA_HOURS = {
    WorkOrderPriority.CRITICAL: 4,
    WorkOrderPriority.HIGH: 24,
    WorkOrderPriority.NORMAL: 72,
    WorkOrderPriority.LOW: 168,
}
DEFAULT_SLA_HOURS = 72

# 마감 여부를 따지지 않는 종료 상태
FINISHED_STATUSES = {WorkOrderStatus.COMPLETED, WorkOrderStatus.CLOSED, WorkOrderStatus.CANCELLED}


def compute_sla_due_at(priority, created_at: datetime) -> datetime:
    """우선순위에 따른 SLA 마감 시각"""
    try:
        hours = SLA_HOURS.get(WorkOrderPriority(priority), DEFAULT_SLA_HOURS)
    except ValueError:
        hours = DEFAULT_SLA_HOURS
    return created_at + timedelta(hours=hours)


def is_overdue(work_order: WorkOrder, now: datetime) -> bool:
    """마감 초과 여부 (종료 상태이거나 마감 시각이 없으면 False)"""
    if work_order.sla_due_at is None or work_order.status in FINISHED_STATUSES:
        return False
    return work_order.sla_due_at < to_naive_utc(now)


class WorkOrderService:
    """작업 지시 관리 서비스"""

    @staticmethod
    def create_work_order(
            db: Session,
            work_order_data: WorkOrderCreate,
            created_by: int,
            now: Optional[datetime] = None
    ) -> WorkOrder:
        """작업 지시 생성 (상태 new, SLA 마감 시각 계산)"""
        PropertyService.get_property_by_id(db, work_order_data.property_id)
        PropertyService.get_unit(db, work_order_data.property_id, work_order_data.unit_id)

        created_at = to_naive_utc(now) if now else utc_now()
        work_order = WorkOrder(
            **work_order_data.model_dump(),
            created_by=created_by,
            status=WorkOrderStatus.NEW,
            sla_due_at=compute_sla_due_at(work_order_data.priority, created_at),
            created_at=created_at,
            updated_at=created_at
        )
        with store_errors(db, "Create work order"):
            db.add(work_order)
            db.commit()
            db.refresh(work_order)
        logger.info("Created work order %s (%s) due %s", work_order.id, work_order.priority.value, work_order.sla_due_at)
        return work_order

    @staticmethod
    def get_work_order_by_id(db: Session, work_order_id: int) -> WorkOrder:
        """ID로 작업 지시 조회"""
        with store_errors(db, f"Load work order {work_order_id}"):
            work_order = db.query(WorkOrder).filter(WorkOrder.id == work_order_id).first()
        if not work_order:
            raise NotFoundException(detail=f"Work order with ID {work_order_id} not found")
        return work_order

    @staticmethod
    def get_work_orders(
            db: Session,
            property_id: Optional[int] = None,
            status: Optional[WorkOrderStatus] = None,
            skip: int = 0,
            limit: int = 100
    ) -> tuple[List[WorkOrder], int]:
        """작업 지시 목록 조회 (부동산, 상태별 필터)"""
        with store_errors(db, "List work orders"):
            query = db.query(WorkOrder)
            if property_id is not None:
                query = query.filter(WorkOrder.property_id == property_id)
            if status is not None:
                query = query.filter(WorkOrder.status == status)

            total = query.count()
            work_orders = query.order_by(WorkOrder.created_at.desc(), WorkOrder.id.desc()).offset(skip).limit(limit).all()
        return work_orders, total

    @staticmethod
    def update_status(
            db: Session,
            work_order_id: int,
            status: WorkOrderStatus,
            now: Optional[datetime] = None
    ) -> WorkOrder:
        """작업 상태 변경 (완료/종료 시각 기록)"""
        work_order = WorkOrderService.get_work_order_by_id(db, work_order_id)
        now = to_naive_utc(now) if now else utc_now()

        work_order.status = status
        if status == WorkOrderStatus.COMPLETED and work_order.completed_at is None:
            work_order.completed_at = now
        if status == WorkOrderStatus.CLOSED and work_order.closed_at is None:
            work_order.closed_at = now

        with store_errors(db, f"Update work order {work_order_id}"):
            db.commit()
            db.refresh(work_order)
        logger.info("Work order %s moved to %s", work_order.id, status.value)
        return work_order
