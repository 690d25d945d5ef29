"""
작업 지시 관리 API 라우트
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
from app.database import get_db
from app.dependencies import get_current_user, get_now
from app.models.user import User
from app.models.work_order import WorkOrder, WorkOrderStatus
from app.schemas.work_order import (
    WorkOrderCreate,
    WorkOrderStatusUpdate,
    WorkOrderResponse,
    WorkOrderListResponse
)
from app.services.work_order_service import WorkOrderService, is_overdue

router = APIRouter(
    prefix="/api/work-orders",
    tags=["Work Orders"]
)


def _to_response(work_order: WorkOrder, now: datetime) -> WorkOrderResponse:
    response = WorkOrderResponse.model_validate(work_order)
    response.overdue = is_overdue(work_order, now)
    return response


@router.post("", response_model=WorkOrderResponse, status_code=status.HTTP_201_CREATED)
async def create_work_order(
        work_order_data: WorkOrderCreate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now)
):
    """작업 지시 생성 (우선순위별 SLA 마감 시각 자동 계산)"""
    work_order = WorkOrderService.create_work_order(db, work_order_data, current_user.id, now)
    return _to_response(work_order, now)


@router.get("", response_model=WorkOrderListResponse)
async def list_work_orders(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now),
        property_id: Optional[int] = Query(None),
        status: Optional[WorkOrderStatus] = Query(None),
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=1000)
):
    """작업 지시 목록 조회 (마감 초과 여부 포함)"""
    work_orders, total = WorkOrderService.get_work_orders(db, property_id, status, skip, limit)
    return {
        "total": total,
        "items": [_to_response(wo, now) for wo in work_orders]
    }


@router.get("/{work_order_id}", response_model=WorkOrderResponse)
async def get_work_order(
        work_order_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now)
):
    """작업 지시 상세 조회"""
    work_order = WorkOrderService.get_work_order_by_id(db, work_order_id)
    return _to_response(work_order, now)


@router.post("/{work_order_id}/status", response_model=WorkOrderResponse)
async def update_work_order_status(
        work_order_id: int,
        status_data: WorkOrderStatusUpdate,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now)
):
    """작업 상태 변경"""
    work_order = WorkOrderService.update_status(db, work_order_id, status_data.status, now)
    return _to_response(work_order, now)
