"""
작업 지시 관련 Pydantic 스키마 (API 요청/응답)
"""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from app.models.work_order import WorkOrderCategory, WorkOrderPriority, WorkOrderStatus


class WorkOrderCreate(BaseModel):
    """작업 지시 생성 요청"""
    property_id: int
    unit_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    category: WorkOrderCategory = WorkOrderCategory.OTHER
    priority: WorkOrderPriority = WorkOrderPriority.NORMAL


class WorkOrderStatusUpdate(BaseModel):
    """작업 상태 변경 요청"""
    status: WorkOrderStatus


class WorkOrderResponse(BaseModel):
    """작업 지시 응답"""
    id: int
    property_id: int
    unit_id: Optional[int]
    created_by: int
    title: str
    description: str
    category: WorkOrderCategory
    priority: WorkOrderPriority
    status: WorkOrderStatus
    sla_due_at: Optional[datetime]
    overdue: bool = False
    completed_at: Optional[datetime]
    closed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WorkOrderListResponse(BaseModel):
    """작업 지시 목록 응답"""
    total: int
    items: list[WorkOrderResponse]
