"""
방문 패스 관리 API 라우트
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
from app.database import get_db
from app.dependencies import get_current_user, get_current_manager_user, get_current_gate_user, get_now
from app.models.user import User
from app.models.visitor_pass import VisitorPassStatus, VisitorEventResult
from app.schemas.visitor_pass import (
    VisitorPassCreate,
    VisitorPassResponse,
    VisitorPassListResponse,
    ValidationRequest,
    ValidationResponse,
    VisitorEventListResponse
)
from app.services.pass_rules import access_message
from app.services.visitor_pass_service import VisitorPassService

router = APIRouter(
    prefix="/api/visitor-passes",
    tags=["Visitor Passes"]
)


@router.post("", response_model=VisitorPassResponse, status_code=status.HTTP_201_CREATED)
async def issue_pass(
        pass_data: VisitorPassCreate,
        current_user: User = Depends(get_current_manager_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now)
):
    """방문 패스 발급 (생성된 코드를 응답에 포함)"""
    visitor_pass = VisitorPassService.issue_pass(db, pass_data, current_user.id)
    return VisitorPassResponse.from_pass(visitor_pass, now)


@router.get("", response_model=VisitorPassListResponse)
async def list_passes(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now),
        property_id: Optional[int] = Query(None),
        status: Optional[VisitorPassStatus] = Query(None),
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=1000)
):
    """
    방문 패스 목록 조회
    - status는 조회 시점 기준 유효 상태(effective_status)로 필터합니다.
    """
    passes, total = VisitorPassService.get_passes(db, property_id, status, skip, limit, now=now)
    return {
        "total": total,
        "items": [VisitorPassResponse.from_pass(p, now) for p in passes]
    }


@router.post("/validate", response_model=ValidationResponse)
async def validate_pass(
        request: ValidationRequest,
        current_user: User = Depends(get_current_gate_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now)
):
    """
    코드 검증 및 사용 처리 (경비용)
    - 거부 사유는 오류가 아니라 결과 값으로 반환됩니다.
    """
    result, visitor_pass = VisitorPassService.validate_and_redeem(db, request.code, current_user.id, now)
    return ValidationResponse(
        result=result,
        granted=result == VisitorEventResult.SUCCESS,
        message=access_message(result),
        visitor_pass=VisitorPassResponse.from_pass(visitor_pass, now) if visitor_pass else None
    )


@router.get("/{pass_id}", response_model=VisitorPassResponse)
async def get_pass(
        pass_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now)
):
    """방문 패스 상세 조회"""
    visitor_pass = VisitorPassService.get_pass_by_id(db, pass_id)
    return VisitorPassResponse.from_pass(visitor_pass, now)


@router.post("/{pass_id}/revoke", response_model=VisitorPassResponse)
async def revoke_pass(
        pass_id: int,
        current_user: User = Depends(get_current_manager_user),
        db: Session = Depends(get_db),
        now: datetime = Depends(get_now)
):
    """방문 패스 취소"""
    visitor_pass = VisitorPassService.revoke_pass(db, pass_id, current_user.id, now)
    return VisitorPassResponse.from_pass(visitor_pass, now)


@router.get("/{pass_id}/events", response_model=VisitorEventListResponse)
async def list_events(
        pass_id: int,
        current_user: User = Depends(get_current_manager_user),
        db: Session = Depends(get_db),
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=1000)
):
    """방문 패스 검증 이력(감사 로그) 조회"""
    events, total = VisitorPassService.get_events(db, pass_id, skip, limit)
    return {
        "total": total,
        "items": events
    }
