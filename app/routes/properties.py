"""
부동산 / 호실 관리 API 라우트
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_current_user, get_current_manager_user
from app.models.user import User
from app.schemas.property import (
    PropertyCreate,
    PropertyResponse,
    PropertyListResponse,
    UnitCreate,
    UnitResponse
)
from app.services.property_service import PropertyService

router = APIRouter(
    prefix="/api/properties",
    tags=["Properties"]
)


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
        property_data: PropertyCreate,
        current_user: User = Depends(get_current_manager_user),
        db: Session = Depends(get_db)
):
    """부동산 등록"""
    return PropertyService.create_property(db, property_data)


@router.get("", response_model=PropertyListResponse)
async def list_properties(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
        skip: int = Query(0, ge=0),
        limit: int = Query(100, ge=1, le=1000)
):
    """부동산 목록 조회"""
    properties, total = PropertyService.get_all_properties(db, skip, limit)
    return {
        "total": total,
        "items": properties
    }


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
        property_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """부동산 상세 조회"""
    return PropertyService.get_property_by_id(db, property_id)


@router.post("/{property_id}/units", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
async def add_unit(
        property_id: int,
        unit_data: UnitCreate,
        current_user: User = Depends(get_current_manager_user),
        db: Session = Depends(get_db)
):
    """호실 등록"""
    return PropertyService.add_unit(db, property_id, unit_data)


@router.get("/{property_id}/units", response_model=list[UnitResponse])
async def list_units(
        property_id: int,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """호실 목록 조회"""
    return PropertyService.list_units(db, property_id)
