"""
부동산 / 호실 관련 Pydantic 스키마 (API 요청/응답)
"""
from pydantic import BaseModel, Field
from datetime import datetime
from app.models.property import PropertyType


class PropertyCreate(BaseModel):
    """부동산 등록 요청"""
    name: str = Field(..., min_length=1, max_length=200)
    type: PropertyType = PropertyType.APARTMENT
    address: str = Field(..., min_length=1, max_length=300)
    timezone: str = Field("UTC", max_length=64)


class PropertyResponse(BaseModel):
    """부동산 응답"""
    id: int
    name: str
    type: PropertyType
    address: str
    timezone: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PropertyListResponse(BaseModel):
    """부동산 목록 응답"""
    total: int
    items: list[PropertyResponse]


class UnitCreate(BaseModel):
    """호실 등록 요청"""
    unit_number: str = Field(..., min_length=1, max_length=20)


class UnitResponse(BaseModel):
    """호실 응답"""
    id: int
    property_id: int
    unit_number: str
    created_at: datetime

    class Config:
        from_attributes = True
