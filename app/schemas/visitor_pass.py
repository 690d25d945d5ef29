"""
방문 패스 관련 Pydantic 스키마 (API 요청/응답)
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime
from typing import Optional
from app.models.visitor_pass import VisitorPass, VisitorPassStatus, VisitorEventResult
from app.services.pass_rules import effective_status
from app.utils.time import to_naive_utc


class VisitorPassCreate(BaseModel):
    """방문 패스 발급 요청"""
    property_id: int
    unit_id: Optional[int] = None
    starts_at: datetime
    ends_at: datetime
    max_uses: int = Field(1, ge=1)
    purpose: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("starts_at", "ends_at")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @model_validator(mode="after")
    def check_window(self) -> "VisitorPassCreate":
        if self.starts_at >= self.ends_at:
            raise ValueError("starts_at must be before ends_at")
        return self


class VisitorPassResponse(BaseModel):
    """방문 패스 응답"""
    id: int
    property_id: int
    unit_id: Optional[int]
    code: str
    starts_at: datetime
    ends_at: datetime
    max_uses: int
    used_count: int
    status: VisitorPassStatus
    effective_status: Optional[VisitorPassStatus] = None
    purpose: Optional[str]
    notes: Optional[str]
    created_by: int
    revoked_at: Optional[datetime] = None
    revoked_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @classmethod
    def from_pass(cls, visitor_pass: VisitorPass, now: datetime) -> "VisitorPassResponse":
        """저장 상태와 함께 조회 시점의 유효 상태를 채워서 반환"""
        response = cls.model_validate(visitor_pass)
        response.effective_status = effective_status(visitor_pass, now)
        return response


class VisitorPassListResponse(BaseModel):
    """방문 패스 목록 응답"""
    total: int
    items: list[VisitorPassResponse]


class ValidationRequest(BaseModel):
    """코드 검증 요청 (경비 입력)"""
    code: str = Field(..., min_length=1, max_length=32)


class ValidationResponse(BaseModel):
    """코드 검증 결과"""
    result: VisitorEventResult
    granted: bool
    message: str
    visitor_pass: Optional[VisitorPassResponse] = None


class VisitorEventResponse(BaseModel):
    """검증 이벤트(감사 로그) 응답"""
    id: int
    visitor_pass_id: Optional[int]
    validated_by: int
    code: Optional[str]
    result: VisitorEventResult
    created_at: datetime

    class Config:
        from_attributes = True


class VisitorEventListResponse(BaseModel):
    """검증 이벤트 목록 응답"""
    total: int
    items: list[VisitorEventResponse]
