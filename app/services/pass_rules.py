"""
방문 패스 판정 규칙
저장소에 의존하지 않는 순수 함수 (현재 시각은 항상 인자로 전달)
"""
from datetime import datetime
from app.models.visitor_pass import VisitorPass, VisitorPassStatus, VisitorEventResult
from app.utils.time import to_naive_utc


def decide_validation(visitor_pass: VisitorPass, now: datetime) -> VisitorEventResult:
    """
    검증 결과 판정
    - 먼저 일치하는 규칙이 우선: 취소 > 유효 기간 > 사용 횟수
    """
    now = to_naive_utc(now)
    if visitor_pass.status == VisitorPassStatus.REVOKED:
        return VisitorEventResult.INVALID
    if now < visitor_pass.starts_at or now > visitor_pass.ends_at:
        return VisitorEventResult.OUTSIDE_TIME_WINDOW
    if visitor_pass.used_count >= visitor_pass.max_uses:
        return VisitorEventResult.MAX_USES_EXCEEDED
    return VisitorEventResult.SUCCESS


def effective_status(visitor_pass: VisitorPass, now: datetime) -> VisitorPassStatus:
    """표시용 유효 상태 계산 (revoked > used > expired > active)"""
    now = to_naive_utc(now)
    if visitor_pass.status == VisitorPassStatus.REVOKED:
        return VisitorPassStatus.REVOKED
    if visitor_pass.status == VisitorPassStatus.USED or visitor_pass.used_count >= visitor_pass.max_uses:
        return VisitorPassStatus.USED
    if now > visitor_pass.ends_at:
        return VisitorPassStatus.EXPIRED
    return VisitorPassStatus.ACTIVE


def access_message(result: VisitorEventResult) -> str:
    """게이트 화면에 표시할 메시지"""
    if result == VisitorEventResult.SUCCESS:
        return "Access granted"
    return f"Access denied: {result.value.replace('_', ' ')}"


def normalize_code(code: str) -> str:
    """사람이 입력한 코드 정규화 (앞뒤 공백 제거, 대문자)"""
    return code.strip().upper()
