"""
방문 패스 관리 서비스
비즈니스 로직 계층 (발급, 취소, 검증 및 사용 처리)
"""
from sqlalchemy import and_, case, or_, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
from app.config import settings
from app.models.visitor_pass import VisitorPass, VisitorEvent, VisitorPassStatus, VisitorEventResult
from app.schemas.visitor_pass import VisitorPassCreate
from app.services.code_generator import PassCodeGenerator, default_code_generator
from app.services.pass_rules import decide_validation, normalize_code
from app.services.property_service import PropertyService
from app.utils.exceptions import NotFoundException, ValidationException, StoreException, handle_store_error, store_errors
from app.utils.logging_config import get_logger
from app.utils.time import to_naive_utc, utc_now

logger = get_logger("visitor_passes")


class VisitorPassService:
    """방문 패스 관리 서비스"""

    @staticmethod
    def issue_pass(
            db: Session,
            pass_data: VisitorPassCreate,
            created_by: int,
            code_generator: Optional[PassCodeGenerator] = None
    ) -> VisitorPass:
        """
        방문 패스 발급
        - 코드는 고유 제약으로 보장하며, 충돌 시 설정된 횟수만큼 재생성합니다.
        """
        if pass_data.max_uses < 1:
            raise ValidationException(detail="max_uses must be at least 1")
        if pass_data.starts_at >= pass_data.ends_at:
            raise ValidationException(detail="starts_at must be before ends_at")

        # 부동산 / 호실 존재 확인
        PropertyService.get_property_by_id(db, pass_data.property_id)
        PropertyService.get_unit(db, pass_data.property_id, pass_data.unit_id)

        generator = code_generator or default_code_generator

        for attempt in range(1, settings.pass_code_max_attempts + 1):
            code = normalize_code(generator.generate())
            if VisitorPassService.get_pass_by_code(db, code) is not None:
                logger.warning("Pass code collision on attempt %d, regenerating", attempt)
                continue

            visitor_pass = VisitorPass(
                **pass_data.model_dump(),
                code=code,
                used_count=0,
                status=VisitorPassStatus.ACTIVE,
                created_by=created_by
            )
            db.add(visitor_pass)
            try:
                db.commit()
                db.refresh(visitor_pass)
            except IntegrityError:
                # 조회와 저장 사이에 같은 코드가 먼저 저장된 경우
                db.rollback()
                logger.warning("Pass code collision on insert (attempt %d), regenerating", attempt)
                continue
            except SQLAlchemyError as exc:
                db.rollback()
                raise handle_store_error(exc, "Persist visitor pass") from exc

            logger.info(
                "Issued visitor pass %s for property %s (max_uses=%d) by user %s",
                visitor_pass.id, visitor_pass.property_id, visitor_pass.max_uses, created_by
            )
            return visitor_pass

        logger.error("Could not generate a unique pass code after %d attempts", settings.pass_code_max_attempts)
        raise StoreException(detail="Could not generate a unique pass code")

    @staticmethod
    def get_pass_by_id(db: Session, pass_id: int) -> VisitorPass:
        """ID로 방문 패스 조회"""
        with store_errors(db, f"Load visitor pass {pass_id}"):
            visitor_pass = db.query(VisitorPass).filter(VisitorPass.id == pass_id).first()
        if not visitor_pass:
            raise NotFoundException(detail=f"Visitor pass with ID {pass_id} not found")
        return visitor_pass

    @staticmethod
    def get_pass_by_code(db: Session, code: str) -> Optional[VisitorPass]:
        """코드로 방문 패스 조회 (없으면 None)"""
        with store_errors(db, "Look up pass code"):
            return db.query(VisitorPass).filter(VisitorPass.code == code).first()

    @staticmethod
    def _effective_status_filter(status: VisitorPassStatus, now: datetime):
        """effective_status와 같은 우선순위(revoked > used > expired > active)의 SQL 조건"""
        if status == VisitorPassStatus.REVOKED:
            return VisitorPass.status == VisitorPassStatus.REVOKED

        used = or_(
            VisitorPass.status == VisitorPassStatus.USED,
            VisitorPass.used_count >= VisitorPass.max_uses
        )
        if status == VisitorPassStatus.USED:
            return and_(VisitorPass.status != VisitorPassStatus.REVOKED, used)

        open_pass = and_(
            VisitorPass.status == VisitorPassStatus.ACTIVE,
            VisitorPass.used_count < VisitorPass.max_uses
        )
        if status == VisitorPassStatus.EXPIRED:
            return and_(open_pass, VisitorPass.ends_at < now)
        return and_(open_pass, VisitorPass.ends_at >= now)

    @staticmethod
    def get_passes(
            db: Session,
            property_id: Optional[int] = None,
            status: Optional[VisitorPassStatus] = None,
            skip: int = 0,
            limit: int = 100,
            now: Optional[datetime] = None
    ) -> tuple[List[VisitorPass], int]:
        """
        방문 패스 목록 조회
        - status는 조회 시점(now) 기준 유효 상태로 필터합니다. (expired 포함)
        """
        now = to_naive_utc(now) if now else utc_now()
        with store_errors(db, "List visitor passes"):
            query = db.query(VisitorPass)
            if property_id is not None:
                query = query.filter(VisitorPass.property_id == property_id)
            if status is not None:
                query = query.filter(VisitorPassService._effective_status_filter(status, now))

            total = query.count()
            passes = query.order_by(VisitorPass.created_at.desc(), VisitorPass.id.desc()).offset(skip).limit(limit).all()
        return passes, total

    @staticmethod
    def revoke_pass(db: Session, pass_id: int, revoked_by: int, now: Optional[datetime] = None) -> VisitorPass:
        """방문 패스 취소 (이미 취소된 경우 그대로 반환)"""
        visitor_pass = VisitorPassService.get_pass_by_id(db, pass_id)
        if visitor_pass.status == VisitorPassStatus.REVOKED:
            return visitor_pass

        visitor_pass.status = VisitorPassStatus.REVOKED
        visitor_pass.revoked_at = to_naive_utc(now) if now else utc_now()
        visitor_pass.revoked_by = revoked_by
        with store_errors(db, f"Revoke visitor pass {pass_id}"):
            db.commit()
            db.refresh(visitor_pass)

        logger.info("Revoked visitor pass %s by user %s", pass_id, revoked_by)
        return visitor_pass

    @staticmethod
    def try_consume_use(db: Session, pass_id: int, now: datetime) -> bool:
        """
        사용 횟수 1회 차감 (단일 조건부 UPDATE)
        - 취소되지 않았고, 유효 기간 내이며, 남은 횟수가 있을 때만 반영됩니다.
        - 마지막 사용이면 같은 문장에서 상태를 used로 바꿉니다.
        - 반영된 행이 없으면 False (다른 요청이 먼저 사용한 경우 등)
        """
        now = to_naive_utc(now)
        stmt = (
            update(VisitorPass)
            .where(
                VisitorPass.id == pass_id,
                VisitorPass.status != VisitorPassStatus.REVOKED,
                VisitorPass.used_count < VisitorPass.max_uses,
                VisitorPass.starts_at <= now,
                VisitorPass.ends_at >= now,
            )
            .values(
                used_count=VisitorPass.used_count + 1,
                status=case(
                    (VisitorPass.used_count + 1 >= VisitorPass.max_uses, VisitorPassStatus.USED.value),
                    else_=VisitorPassStatus.ACTIVE.value,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        return result.rowcount == 1

    @staticmethod
    def _redeem(db: Session, visitor_pass: VisitorPass, now: datetime) -> VisitorEventResult:
        """판정 후 성공이면 사용 처리, 충돌 시 다시 읽어서 재판정"""
        for _ in range(settings.redeem_max_attempts):
            result = decide_validation(visitor_pass, now)
            if result != VisitorEventResult.SUCCESS:
                return result
            if VisitorPassService.try_consume_use(db, visitor_pass.id, now):
                return result

            logger.warning("Redemption conflict on visitor pass %s, re-reading state", visitor_pass.id)
            db.refresh(visitor_pass)

        db.rollback()
        logger.error("Gave up redeeming visitor pass %s after %d attempts", visitor_pass.id, settings.redeem_max_attempts)
        raise StoreException(detail="Visitor pass was modified concurrently, please retry")

    @staticmethod
    def validate_and_redeem(
            db: Session,
            code: str,
            validated_by: int,
            now: datetime
    ) -> tuple[VisitorEventResult, Optional[VisitorPass]]:
        """
        코드 검증 및 사용 처리
        - 판정 순서: 취소(invalid) > 유효 기간(outside_time_window) > 사용 횟수(max_uses_exceeded) > success
        - 찾은 패스에 대해서는 결과와 관계없이 검증 이벤트를 정확히 1건 기록합니다.
        - 사용 횟수 차감과 이벤트 기록은 하나의 트랜잭션으로 커밋됩니다.
        - 존재하지 않는 코드는 invalid이며, audit_unknown_codes 설정일 때만 이벤트를 남깁니다.
        - now는 타임존이 있으면 naive UTC로 변환해서 사용합니다.
        """
        now = to_naive_utc(now)
        normalized = normalize_code(code)
        with store_errors(db, "Validate visitor pass"):
            visitor_pass = VisitorPassService.get_pass_by_code(db, normalized)

            if visitor_pass is None:
                logger.warning("Validation attempt with unknown code %r by user %s", normalized, validated_by)
                if settings.audit_unknown_codes:
                    db.add(VisitorEvent(
                        visitor_pass_id=None,
                        validated_by=validated_by,
                        code=normalized,
                        result=VisitorEventResult.INVALID,
                        created_at=now
                    ))
                    db.commit()
                return VisitorEventResult.INVALID, None

            result = VisitorPassService._redeem(db, visitor_pass, now)
            db.add(VisitorEvent(
                visitor_pass_id=visitor_pass.id,
                validated_by=validated_by,
                code=normalized,
                result=result,
                created_at=now
            ))
            db.commit()
            db.refresh(visitor_pass)

        logger.info(
            "Validated visitor pass %s by user %s: %s (used %d/%d)",
            visitor_pass.id, validated_by, result.value, visitor_pass.used_count, visitor_pass.max_uses
        )
        return result, visitor_pass

    @staticmethod
    def get_events(db: Session, pass_id: int, skip: int = 0, limit: int = 100) -> tuple[List[VisitorEvent], int]:
        """방문 패스의 검증 이벤트(감사 로그) 조회"""
        VisitorPassService.get_pass_by_id(db, pass_id)
        with store_errors(db, f"List events of visitor pass {pass_id}"):
            query = db.query(VisitorEvent).filter(VisitorEvent.visitor_pass_id == pass_id)
            total = query.count()
            events = query.order_by(VisitorEvent.id).offset(skip).limit(limit).all()
        return events, total
