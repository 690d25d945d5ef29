"""
부동산 / 호실 관리 서비스
비즈니스 로직 계층
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from app.models.property import Property, Unit
from app.schemas.property import PropertyCreate, UnitCreate
from app.utils.exceptions import NotFoundException, DuplicateException, store_errors


class PropertyService:
    """부동산 / 호실 관리 서비스"""

    @staticmethod
    def create_property(db: Session, property_data: PropertyCreate) -> Property:
        """부동산 등록"""
        prop = Property(**property_data.model_dump())
        with store_errors(db, "Create property"):
            db.add(prop)
            db.commit()
            db.refresh(prop)
        return prop

    @staticmethod
    def get_property_by_id(db: Session, property_id: int) -> Property:
        """ID로 부동산 조회"""
        with store_errors(db, f"Load property {property_id}"):
            prop = db.query(Property).filter(Property.id == property_id).first()
        if not prop:
            raise NotFoundException(detail=f"Property with ID {property_id} not found")
        return prop

    @staticmethod
    def get_all_properties(db: Session, skip: int = 0, limit: int = 100) -> tuple[List[Property], int]:
        """전체 부동산 조회 (페이징 지원)"""
        with store_errors(db, "List properties"):
            total = db.query(Property).count()
            properties = db.query(Property).order_by(Property.id).offset(skip).limit(limit).all()
        return properties, total

    @staticmethod
    def add_unit(db: Session, property_id: int, unit_data: UnitCreate) -> Unit:
        """호실 등록 (같은 부동산 내 호실 번호 중복 불가)"""
        PropertyService.get_property_by_id(db, property_id)

        with store_errors(db, f"Add unit to property {property_id}"):
            existing = db.query(Unit).filter(
                Unit.property_id == property_id,
                Unit.unit_number == unit_data.unit_number
            ).first()
            if existing:
                raise DuplicateException(detail=f"Unit {unit_data.unit_number} already exists")

            unit = Unit(property_id=property_id, unit_number=unit_data.unit_number)
            db.add(unit)
            db.commit()
            db.refresh(unit)
        return unit

    @staticmethod
    def get_unit(db: Session, property_id: int, unit_id: Optional[int]) -> Optional[Unit]:
        """부동산에 속한 호실 조회 (unit_id가 없으면 None)"""
        if unit_id is None:
            return None
        with store_errors(db, f"Load unit {unit_id}"):
            unit = db.query(Unit).filter(Unit.id == unit_id, Unit.property_id == property_id).first()
        if not unit:
            raise NotFoundException(detail=f"Unit with ID {unit_id} not found in property {property_id}")
        return unit

    @staticmethod
    def list_units(db: Session, property_id: int) -> List[Unit]:
        """부동산의 호실 목록"""
        PropertyService.get_property_by_id(db, property_id)
        with store_errors(db, f"List units of property {property_id}"):
            return db.query(Unit).filter(Unit.property_id == property_id).order_by(Unit.unit_number).all()
