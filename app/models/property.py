"""
부동산 / 호실 모델 (데이터베이스 테이블)
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum
from app.database import Base
from app.utils.time import utc_now


class PropertyType(str, enum.Enum):
    """부동산 유형"""
    APARTMENT = "apartment"
    ESTATE = "estate"
    SUBDIVISION = "subdivision"
    COMPLEX = "complex"


class Property(Base):
    """부동산 테이블"""
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    type = Column(SQLEnum(PropertyType), default=PropertyType.APARTMENT, nullable=False)
    address = Column(String(300), nullable=False)
    timezone = Column(String(64), default="UTC", nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    # 관계
    units = relationship("Unit", back_populates="property", cascade="all, delete-orphan")
    visitor_passes = relationship("VisitorPass", back_populates="property")

    def __repr__(self):
        return f"<Property(id={self.id}, name={self.name}, type={self.type})>"


class Unit(Base):
    """호실 테이블"""
    __tablename__ = "units"
    __table_args__ = (
        UniqueConstraint("property_id", "unit_number", name="uq_units_property_unit_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    unit_number = Column(String(20), nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    property = relationship("Property", back_populates="units")

    def __repr__(self):
        return f"<Unit(id={self.id}, property_id={self.property_id}, unit_number={self.unit_number})>"
