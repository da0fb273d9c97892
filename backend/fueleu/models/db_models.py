"""
FuelEU Compliance Engine - SQLAlchemy ORM Models
Persistent storage for routes, compliance records, bank entries and pools
"""
from datetime import datetime
from sqlalchemy import (
    Column, String, Integer, Float, DateTime, Boolean, ForeignKey,
    Enum as SQLEnum, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from ..database import Base
from .domain import VesselType, FuelType


class RouteDB(Base):
    """Reported route with measured intensity and fuel data."""
    __tablename__ = "routes"

    id = Column(String(36), primary_key=True)  # UUID
    route_code = Column(String(50), unique=True, nullable=False, index=True)  # R001, R002...
    vessel_type = Column(SQLEnum(VesselType), nullable=False, index=True)
    fuel_type = Column(SQLEnum(FuelType), nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    ghg_intensity = Column(Float, nullable=False)  # gCO2e/MJ
    fuel_consumption = Column(Float, nullable=False)  # tonnes
    distance = Column(Float, nullable=False, default=0.0)  # km
    is_baseline = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ComplianceRecordDB(Base):
    """Computed CB snapshot. One row per (ship_id, year), recomputation overwrites."""
    __tablename__ = "compliance_records"
    __table_args__ = (
        UniqueConstraint("ship_id", "year", name="uq_compliance_ship_year"),
    )

    id = Column(String(36), primary_key=True)
    ship_id = Column(String(50), nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    cb_gco2eq = Column(Float, nullable=False)  # tCO2eq, signed
    route_code = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class BankEntryDB(Base):
    """
    One banking action. Created once, applied_gco2eq only ever grows
    and never exceeds amount_gco2eq.
    """
    __tablename__ = "bank_entries"

    id = Column(String(36), primary_key=True)
    ship_id = Column(String(50), nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    amount_gco2eq = Column(Float, nullable=False)
    applied_gco2eq = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)


class PoolDB(Base):
    """Year-scoped pool. Written together with its members, never edited."""
    __tablename__ = "pools"

    id = Column(String(36), primary_key=True)
    year = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    members = relationship(
        "PoolMemberDB",
        back_populates="pool",
        cascade="all, delete-orphan",
        order_by="PoolMemberDB.position",
    )


class PoolMemberDB(Base):
    """Allocation of a single ship within a pool."""
    __tablename__ = "pool_members"

    id = Column(String(36), primary_key=True)
    pool_id = Column(String(36), ForeignKey("pools.id", ondelete="CASCADE"), nullable=False, index=True)
    ship_id = Column(String(50), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # Allocation order
    cb_before = Column(Float, nullable=False)
    cb_after = Column(Float, nullable=False)

    pool = relationship("PoolDB", back_populates="members")
