"""
SQLAlchemy repositories implementing the compliance ports.

Repositories add and flush; committing is left to the caller that owns the
session (the routers), so one request is one transaction. Multi-row writes
roll the session back on failure before re-raising.
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.db_models import BankEntryDB, ComplianceRecordDB, PoolDB, PoolMemberDB, RouteDB
from ..models.domain import BankEntry, ComplianceRecord, PoolAllocation, Route, RouteFilters
from ..services.compliance.errors import AmountExceedsBanked
from ..services.compliance.route_validator import validate_route

logger = logging.getLogger(__name__)

# Float slack when comparing an apply against the locked unapplied balance
APPLY_TOLERANCE = 1e-9


def _route_from_row(row: RouteDB) -> Route:
    return validate_route({
        "id": row.id,
        "route_code": row.route_code,
        "vessel_type": row.vessel_type,
        "fuel_type": row.fuel_type,
        "year": row.year,
        "ghg_intensity": row.ghg_intensity,
        "fuel_consumption": row.fuel_consumption,
        "distance": row.distance,
        "is_baseline": row.is_baseline,
    })


def _record_from_row(row: ComplianceRecordDB) -> ComplianceRecord:
    return ComplianceRecord(
        id=row.id,
        ship_id=row.ship_id,
        year=row.year,
        cb_gco2eq=row.cb_gco2eq,
        route_code=row.route_code,
        created_at=row.created_at,
    )


def _entry_from_row(row: BankEntryDB) -> BankEntry:
    return BankEntry(
        id=row.id,
        ship_id=row.ship_id,
        year=row.year,
        amount_gco2eq=row.amount_gco2eq,
        applied_gco2eq=row.applied_gco2eq,
        created_at=row.created_at,
    )


# =============================================================================
# ROUTES
# =============================================================================

class SqlRouteRepository:

    def __init__(self, db: Session):
        self.db = db

    def find_all(self, filters: Optional[RouteFilters] = None) -> List[Route]:
        query = self.db.query(RouteDB)
        if filters is not None:
            if filters.vessel_type is not None:
                query = query.filter(RouteDB.vessel_type == filters.vessel_type)
            if filters.fuel_type is not None:
                query = query.filter(RouteDB.fuel_type == filters.fuel_type)
            if filters.year is not None:
                query = query.filter(RouteDB.year == filters.year)
        return [_route_from_row(row) for row in query.order_by(RouteDB.route_code).all()]

    def find_by_route_code(self, route_code: str) -> Optional[Route]:
        row = self.db.query(RouteDB).filter(RouteDB.route_code == route_code).first()
        return _route_from_row(row) if row else None

    def find_baseline(self) -> Optional[Route]:
        row = self.db.query(RouteDB).filter(RouteDB.is_baseline.is_(True)).first()
        return _route_from_row(row) if row else None

    def set_baseline(self, route_code: str) -> Route:
        self.db.query(RouteDB).filter(
            RouteDB.is_baseline.is_(True),
            RouteDB.route_code != route_code,
        ).update({RouteDB.is_baseline: False}, synchronize_session="fetch")

        row = self.db.query(RouteDB).filter(RouteDB.route_code == route_code).one()
        row.is_baseline = True
        self.db.flush()
        return _route_from_row(row)

    def upsert(self, route: Route) -> Route:
        row = self.db.query(RouteDB).filter(RouteDB.route_code == route.route_code).first()
        if row is None:
            row = RouteDB(id=route.id, route_code=route.route_code)
            self.db.add(row)

        row.vessel_type = route.vessel_type
        row.fuel_type = route.fuel_type
        row.year = route.year
        row.ghg_intensity = route.ghg_intensity
        row.fuel_consumption = route.fuel_consumption
        row.distance = route.distance
        row.is_baseline = route.is_baseline
        self.db.flush()
        return _route_from_row(row)


# =============================================================================
# COMPLIANCE RECORDS
# =============================================================================

class SqlComplianceRepository:

    def __init__(self, db: Session):
        self.db = db

    def save(
        self,
        ship_id: str,
        year: int,
        cb_gco2eq: float,
        route_code: Optional[str] = None,
    ) -> ComplianceRecord:
        """Insert, or overwrite the existing (ship_id, year) record."""
        row = self.db.query(ComplianceRecordDB).filter(
            ComplianceRecordDB.ship_id == ship_id,
            ComplianceRecordDB.year == year,
        ).first()

        if row is None:
            row = ComplianceRecordDB(id=str(uuid4()), ship_id=ship_id, year=year)
            self.db.add(row)

        row.cb_gco2eq = cb_gco2eq
        row.route_code = route_code
        row.created_at = datetime.utcnow()
        self.db.flush()
        return _record_from_row(row)

    def find_by_ship_and_year(self, ship_id: str, year: int) -> Optional[ComplianceRecord]:
        row = self.db.query(ComplianceRecordDB).filter(
            ComplianceRecordDB.ship_id == ship_id,
            ComplianceRecordDB.year == year,
        ).first()
        return _record_from_row(row) if row else None

    def find_adjusted_cb(self, ship_id: str, year: int) -> Optional[float]:
        record = self.find_by_ship_and_year(ship_id, year)
        if record is None:
            return None

        applied = self.db.query(func.coalesce(func.sum(BankEntryDB.applied_gco2eq), 0.0)).filter(
            BankEntryDB.ship_id == ship_id,
            BankEntryDB.year == year,
        ).scalar()
        return record.cb_gco2eq + float(applied)

    def list_by_year(self, year: int) -> List[ComplianceRecord]:
        rows = (
            self.db.query(ComplianceRecordDB)
            .filter(ComplianceRecordDB.year == year)
            .order_by(ComplianceRecordDB.ship_id)
            .all()
        )
        return [_record_from_row(row) for row in rows]


# =============================================================================
# BANK ENTRIES
# =============================================================================

class SqlBankRepository:
    """
    Bank entry store.

    apply() locks the key's rows with SELECT ... FOR UPDATE on databases
    that support it (PostgreSQL); SQLite serializes writers on its own.
    """

    def __init__(self, db: Session):
        self.db = db

    def _entries_query(self, ship_id: str, year: int):
        return self.db.query(BankEntryDB).filter(
            BankEntryDB.ship_id == ship_id,
            BankEntryDB.year == year,
        )

    def create(self, ship_id: str, year: int, amount_gco2eq: float) -> BankEntry:
        row = BankEntryDB(
            id=str(uuid4()),
            ship_id=ship_id,
            year=year,
            amount_gco2eq=amount_gco2eq,
            applied_gco2eq=0.0,
            created_at=datetime.utcnow(),
        )
        self.db.add(row)
        self.db.flush()
        return _entry_from_row(row)

    def list_entries(self, ship_id: str, year: int) -> Sequence[BankEntry]:
        rows = self._entries_query(ship_id, year).order_by(BankEntryDB.created_at, BankEntryDB.id).all()
        return [_entry_from_row(row) for row in rows]

    def get_total_banked(self, ship_id: str, year: int) -> float:
        return float(sum(entry.amount_gco2eq for entry in self.list_entries(ship_id, year)))

    def get_total_unapplied(self, ship_id: str, year: int) -> float:
        return float(sum(entry.unapplied for entry in self.list_entries(ship_id, year)))

    def apply(self, ship_id: str, year: int, amount: float) -> None:
        """
        Consume the unapplied balance of the key's entries, oldest first.

        The balance is re-read under the row lock; if it no longer covers
        the amount nothing is applied and AmountExceedsBanked is raised.
        """
        rows = (
            self._entries_query(ship_id, year)
            .order_by(BankEntryDB.created_at, BankEntryDB.id)
            .with_for_update()
            .all()
        )

        locked_unapplied = sum(row.amount_gco2eq - row.applied_gco2eq for row in rows)
        if amount > locked_unapplied + APPLY_TOLERANCE:
            logger.warning(
                f"Apply of {amount} for ship={ship_id} year={year} exceeds locked balance {locked_unapplied}"
            )
            raise AmountExceedsBanked("Amount exceeds banked surplus")

        remaining = amount
        try:
            for row in rows:
                if remaining <= 0:
                    break
                unapplied = row.amount_gco2eq - row.applied_gco2eq
                if unapplied <= 0:
                    continue
                portion = min(unapplied, remaining)
                row.applied_gco2eq += portion
                remaining -= portion
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Apply of {amount} for ship={ship_id} year={year} failed, rolling back: {e}")
            self.db.rollback()
            raise


# =============================================================================
# POOLS
# =============================================================================

class SqlPoolRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(self, year: int, allocations: Sequence[PoolAllocation]) -> str:
        """Insert the pool and every member row; on failure nothing is kept."""
        pool = PoolDB(id=str(uuid4()), year=year, created_at=datetime.utcnow())
        for position, allocation in enumerate(allocations):
            pool.members.append(
                PoolMemberDB(
                    id=str(uuid4()),
                    ship_id=allocation.ship_id,
                    position=position,
                    cb_before=allocation.cb_before,
                    cb_after=allocation.cb_after,
                )
            )

        try:
            self.db.add(pool)
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Pool insert for year={year} failed, rolling back: {e}")
            self.db.rollback()
            raise

        return pool.id
