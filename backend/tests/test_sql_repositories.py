"""
Tests for the SQLAlchemy repositories against in-memory SQLite.

1. Route filters, baseline exclusivity, upsert by code
2. Compliance record upsert on (ship, year) and adjusted CB
3. Bank entry totals and oldest-first application
4. Pool insert with ordered members
"""
import pytest
from datetime import datetime
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fueleu.models.db_models import BankEntryDB, ComplianceRecordDB, PoolDB
from fueleu.models.domain import FuelType, PoolAllocation, RouteFilters, VesselType
from fueleu.repositories import (
    SqlBankRepository,
    SqlComplianceRepository,
    SqlPoolRepository,
    SqlRouteRepository,
)
from fueleu.seed import seed_routes
from fueleu.services.compliance.banking_ledger import BankingLedgerService
from fueleu.services.compliance.errors import AmountExceedsBanked


@pytest.fixture
def route_repo(db_session):
    repo = SqlRouteRepository(db_session)
    seed_routes(repo)
    db_session.commit()
    return repo


# =============================================================================
# ROUTES
# =============================================================================

class TestSqlRouteRepository:

    def test_seeded_routes(self, route_repo):
        routes = route_repo.find_all()
        assert [r.route_code for r in routes] == ["R001", "R002", "R003", "R004", "R005"]

    def test_filter_by_vessel_type(self, route_repo):
        routes = route_repo.find_all(RouteFilters(vessel_type=VesselType.CONTAINER))
        assert [r.route_code for r in routes] == ["R001", "R005"]

    def test_filter_by_fuel_and_year(self, route_repo):
        routes = route_repo.find_all(RouteFilters(fuel_type=FuelType.HFO, year=2025))
        assert [r.route_code for r in routes] == ["R004"]

    def test_seed_baseline(self, route_repo):
        assert route_repo.find_baseline().route_code == "R002"

    def test_set_baseline_is_exclusive(self, route_repo, db_session):
        route = route_repo.set_baseline("R004")
        db_session.commit()

        assert route.is_baseline is True
        baselines = [r.route_code for r in route_repo.find_all() if r.is_baseline]
        assert baselines == ["R004"]

    def test_missing_route(self, route_repo):
        assert route_repo.find_by_route_code("R999") is None

    def test_reseeding_does_not_duplicate(self, route_repo, db_session):
        seed_routes(route_repo)
        db_session.commit()
        assert len(route_repo.find_all()) == 5


# =============================================================================
# COMPLIANCE RECORDS
# =============================================================================

class TestSqlComplianceRepository:

    def test_save_and_find(self, db_session):
        repo = SqlComplianceRepository(db_session)
        saved = repo.save("S001", 2025, 263.08, route_code="R002")

        found = repo.find_by_ship_and_year("S001", 2025)
        assert found.id == saved.id
        assert found.cb_gco2eq == 263.08
        assert found.route_code == "R002"
        assert found.created_at is not None

    def test_save_upserts(self, db_session):
        repo = SqlComplianceRepository(db_session)
        first = repo.save("S001", 2025, 100.0)
        second = repo.save("S001", 2025, -50.0, route_code="R003")
        db_session.commit()

        assert second.id == first.id
        assert db_session.query(ComplianceRecordDB).count() == 1
        assert repo.find_by_ship_and_year("S001", 2025).cb_gco2eq == -50.0

    def test_missing_record(self, db_session):
        repo = SqlComplianceRepository(db_session)
        assert repo.find_by_ship_and_year("S001", 2025) is None
        assert repo.find_adjusted_cb("S001", 2025) is None

    def test_adjusted_cb_adds_applied(self, db_session):
        compliance_repo = SqlComplianceRepository(db_session)
        bank_repo = SqlBankRepository(db_session)
        compliance_repo.save("S001", 2025, -800.0)
        bank_repo.create("S001", 2025, 500.0)
        bank_repo.apply("S001", 2025, 200.0)

        assert compliance_repo.find_adjusted_cb("S001", 2025) == -600.0

    def test_list_by_year(self, db_session):
        repo = SqlComplianceRepository(db_session)
        repo.save("S002", 2025, -800.0)
        repo.save("S001", 2025, 1250.5)
        repo.save("S001", 2026, 10.0)

        assert [r.ship_id for r in repo.list_by_year(2025)] == ["S001", "S002"]


# =============================================================================
# BANK ENTRIES
# =============================================================================

class TestSqlBankRepository:

    def test_totals(self, db_session):
        repo = SqlBankRepository(db_session)
        repo.create("S001", 2025, 300.0)
        repo.create("S001", 2025, 200.0)
        repo.create("S002", 2025, 999.0)

        assert repo.get_total_banked("S001", 2025) == 500.0
        assert repo.get_total_unapplied("S001", 2025) == 500.0

    def test_apply_consumes_oldest_first(self, db_session):
        repo = SqlBankRepository(db_session)
        older = repo.create("S001", 2025, 300.0)
        repo.create("S001", 2025, 200.0)
        db_session.query(BankEntryDB).filter(BankEntryDB.id == older.id).update(
            {BankEntryDB.created_at: datetime(2025, 1, 1)}
        )

        repo.apply("S001", 2025, 350.0)

        entries = repo.list_entries("S001", 2025)
        assert [e.applied_gco2eq for e in entries] == [300.0, 50.0]
        assert repo.get_total_unapplied("S001", 2025) == 150.0
        assert sum(e.applied_gco2eq for e in entries) == 350.0

    def test_apply_beyond_locked_balance_raises(self, db_session):
        """A second apply of an already consumed balance is rejected, not dropped."""
        repo = SqlBankRepository(db_session)
        repo.create("S001", 2025, 100.0)
        repo.apply("S001", 2025, 100.0)

        with pytest.raises(AmountExceedsBanked):
            repo.apply("S001", 2025, 100.0)

        entries = repo.list_entries("S001", 2025)
        assert [e.applied_gco2eq for e in entries] == [100.0]
        assert repo.get_total_unapplied("S001", 2025) == 0.0

    def test_partial_shortfall_applies_nothing(self, db_session):
        repo = SqlBankRepository(db_session)
        repo.create("S001", 2025, 100.0)
        repo.apply("S001", 2025, 60.0)

        with pytest.raises(AmountExceedsBanked):
            repo.apply("S001", 2025, 50.0)

        assert repo.get_total_unapplied("S001", 2025) == 40.0

    def test_ledger_with_stale_total_is_rejected(self, db_session):
        """The ledger read an outdated unapplied total; the locked re-read catches it."""
        compliance_repo = SqlComplianceRepository(db_session)
        bank_repo = SqlBankRepository(db_session)
        ledger = BankingLedgerService(compliance_repo, bank_repo)
        compliance_repo.save("S001", 2025, 750.5)
        ledger.bank_surplus("S001", 2025, 100.0)

        stale_total = bank_repo.get_total_unapplied("S001", 2025)
        bank_repo.apply("S001", 2025, 100.0)
        bank_repo.get_total_unapplied = lambda ship_id, year: stale_total

        with pytest.raises(AmountExceedsBanked):
            ledger.apply_banked("S001", 2025, 100.0)

    def test_no_entries(self, db_session):
        repo = SqlBankRepository(db_session)
        assert repo.get_total_banked("S001", 2025) == 0.0
        assert repo.list_entries("S001", 2025) == []

    def test_ledger_never_overdraws(self, db_session):
        compliance_repo = SqlComplianceRepository(db_session)
        bank_repo = SqlBankRepository(db_session)
        ledger = BankingLedgerService(compliance_repo, bank_repo)
        compliance_repo.save("S001", 2025, 750.5)

        ledger.bank_surplus("S001", 2025, 500.0)
        ledger.apply_banked("S001", 2025, 400.0)
        ledger.apply_banked("S001", 2025, 100.0)

        assert bank_repo.get_total_unapplied("S001", 2025) == 0.0
        assert all(e.unapplied >= 0 for e in bank_repo.list_entries("S001", 2025))


# =============================================================================
# POOLS
# =============================================================================

class TestSqlPoolRepository:

    def test_create_pool(self, db_session):
        repo = SqlPoolRepository(db_session)
        allocations = [
            PoolAllocation("S001", 1250.5, 450.5),
            PoolAllocation("S002", -800.0, 0.0),
        ]

        pool_id = repo.create(2025, allocations)
        db_session.commit()

        pool = db_session.query(PoolDB).filter(PoolDB.id == pool_id).one()
        assert pool.year == 2025
        assert [(m.ship_id, m.cb_before, m.cb_after) for m in pool.members] == [
            ("S001", 1250.5, 450.5),
            ("S002", -800.0, 0.0),
        ]
