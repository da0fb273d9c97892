"""
Repository ports the compliance core depends on.

The services only ever talk to these contracts. The SQLAlchemy adapters in
fueleu.repositories implement them; tests substitute mocks.
"""
from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from ...models.domain import (
    BankEntry,
    ComplianceRecord,
    PoolAllocation,
    Route,
    RouteFilters,
)


class RouteRepository(Protocol):
    """Route lookup and baseline management."""

    def find_all(self, filters: Optional[RouteFilters] = None) -> List[Route]:
        ...

    def find_by_route_code(self, route_code: str) -> Optional[Route]:
        ...

    def find_baseline(self) -> Optional[Route]:
        ...

    def set_baseline(self, route_code: str) -> Route:
        """Flag a route as baseline and clear the flag on every other route."""
        ...

    def upsert(self, route: Route) -> Route:
        ...


class ComplianceRepository(Protocol):
    """Compliance record store. save() upserts on (ship_id, year)."""

    def save(
        self,
        ship_id: str,
        year: int,
        cb_gco2eq: float,
        route_code: Optional[str] = None,
    ) -> ComplianceRecord:
        ...

    def find_by_ship_and_year(self, ship_id: str, year: int) -> Optional[ComplianceRecord]:
        ...

    def find_adjusted_cb(self, ship_id: str, year: int) -> Optional[float]:
        """Record CB plus the banked amount applied against it."""
        ...

    def list_by_year(self, year: int) -> List[ComplianceRecord]:
        ...


class BankRepository(Protocol):
    """
    Bank entry store.

    Implementations must guarantee at most one in-flight create/apply per
    (ship_id, year).
    """

    def create(self, ship_id: str, year: int, amount_gco2eq: float) -> BankEntry:
        ...

    def list_entries(self, ship_id: str, year: int) -> Sequence[BankEntry]:
        ...

    def get_total_banked(self, ship_id: str, year: int) -> float:
        ...

    def get_total_unapplied(self, ship_id: str, year: int) -> float:
        ...

    def apply(self, ship_id: str, year: int, amount: float) -> None:
        ...


class PoolRepository(Protocol):
    """Pool store. create() persists all allocations or none."""

    def create(self, year: int, allocations: Sequence[PoolAllocation]) -> str:
        ...
