"""
FuelEU Compliance Engine - Domain Models

Immutable values passed between the repositories, the compliance core and
the routers. The core never holds on to these between calls; every
operation returns fresh instances.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


# =============================================================================
# ENUMS
# =============================================================================

class VesselType(str, Enum):
    CONTAINER = "Container"
    BULK_CARRIER = "BulkCarrier"
    TANKER = "Tanker"
    RORO = "RoRo"


class FuelType(str, Enum):
    """Closed set of fuels. Every per-fuel table in the formula module is keyed on this."""
    HFO = "HFO"
    LNG = "LNG"
    MGO = "MGO"


# =============================================================================
# ROUTES
# =============================================================================

@dataclass(frozen=True)
class Route:
    """
    A reported voyage route.

    Build through route_validator.validate_route(); a Route is never
    mutated; changes produce a new instance.
    """
    id: str
    route_code: str
    vessel_type: VesselType
    fuel_type: FuelType
    year: int
    ghg_intensity: float      # gCO2e/MJ
    fuel_consumption: float   # tonnes
    distance: float           # km, informational
    is_baseline: bool = False


@dataclass(frozen=True)
class RouteFilters:
    vessel_type: Optional[VesselType] = None
    fuel_type: Optional[FuelType] = None
    year: Optional[int] = None


@dataclass(frozen=True)
class RouteComparison:
    route_code: str
    ghg_intensity: float
    percent_diff: float
    compliant: bool


@dataclass(frozen=True)
class ComparisonResult:
    baseline_route_code: str
    baseline_intensity: float
    target: float
    comparisons: List[RouteComparison] = field(default_factory=list)


# =============================================================================
# COMPLIANCE BALANCE
# =============================================================================

@dataclass(frozen=True)
class ComplianceBalance:
    """Signed CB in tCO2eq. Positive is surplus, negative is deficit."""
    value: float
    year: int
    ship_id: str

    def is_surplus(self) -> bool:
        return self.value > 0

    def is_deficit(self) -> bool:
        return self.value < 0

    def add(self, amount: float) -> ComplianceBalance:
        return ComplianceBalance(self.value + amount, self.year, self.ship_id)

    def subtract(self, amount: float) -> ComplianceBalance:
        return ComplianceBalance(self.value - amount, self.year, self.ship_id)


@dataclass(frozen=True)
class ComplianceRecord:
    """Persisted CB snapshot, at most one per (ship_id, year)."""
    id: str
    ship_id: str
    year: int
    cb_gco2eq: float
    route_code: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CBSummary:
    ship_id: str
    year: int
    cb_before: float
    banked: float
    cb_after: float


@dataclass(frozen=True)
class AdjustedCB:
    ship_id: str
    year: int
    cb_before: float
    cb_after: float


# =============================================================================
# BANKING
# =============================================================================

@dataclass(frozen=True)
class BankEntry:
    id: str
    ship_id: str
    year: int
    amount_gco2eq: float
    applied_gco2eq: float = 0.0
    created_at: Optional[datetime] = None

    @property
    def unapplied(self) -> float:
        return self.amount_gco2eq - self.applied_gco2eq


@dataclass(frozen=True)
class ApplyResult:
    ship_id: str
    year: int
    applied: float
    remaining_banked: float


# =============================================================================
# POOLING
# =============================================================================

@dataclass(frozen=True)
class PoolMember:
    ship_id: str
    cb_before: float


@dataclass(frozen=True)
class PoolAllocation:
    ship_id: str
    cb_before: float
    cb_after: float


@dataclass(frozen=True)
class PoolResult:
    pool_id: str
    year: int
    allocations: List[PoolAllocation] = field(default_factory=list)
