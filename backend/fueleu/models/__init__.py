"""FuelEU Compliance Engine - Data Models"""
from .domain import (
    # Enums
    VesselType, FuelType,
    # Routes
    Route, RouteFilters, RouteComparison, ComparisonResult,
    # Compliance balance
    ComplianceBalance, ComplianceRecord, CBSummary, AdjustedCB,
    # Banking
    BankEntry, ApplyResult,
    # Pooling
    PoolMember, PoolAllocation, PoolResult,
)

__all__ = [
    "VesselType", "FuelType",
    "Route", "RouteFilters", "RouteComparison", "ComparisonResult",
    "ComplianceBalance", "ComplianceRecord", "CBSummary", "AdjustedCB",
    "BankEntry", "ApplyResult",
    "PoolMember", "PoolAllocation", "PoolResult",
]
