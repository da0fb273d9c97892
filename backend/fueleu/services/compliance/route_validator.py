"""
Route Validator

The only way to obtain a Route. Checks run in a fixed order and the first
failure is raised; errors are never aggregated.
"""
import math
from typing import Any, Mapping
from uuid import uuid4

from ...models.domain import FuelType, Route, VesselType
from .errors import (
    InvalidConsumption,
    InvalidDistance,
    InvalidIntensity,
    InvalidYear,
    UnknownFuelType,
    UnknownVesselType,
)
from .formula import MIN_REPORTING_YEAR


def check_route_invariants(ghg_intensity: float, fuel_consumption: float, year: int) -> None:
    if not math.isfinite(ghg_intensity) or ghg_intensity <= 0:
        raise InvalidIntensity("GHG intensity must be positive")
    if not math.isfinite(fuel_consumption) or fuel_consumption <= 0:
        raise InvalidConsumption("Fuel consumption must be positive")
    if year < MIN_REPORTING_YEAR:
        raise InvalidYear(f"Year must be {MIN_REPORTING_YEAR} or later")


def _coerce_vessel_type(value: Any) -> VesselType:
    if isinstance(value, VesselType):
        return value
    try:
        return VesselType(value)
    except ValueError:
        valid = [v.value for v in VesselType]
        raise UnknownVesselType(f"Unknown vessel type '{value}'. Must be one of: {valid}")


def _coerce_fuel_type(value: Any) -> FuelType:
    if isinstance(value, FuelType):
        return value
    try:
        return FuelType(value)
    except ValueError:
        valid = [f.value for f in FuelType]
        raise UnknownFuelType(f"Unknown fuel type '{value}'. Must be one of: {valid}")


def validate_route(candidate: Mapping[str, Any]) -> Route:
    """
    Build a Route from raw values.

    Expected keys: route_code, vessel_type, fuel_type, year, ghg_intensity,
    fuel_consumption, and optionally id, distance, is_baseline.

    Raises:
        ValidationError subclass for the first violated rule.
    """
    ghg_intensity = float(candidate["ghg_intensity"])
    fuel_consumption = float(candidate["fuel_consumption"])
    year = int(candidate["year"])

    check_route_invariants(ghg_intensity, fuel_consumption, year)

    distance = float(candidate.get("distance") or 0.0)
    if not math.isfinite(distance):
        raise InvalidDistance("Distance must be a finite number")

    return Route(
        id=candidate.get("id") or str(uuid4()),
        route_code=candidate["route_code"],
        vessel_type=_coerce_vessel_type(candidate["vessel_type"]),
        fuel_type=_coerce_fuel_type(candidate["fuel_type"]),
        year=year,
        ghg_intensity=ghg_intensity,
        fuel_consumption=fuel_consumption,
        distance=distance,
        is_baseline=bool(candidate.get("is_baseline", False)),
    )
