"""
FuelEU Compliance Engine - Routes API Router

Route listing with emissions, route registration, baseline designation
and baseline comparison.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.domain import FuelType, Route, RouteFilters, VesselType
from ..services.compliance import RouteService
from ..services.compliance.errors import ComplianceError
from ..services.compliance.formula import route_total_emissions
from .common import get_route_service, to_http_exception


router = APIRouter(prefix="/routes", tags=["routes"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class RouteRequest(BaseModel):
    """Request model for creating or replacing a route."""
    model_config = ConfigDict(populate_by_name=True)

    route_code: str = Field(..., alias="routeId", description="Human route code, e.g. R001")
    vessel_type: str = Field(..., alias="vesselType")
    fuel_type: str = Field(..., alias="fuelType")
    year: int
    ghg_intensity: float = Field(..., alias="ghgIntensity", description="gCO2e/MJ")
    fuel_consumption: float = Field(..., alias="fuelConsumption", description="tonnes")
    distance: float = 0.0
    is_baseline: Optional[bool] = Field(None, alias="isBaseline")


def route_to_dict(route: Route) -> dict:
    return {
        "routeId": route.route_code,
        "vesselType": route.vessel_type.value,
        "fuelType": route.fuel_type.value,
        "year": route.year,
        "ghgIntensity": route.ghg_intensity,
        "fuelConsumption": route.fuel_consumption,
        "distance": route.distance,
        "totalEmissions": route_total_emissions(route),
        "isBaseline": route.is_baseline,
    }


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.get("", response_model=List[dict])
async def list_routes(
    vessel_type: Optional[VesselType] = Query(None, alias="vesselType"),
    fuel_type: Optional[FuelType] = Query(None, alias="fuelType"),
    year: Optional[int] = Query(None),
    service: RouteService = Depends(get_route_service),
):
    """List routes, optionally filtered, with computed total emissions."""
    filters = RouteFilters(vessel_type=vessel_type, fuel_type=fuel_type, year=year)
    return [route_to_dict(route) for route in service.list_routes(filters)]


@router.post("", response_model=dict)
async def register_route(
    request: RouteRequest,
    service: RouteService = Depends(get_route_service),
    db: Session = Depends(get_db),
):
    """Create a route, or replace the route with the same code."""
    candidate = request.model_dump(exclude_none=True)
    try:
        route = service.register_route(candidate)
    except ComplianceError as e:
        raise to_http_exception(e)

    db.commit()
    return route_to_dict(route)


@router.get("/comparison", response_model=dict)
async def compare_routes(
    year: Optional[int] = Query(None, description="Target year; defaults to the 2025 target"),
    service: RouteService = Depends(get_route_service),
):
    """Compare every route against the baseline route."""
    try:
        result = service.compare(year)
    except ComplianceError as e:
        raise to_http_exception(e)

    return {
        "baseline": {
            "routeId": result.baseline_route_code,
            "ghgIntensity": result.baseline_intensity,
        },
        "comparisons": [
            {
                "routeId": c.route_code,
                "ghgIntensity": c.ghg_intensity,
                "percentDiff": c.percent_diff,
                "compliant": c.compliant,
            }
            for c in result.comparisons
        ],
        "target": result.target,
    }


@router.post("/{route_id}/baseline", response_model=dict)
async def set_baseline(
    route_id: str,
    service: RouteService = Depends(get_route_service),
    db: Session = Depends(get_db),
):
    """Mark a route as the baseline. Clears the flag on every other route."""
    try:
        service.set_baseline(route_id)
    except ComplianceError as e:
        raise to_http_exception(e)

    db.commit()
    return {"success": True, "routeId": route_id}
