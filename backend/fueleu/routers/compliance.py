"""
FuelEU Compliance Engine - Compliance Balance API Router

Computes a ship's CB from a route and serves the CB read models.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.compliance import ComplianceBalanceService
from ..services.compliance.errors import ComplianceError
from .common import get_cb_service, to_http_exception


router = APIRouter(prefix="/compliance", tags=["compliance"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class ComputeCBRequest(BaseModel):
    """Request model for computing a ship's CB from a route."""
    model_config = ConfigDict(populate_by_name=True)

    route_code: str = Field(..., alias="routeId")
    ship_id: str = Field(..., alias="shipId")
    year: int


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("/cb", response_model=dict)
async def compute_cb(
    request: ComputeCBRequest,
    service: ComplianceBalanceService = Depends(get_cb_service),
    db: Session = Depends(get_db),
):
    """Compute and store the CB of a ship for a year."""
    try:
        balance = service.compute_cb(request.route_code, request.ship_id, request.year)
    except ComplianceError as e:
        raise to_http_exception(e)

    db.commit()
    return {
        "shipId": balance.ship_id,
        "year": balance.year,
        "cb": balance.value,
        "isSurplus": balance.is_surplus(),
        "isDeficit": balance.is_deficit(),
    }


@router.get("/cb", response_model=dict)
async def get_cb(
    ship_id: str = Query(..., alias="shipId"),
    year: int = Query(...),
    service: ComplianceBalanceService = Depends(get_cb_service),
):
    """Stored CB, cumulative banked amount, and CB left after banking."""
    try:
        summary = service.get_cb_summary(ship_id, year)
    except ComplianceError as e:
        raise to_http_exception(e)

    return {
        "shipId": summary.ship_id,
        "year": summary.year,
        "cbBefore": summary.cb_before,
        "banked": summary.banked,
        "cbAfter": summary.cb_after,
    }


@router.get("/adjusted-cb", response_model=List[dict])
async def get_adjusted_cb(
    year: int = Query(...),
    ship_id: Optional[str] = Query(None, alias="shipId"),
    service: ComplianceBalanceService = Depends(get_cb_service),
):
    """CB after applied banked surplus, for one ship or all ships of a year."""
    try:
        adjusted = service.get_adjusted_cb(year, ship_id)
    except ComplianceError as e:
        raise to_http_exception(e)

    return [
        {"shipId": a.ship_id, "cbBefore": a.cb_before, "cbAfter": a.cb_after}
        for a in adjusted
    ]
