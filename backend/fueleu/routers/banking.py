"""
FuelEU Compliance Engine - Banking API Router

Banks surplus CB and applies banked surplus against a deficit.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.compliance import BankingLedgerService
from ..services.compliance.errors import ComplianceError
from .common import get_banking_service, to_http_exception


router = APIRouter(prefix="/banking", tags=["banking"])


class BankingRequest(BaseModel):
    """Request model shared by bank and apply."""
    model_config = ConfigDict(populate_by_name=True)

    ship_id: str = Field(..., alias="shipId")
    year: int
    amount: float = Field(..., description="tCO2eq")


@router.post("/bank", response_model=dict)
async def bank_surplus(
    request: BankingRequest,
    service: BankingLedgerService = Depends(get_banking_service),
    db: Session = Depends(get_db),
):
    """Bank surplus CB for later use."""
    try:
        entry = service.bank_surplus(request.ship_id, request.year, request.amount)
    except ComplianceError as e:
        raise to_http_exception(e)

    db.commit()
    return {
        "success": True,
        "shipId": entry.ship_id,
        "year": entry.year,
        "banked": entry.amount_gco2eq,
    }


@router.post("/apply", response_model=dict)
async def apply_banked(
    request: BankingRequest,
    service: BankingLedgerService = Depends(get_banking_service),
    db: Session = Depends(get_db),
):
    """Apply banked surplus against the ship's deficit."""
    try:
        result = service.apply_banked(request.ship_id, request.year, request.amount)
    except ComplianceError as e:
        raise to_http_exception(e)

    db.commit()
    return {
        "success": True,
        "shipId": result.ship_id,
        "year": result.year,
        "applied": result.applied,
        "remainingBanked": result.remaining_banked,
    }
