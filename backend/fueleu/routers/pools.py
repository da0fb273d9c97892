"""
FuelEU Compliance Engine - Pooling API Router

Creates a pool: allocates surplus across members and stores the pool.
"""
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.domain import PoolMember
from ..services.compliance import PoolService
from ..services.compliance.errors import ComplianceError
from .common import get_pool_service, to_http_exception


router = APIRouter(prefix="/pools", tags=["pools"])


class PoolMemberRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ship_id: str = Field(..., alias="shipId")
    cb_before: float = Field(..., alias="cbBefore")


class CreatePoolRequest(BaseModel):
    """Request model for creating a pool."""
    year: int
    members: List[PoolMemberRequest]


@router.post("", response_model=dict)
async def create_pool(
    request: CreatePoolRequest,
    service: PoolService = Depends(get_pool_service),
    db: Session = Depends(get_db),
):
    """
    Create a pool for a year.

    Fails with 400 if the pool has fewer than two members, a negative
    aggregate CB, or an allocation that leaves a member worse off.
    """
    members = [PoolMember(ship_id=m.ship_id, cb_before=m.cb_before) for m in request.members]
    try:
        result = service.create_pool(request.year, members)
    except ComplianceError as e:
        raise to_http_exception(e)

    db.commit()
    return {
        "poolId": result.pool_id,
        "year": result.year,
        "allocations": [
            {"shipId": a.ship_id, "cbBefore": a.cb_before, "cbAfter": a.cb_after}
            for a in result.allocations
        ],
    }
