"""Shared router helpers: error translation and service wiring."""
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories import (
    SqlBankRepository,
    SqlComplianceRepository,
    SqlPoolRepository,
    SqlRouteRepository,
)
from ..services.compliance import (
    BankingLedgerService,
    ComplianceBalanceService,
    PoolService,
    RouteService,
)
from ..services.compliance.errors import ComplianceError, NotFoundError


def to_http_exception(error: ComplianceError) -> HTTPException:
    """NotFoundError -> 404, every other compliance error -> 400."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.to_dict())
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.to_dict())


def get_route_service(db: Session = Depends(get_db)) -> RouteService:
    return RouteService(SqlRouteRepository(db))


def get_cb_service(db: Session = Depends(get_db)) -> ComplianceBalanceService:
    return ComplianceBalanceService(
        route_repo=SqlRouteRepository(db),
        compliance_repo=SqlComplianceRepository(db),
        bank_repo=SqlBankRepository(db),
    )


def get_banking_service(db: Session = Depends(get_db)) -> BankingLedgerService:
    return BankingLedgerService(
        compliance_repo=SqlComplianceRepository(db),
        bank_repo=SqlBankRepository(db),
    )


def get_pool_service(db: Session = Depends(get_db)) -> PoolService:
    return PoolService(SqlPoolRepository(db))
