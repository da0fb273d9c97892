"""
Compliance Core

CB formula evaluation, surplus banking and pool allocation. Pure,
synchronous services that reach storage only through the ports in
ports.py.
"""

from .errors import ComplianceError, ValidationError, NotFoundError
from .route_validator import validate_route
from .cb_service import ComplianceBalanceService
from .route_service import RouteService
from .banking_ledger import BankingLedgerService
from .pool_allocator import PoolService, allocate

__all__ = [
    'ComplianceError',
    'ValidationError',
    'NotFoundError',
    'validate_route',
    'ComplianceBalanceService',
    'RouteService',
    'BankingLedgerService',
    'PoolService',
    'allocate',
]
