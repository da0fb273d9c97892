"""FuelEU Compliance Engine - SQLAlchemy repositories"""
from .sql_repositories import (
    SqlRouteRepository,
    SqlComplianceRepository,
    SqlBankRepository,
    SqlPoolRepository,
)

__all__ = [
    "SqlRouteRepository",
    "SqlComplianceRepository",
    "SqlBankRepository",
    "SqlPoolRepository",
]
