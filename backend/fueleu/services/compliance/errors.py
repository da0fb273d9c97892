"""
Compliance error taxonomy.

Two families reach the caller:
- ValidationError: an input or business rule was violated
- NotFoundError: a referenced route or record does not exist

Each error carries a ``kind`` naming the violated rule so callers can
branch without parsing messages. Anything else (database I/O and the like)
is not wrapped and propagates as-is.
"""
from typing import Optional


class ComplianceError(Exception):
    """Base class for errors raised by the compliance core."""

    kind = "ComplianceError"

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class ValidationError(ComplianceError):
    kind = "ValidationError"


class NotFoundError(ComplianceError):
    kind = "NotFoundError"


# =============================================================================
# ROUTE CONSTRUCTION
# =============================================================================

class InvalidIntensity(ValidationError):
    kind = "InvalidIntensity"


class InvalidConsumption(ValidationError):
    kind = "InvalidConsumption"


class InvalidYear(ValidationError):
    kind = "InvalidYear"


class InvalidDistance(ValidationError):
    kind = "InvalidDistance"


class UnknownVesselType(ValidationError):
    kind = "UnknownVesselType"


class UnknownFuelType(ValidationError):
    kind = "UnknownFuelType"


# =============================================================================
# BANKING
# =============================================================================

class InvalidAmount(ValidationError):
    kind = "InvalidAmount"


class NonPositiveCB(ValidationError):
    kind = "NonPositiveCB"


class AmountExceedsAvailable(ValidationError):
    kind = "AmountExceedsAvailable"


class NoBankedSurplus(ValidationError):
    kind = "NoBankedSurplus"


class AmountExceedsBanked(ValidationError):
    kind = "AmountExceedsBanked"


# =============================================================================
# POOLING
# =============================================================================

class PoolMinimumMembers(ValidationError):
    kind = "PoolMinimumMembers"


class InvalidMemberCB(ValidationError):
    kind = "InvalidMemberCB"


class PoolNegativeTotal(ValidationError):
    kind = "PoolNegativeTotal"


class MemberExitsWorse(ValidationError):
    kind = "MemberExitsWorse"


class MemberExitsNegative(ValidationError):
    kind = "MemberExitsNegative"


# =============================================================================
# LOOKUPS
# =============================================================================

class RouteNotFound(NotFoundError):
    kind = "RouteNotFound"


class RecordNotFound(NotFoundError):
    kind = "RecordNotFound"


class BaselineNotSet(NotFoundError):
    kind = "BaselineNotSet"
