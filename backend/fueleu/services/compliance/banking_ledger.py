"""
Banking Ledger

Banks surplus CB for a (ship, year) and applies banked surplus against a
deficit. Both operations read the current totals, validate, then write in
a single repository call; no partial banking, no partial application.

The ledger holds no state of its own and does not serialize concurrent
calls. The bank repository is the point of mutual exclusion per
(ship_id, year).
"""
import logging
import math

from ...models.domain import ApplyResult, BankEntry
from .errors import (
    AmountExceedsAvailable,
    AmountExceedsBanked,
    InvalidAmount,
    NoBankedSurplus,
    NonPositiveCB,
    RecordNotFound,
)
from .ports import BankRepository, ComplianceRepository

logger = logging.getLogger(__name__)


class BankingLedgerService:
    """Surplus banking and banked-credit application for a ship's yearly CB."""

    def __init__(self, compliance_repo: ComplianceRepository, bank_repo: BankRepository):
        self.compliance_repo = compliance_repo
        self.bank_repo = bank_repo

    def bank_surplus(self, ship_id: str, year: int, amount: float) -> BankEntry:
        """
        Bank part or all of a positive CB.

        Each request is checked against the record's CB alone, not against
        what earlier requests already banked for the same (ship_id, year).

        Args:
            ship_id: Ship holding the surplus
            year: Year of the compliance record
            amount: tCO2eq to bank, at most the record's CB

        Returns:
            The created bank entry, with nothing applied yet

        Raises:
            InvalidAmount: amount is zero, negative or not finite
            RecordNotFound: no compliance record for (ship_id, year)
            NonPositiveCB: the record has no surplus to bank
            AmountExceedsAvailable: amount is larger than the record's CB
        """
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidAmount("Amount must be positive")

        record = self.compliance_repo.find_by_ship_and_year(ship_id, year)
        if record is None:
            raise RecordNotFound(f"Compliance balance not found for ship {ship_id} in {year}")

        if record.cb_gco2eq <= 0:
            logger.warning(f"Bank rejected for ship={ship_id} year={year}: CB {record.cb_gco2eq} is not a surplus")
            raise NonPositiveCB("Cannot bank negative or zero CB")

        if amount > record.cb_gco2eq:
            logger.warning(
                f"Bank rejected for ship={ship_id} year={year}: amount {amount} exceeds CB {record.cb_gco2eq}"
            )
            raise AmountExceedsAvailable("Amount exceeds available CB")

        entry = self.bank_repo.create(ship_id=ship_id, year=year, amount_gco2eq=amount)
        logger.info(f"Banked {amount} tCO2eq for ship={ship_id} year={year}")
        return entry

    def apply_banked(self, ship_id: str, year: int, amount: float) -> ApplyResult:
        """
        Apply banked surplus against the ship's deficit.

        The applied amount is added to the ship's adjusted CB and never
        takes the remaining banked balance below zero.

        Raises:
            InvalidAmount: amount is zero, negative or not finite
            NoBankedSurplus: nothing banked and unapplied for (ship_id, year)
            AmountExceedsBanked: amount is larger than the unapplied total
        """
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidAmount("Amount must be positive")

        available = self.bank_repo.get_total_unapplied(ship_id, year)
        if available <= 0:
            logger.warning(f"Apply rejected for ship={ship_id} year={year}: no banked surplus")
            raise NoBankedSurplus("No banked surplus available")

        if amount > available:
            logger.warning(
                f"Apply rejected for ship={ship_id} year={year}: amount {amount} exceeds banked {available}"
            )
            raise AmountExceedsBanked("Amount exceeds banked surplus")

        self.bank_repo.apply(ship_id=ship_id, year=year, amount=amount)
        logger.info(f"Applied {amount} banked tCO2eq for ship={ship_id} year={year}")

        return ApplyResult(
            ship_id=ship_id,
            year=year,
            applied=amount,
            remaining_banked=available - amount,
        )
