"""
Compliance Balance Service

Evaluates the CB formula for a route, stores the result as the ship's
compliance record for the year, and answers the CB read models
(summary with banking, adjusted CB).
"""
import logging
from typing import List, Optional

from ...models.domain import AdjustedCB, CBSummary, ComplianceBalance
from .errors import RecordNotFound, RouteNotFound
from .formula import route_compliance_balance
from .ports import BankRepository, ComplianceRepository, RouteRepository

logger = logging.getLogger(__name__)


class ComplianceBalanceService:
    """Computes and reads Compliance Balances through the repository ports."""

    def __init__(
        self,
        route_repo: RouteRepository,
        compliance_repo: ComplianceRepository,
        bank_repo: Optional[BankRepository] = None,
    ):
        self.route_repo = route_repo
        self.compliance_repo = compliance_repo
        self.bank_repo = bank_repo

    def compute_cb(self, route_code: str, ship_id: str, year: int) -> ComplianceBalance:
        """
        Compute the CB of a ship for a target year from one of its routes.

        The result is persisted as the (ship_id, year) compliance record;
        whether a repeat computation replaces the previous one is up to
        the repository.

        Args:
            route_code: Human route code (R001, ...)
            ship_id: Ship the balance belongs to
            year: Target year used to pick the intensity target

        Returns:
            The computed ComplianceBalance

        Raises:
            RouteNotFound: no route with that code
        """
        route = self.route_repo.find_by_route_code(route_code)
        if route is None:
            raise RouteNotFound(f"Route {route_code} not found")

        cb_value = route_compliance_balance(route, year)

        self.compliance_repo.save(
            ship_id=ship_id,
            year=year,
            cb_gco2eq=cb_value,
            route_code=route.route_code,
        )
        logger.info(f"Computed CB for ship={ship_id} year={year} route={route_code}: {cb_value}")

        return ComplianceBalance(value=cb_value, year=year, ship_id=ship_id)

    def get_cb_summary(self, ship_id: str, year: int) -> CBSummary:
        """CB of the record, the cumulative amount banked from it, and what is left."""
        record = self.compliance_repo.find_by_ship_and_year(ship_id, year)
        if record is None:
            raise RecordNotFound(f"Compliance balance not found for ship {ship_id} in {year}")

        banked = self.bank_repo.get_total_banked(ship_id, year) if self.bank_repo else 0.0
        balance = ComplianceBalance(record.cb_gco2eq, year, ship_id)

        return CBSummary(
            ship_id=ship_id,
            year=year,
            cb_before=balance.value,
            banked=banked,
            cb_after=balance.subtract(banked).value,
        )

    def get_adjusted_cb(self, year: int, ship_id: Optional[str] = None) -> List[AdjustedCB]:
        """
        CB after applied banked surplus, for one ship or every ship
        recorded for the year.

        Adjusted CB is record CB + applied banked amount.
        """
        if ship_id is not None:
            record = self.compliance_repo.find_by_ship_and_year(ship_id, year)
            if record is None:
                raise RecordNotFound(f"Compliance balance not found for ship {ship_id} in {year}")
            records = [record]
        else:
            records = self.compliance_repo.list_by_year(year)

        results = []
        for record in records:
            adjusted = self.compliance_repo.find_adjusted_cb(record.ship_id, year)
            results.append(
                AdjustedCB(
                    ship_id=record.ship_id,
                    year=year,
                    cb_before=record.cb_gco2eq,
                    cb_after=record.cb_gco2eq if adjusted is None else adjusted,
                )
            )
        return results
