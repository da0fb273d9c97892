"""
Route Service

Listing, registration, baseline designation and baseline comparison of
routes.
"""
import logging
from dataclasses import replace
from typing import Any, List, Mapping, Optional

from ...models.domain import ComparisonResult, Route, RouteComparison, RouteFilters
from .errors import BaselineNotSet, RouteNotFound
from .formula import DEFAULT_REDUCTION_PERCENT, BASELINE_INTENSITY, is_compliant, percent_diff, target_intensity
from .ports import RouteRepository
from .route_validator import validate_route

logger = logging.getLogger(__name__)

# Target used for comparison when the caller names no year: 2% below baseline
DEFAULT_COMPARISON_TARGET = BASELINE_INTENSITY * (1 - DEFAULT_REDUCTION_PERCENT / 100)


class RouteService:

    def __init__(self, route_repo: RouteRepository):
        self.route_repo = route_repo

    def list_routes(self, filters: Optional[RouteFilters] = None) -> List[Route]:
        return self.route_repo.find_all(filters)

    def register_route(self, candidate: Mapping[str, Any]) -> Route:
        """Validate raw route values and store them, replacing any route with the same code."""
        route = validate_route(candidate)
        existing = self.route_repo.find_by_route_code(route.route_code)
        if existing is not None:
            # Keep the stored identity, and the baseline flag unless one was given
            route = replace(
                route,
                id=existing.id,
                is_baseline=bool(candidate.get("is_baseline", existing.is_baseline)),
            )
        stored = self.route_repo.upsert(route)
        if stored.is_baseline:
            stored = self.route_repo.set_baseline(stored.route_code)
        logger.info(f"Registered route {stored.route_code} ({stored.vessel_type.value}/{stored.fuel_type.value})")
        return stored

    def set_baseline(self, route_code: str) -> Route:
        if self.route_repo.find_by_route_code(route_code) is None:
            raise RouteNotFound(f"Route {route_code} not found")
        route = self.route_repo.set_baseline(route_code)
        logger.info(f"Baseline route set to {route_code}")
        return route

    def compare(self, year: Optional[int] = None) -> ComparisonResult:
        """
        Compare every non-baseline route with the baseline route.

        percent_diff = (route / baseline - 1) x 100
        compliant    = route intensity <= target
        """
        baseline = self.route_repo.find_baseline()
        if baseline is None:
            raise BaselineNotSet("No baseline route set")

        target = target_intensity(year) if year is not None else DEFAULT_COMPARISON_TARGET

        comparisons = [
            RouteComparison(
                route_code=route.route_code,
                ghg_intensity=route.ghg_intensity,
                percent_diff=percent_diff(route.ghg_intensity, baseline.ghg_intensity),
                compliant=is_compliant(route.ghg_intensity, target),
            )
            for route in self.route_repo.find_all()
            if route.route_code != baseline.route_code
        ]

        return ComparisonResult(
            baseline_route_code=baseline.route_code,
            baseline_intensity=baseline.ghg_intensity,
            target=target,
            comparisons=comparisons,
        )
