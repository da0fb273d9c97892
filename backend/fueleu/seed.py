"""
Reference route data.

Five routes covering every vessel and fuel type, R002 as baseline.
"""
import logging
from typing import List

from .models.domain import Route
from .services.compliance.ports import RouteRepository
from .services.compliance.route_service import RouteService

logger = logging.getLogger(__name__)

REFERENCE_ROUTES = [
    {"route_code": "R001", "vessel_type": "Container", "fuel_type": "HFO", "year": 2024,
     "ghg_intensity": 91.0, "fuel_consumption": 5000, "distance": 12000, "is_baseline": False},
    {"route_code": "R002", "vessel_type": "BulkCarrier", "fuel_type": "LNG", "year": 2024,
     "ghg_intensity": 88.0, "fuel_consumption": 4800, "distance": 11500, "is_baseline": True},
    {"route_code": "R003", "vessel_type": "Tanker", "fuel_type": "MGO", "year": 2024,
     "ghg_intensity": 93.5, "fuel_consumption": 5100, "distance": 12500, "is_baseline": False},
    {"route_code": "R004", "vessel_type": "RoRo", "fuel_type": "HFO", "year": 2025,
     "ghg_intensity": 89.2, "fuel_consumption": 4900, "distance": 11800, "is_baseline": False},
    {"route_code": "R005", "vessel_type": "Container", "fuel_type": "LNG", "year": 2025,
     "ghg_intensity": 90.5, "fuel_consumption": 4950, "distance": 11900, "is_baseline": False},
]


def seed_routes(route_repo: RouteRepository) -> List[Route]:
    """Register the reference routes, replacing any with the same code."""
    service = RouteService(route_repo)
    routes = [service.register_route(candidate) for candidate in REFERENCE_ROUTES]
    logger.info(f"Seeded {len(routes)} reference routes")
    return routes
