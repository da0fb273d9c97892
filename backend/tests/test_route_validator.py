"""
Tests for route validation.

Checks run intensity → consumption → year, the first failure wins, and a
Route is never observable in an invalid state.
"""
import dataclasses
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fueleu.models.domain import FuelType, Route, VesselType
from fueleu.services.compliance.errors import (
    InvalidConsumption,
    InvalidDistance,
    InvalidIntensity,
    InvalidYear,
    UnknownFuelType,
    UnknownVesselType,
    ValidationError,
)
from fueleu.services.compliance.route_validator import validate_route


@pytest.fixture
def candidate():
    return {
        "id": "route-1",
        "route_code": "R001",
        "vessel_type": "Container",
        "fuel_type": "HFO",
        "year": 2024,
        "ghg_intensity": 91.0,
        "fuel_consumption": 5000,
        "distance": 12000,
        "is_baseline": False,
    }


class TestValidRoutes:

    def test_builds_route(self, candidate):
        route = validate_route(candidate)

        assert isinstance(route, Route)
        assert route.id == "route-1"
        assert route.route_code == "R001"
        assert route.vessel_type is VesselType.CONTAINER
        assert route.fuel_type is FuelType.HFO
        assert route.year == 2024
        assert route.ghg_intensity == 91.0
        assert route.fuel_consumption == 5000.0
        assert route.is_baseline is False

    def test_generates_id_when_missing(self, candidate):
        del candidate["id"]
        route = validate_route(candidate)
        assert len(route.id) == 36

    def test_route_is_immutable(self, candidate):
        route = validate_route(candidate)
        with pytest.raises(dataclasses.FrozenInstanceError):
            route.ghg_intensity = 1.0


class TestInvalidRoutes:

    def test_zero_intensity(self, candidate):
        candidate["ghg_intensity"] = 0
        with pytest.raises(InvalidIntensity, match="GHG intensity must be positive"):
            validate_route(candidate)

    def test_negative_consumption(self, candidate):
        candidate["fuel_consumption"] = -1
        with pytest.raises(InvalidConsumption, match="Fuel consumption must be positive"):
            validate_route(candidate)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_intensity(self, candidate, value):
        candidate["ghg_intensity"] = value
        with pytest.raises(InvalidIntensity, match="GHG intensity must be positive"):
            validate_route(candidate)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_consumption(self, candidate, value):
        candidate["fuel_consumption"] = value
        with pytest.raises(InvalidConsumption, match="Fuel consumption must be positive"):
            validate_route(candidate)

    def test_non_finite_distance(self, candidate):
        candidate["distance"] = float("nan")
        with pytest.raises(InvalidDistance):
            validate_route(candidate)

    def test_year_before_2024(self, candidate):
        candidate["year"] = 2023
        with pytest.raises(InvalidYear, match="Year must be 2024 or later"):
            validate_route(candidate)

    def test_year_2024_accepted(self, candidate):
        candidate["year"] = 2024
        assert validate_route(candidate).year == 2024

    def test_first_failure_wins(self, candidate):
        """All three invariants broken: only the intensity error is raised."""
        candidate.update(ghg_intensity=-5, fuel_consumption=0, year=2000)
        with pytest.raises(InvalidIntensity):
            validate_route(candidate)

    def test_consumption_checked_before_year(self, candidate):
        candidate.update(fuel_consumption=0, year=2000)
        with pytest.raises(InvalidConsumption):
            validate_route(candidate)

    def test_unknown_fuel_type(self, candidate):
        candidate["fuel_type"] = "Diesel"
        with pytest.raises(UnknownFuelType):
            validate_route(candidate)

    def test_unknown_vessel_type(self, candidate):
        candidate["vessel_type"] = "Ferry"
        with pytest.raises(UnknownVesselType):
            validate_route(candidate)

    def test_errors_are_validation_errors(self, candidate):
        candidate["ghg_intensity"] = 0
        with pytest.raises(ValidationError) as exc_info:
            validate_route(candidate)
        assert exc_info.value.kind == "InvalidIntensity"
        assert exc_info.value.to_dict() == {
            "error": "InvalidIntensity",
            "message": "GHG intensity must be positive",
        }
