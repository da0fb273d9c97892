"""
CB Formula Tables and Evaluator

Pure functions over the fixed regulatory constants:

    energy in scope  = fuel consumption (t) x 41 000 MJ/t
    target intensity = 91.16 x (1 - reduction% / 100)
    CB               = (target - actual intensity) x energy / 1 000 000   [tCO2eq]

All arithmetic is plain float. Nothing is rounded here; rounding for
display belongs to whoever renders the number.
"""
from typing import Dict

from ...models.domain import FuelType, Route


# =============================================================================
# REGULATORY CONSTANTS
# =============================================================================

ENERGY_MJ_PER_TONNE = 41000
BASELINE_INTENSITY = 91.16  # gCO2e/MJ
GRAMS_PER_TONNE = 1_000_000
MIN_REPORTING_YEAR = 2024

# Reduction below the baseline intensity, in percent
REDUCTION_PERCENT_BY_YEAR: Dict[int, float] = {
    2025: 2,
    2030: 6,
    2035: 14.5,
    2040: 31,
    2045: 62,
    2050: 80,
}
DEFAULT_REDUCTION_PERCENT = 2

# tCO2 per tonne of fuel burned
EMISSION_FACTORS: Dict[FuelType, float] = {
    FuelType.HFO: 3.114,
    FuelType.LNG: 2.750,
    FuelType.MGO: 3.206,
}

_missing_factors = set(FuelType) - set(EMISSION_FACTORS)
if _missing_factors:
    raise RuntimeError(f"No emission factor for fuel types: {sorted(f.value for f in _missing_factors)}")


# =============================================================================
# FORMULAS
# =============================================================================

def energy_in_scope(fuel_consumption: float) -> float:
    """Energy content of the fuel burned, in MJ."""
    return fuel_consumption * ENERGY_MJ_PER_TONNE


def reduction_percent(year: int) -> float:
    return REDUCTION_PERCENT_BY_YEAR.get(year, DEFAULT_REDUCTION_PERCENT)


def target_intensity(year: int) -> float:
    """Target GHG intensity (gCO2e/MJ) for a reporting year."""
    return BASELINE_INTENSITY * (1 - reduction_percent(year) / 100)


def compliance_balance_value(ghg_intensity: float, fuel_consumption: float, year: int) -> float:
    """Signed CB in tCO2eq. Positive means the route beat the target."""
    energy = energy_in_scope(fuel_consumption)
    return (target_intensity(year) - ghg_intensity) * energy / GRAMS_PER_TONNE


def route_compliance_balance(route: Route, year: int) -> float:
    return compliance_balance_value(route.ghg_intensity, route.fuel_consumption, year)


def total_emissions(fuel_consumption: float, fuel_type: FuelType) -> float:
    """Total emissions in tCO2. Informational only, not part of the CB."""
    return fuel_consumption * EMISSION_FACTORS[fuel_type]


def route_total_emissions(route: Route) -> float:
    return total_emissions(route.fuel_consumption, route.fuel_type)


def percent_diff(ghg_intensity: float, baseline_intensity: float) -> float:
    """Intensity difference against the baseline route, in percent."""
    return (ghg_intensity / baseline_intensity - 1) * 100


def is_compliant(ghg_intensity: float, target: float) -> bool:
    return ghg_intensity <= target
