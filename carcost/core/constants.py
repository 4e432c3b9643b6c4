"""Lookup tables for the cost model.

All figures are SEK and based on the Swedish market 2025-2026. The tables are
grouped in a ``CostTables`` object so callers can pass their own set to the
calculator; ``DEFAULT_TABLES`` is used when nothing is passed.
"""
import math
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from carcost.core.enums import DepreciationRate, MaintenanceLevel, VehicleType


class AgeBracket(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_age: float  # exclusive upper bound in years
    rate: float     # share of current value lost per year


AGE_DEPRECIATION_CURVE: Tuple[AgeBracket, ...] = (
    AgeBracket(max_age=1, rate=0.25),
    AgeBracket(max_age=3, rate=0.15),
    AgeBracket(max_age=5, rate=0.10),
    AgeBracket(max_age=8, rate=0.06),
    AgeBracket(max_age=math.inf, rate=0.04),
)

# > 1.0 depreciates faster than the base curve, < 1.0 slower
FUEL_DEPRECIATION_MULTIPLIERS: Dict[str, float] = {
    "bensin": 0.75,
    "diesel": 1.00,
    "hybrid": 0.80,
    "laddhybrid": 0.90,
    "el": 1.25,
    "e85": 1.10,
    "biogas": 1.10,
    "gas": 1.10,
    "hvo": 1.00,
}

DEPRECIATION_OVERRIDE_FACTORS: Dict[DepreciationRate, float] = {
    DepreciationRate.LOW: 0.75,
    DepreciationRate.NORMAL: 1.00,
    DepreciationRate.HIGH: 1.30,
}

# SEK/year at the reference mileage
MAINTENANCE_COSTS: Dict[VehicleType, Dict[MaintenanceLevel, float]] = {
    VehicleType.SIMPLE: {MaintenanceLevel.LOW: 3000, MaintenanceLevel.NORMAL: 5000, MaintenanceLevel.HIGH: 8000},
    VehicleType.NORMAL: {MaintenanceLevel.LOW: 5000, MaintenanceLevel.NORMAL: 8000, MaintenanceLevel.HIGH: 12000},
    VehicleType.LARGE: {MaintenanceLevel.LOW: 8000, MaintenanceLevel.NORMAL: 12000, MaintenanceLevel.HIGH: 18000},
    VehicleType.LUXURY: {MaintenanceLevel.LOW: 12000, MaintenanceLevel.NORMAL: 20000, MaintenanceLevel.HIGH: 35000},
}
MAINTENANCE_REFERENCE_MILEAGE = 1500  # mil/year

# one full set of tires
TIRE_COSTS: Dict[VehicleType, float] = {
    VehicleType.SIMPLE: 4000,
    VehicleType.NORMAL: 6000,
    VehicleType.LARGE: 10000,
    VehicleType.LUXURY: 15000,
}
TIRE_REPLACEMENT_KM = 60000
TIRE_MIN_YEARS = 2
TIRE_MAX_YEARS = 5

DEFAULT_TAX_BY_FUEL: Dict[str, float] = {
    "bensin": 2000,
    "diesel": 2500,
    "el": 360,
    "hybrid": 1500,
    "laddhybrid": 1200,
    "hvo": 2500,
    "e85": 1800,
    "biogas": 1500,
    "gas": 1500,
}
FALLBACK_ANNUAL_TAX = 2000

# liters, kWh or kg per mil
ESTIMATED_CONSUMPTION: Dict[str, float] = {
    "bensin": 0.7,
    "diesel": 0.6,
    "el": 2.0,
    "hybrid": 0.5,
    "laddhybrid": 0.4,
    "hvo": 0.6,
    "e85": 0.9,
    "biogas": 0.8,
    "gas": 0.8,
}
FALLBACK_FUEL_TYPE = "bensin"

# (value, label, unit, default price)
FUEL_TYPES: Tuple[Tuple[str, str, str, float], ...] = (
    ("bensin", "Bensin", "kr/l", 18.5),
    ("diesel", "Diesel", "kr/l", 19.5),
    ("hvo", "HVO", "kr/l", 25.0),
    ("e85", "E85", "kr/l", 14.5),
    ("biogas", "Biogas", "kr/kg", 32.0),
    ("gas", "Fordonsgas/CNG", "kr/kg", 32.0),
    ("el", "El", "kr/kWh", 2.5),
    ("hybrid", "Hybrid", "kr/l", 18.5),
    ("laddhybrid", "Laddhybrid", "kr/l", 18.5),
)


class CostTables(BaseModel):
    model_config = ConfigDict(frozen=True)

    age_depreciation_curve: Tuple[AgeBracket, ...] = AGE_DEPRECIATION_CURVE
    fuel_depreciation_multipliers: Dict[str, float] = Field(default_factory=lambda: dict(FUEL_DEPRECIATION_MULTIPLIERS))
    depreciation_override_factors: Dict[DepreciationRate, float] = Field(default_factory=lambda: dict(DEPRECIATION_OVERRIDE_FACTORS))
    maintenance_costs: Dict[VehicleType, Dict[MaintenanceLevel, float]] = Field(default_factory=lambda: {k: dict(v) for k, v in MAINTENANCE_COSTS.items()})
    maintenance_reference_mileage: float = MAINTENANCE_REFERENCE_MILEAGE
    tire_costs: Dict[VehicleType, float] = Field(default_factory=lambda: dict(TIRE_COSTS))
    tire_replacement_km: float = TIRE_REPLACEMENT_KM
    tire_min_years: float = TIRE_MIN_YEARS
    tire_max_years: float = TIRE_MAX_YEARS
    default_tax_by_fuel: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_TAX_BY_FUEL))
    fallback_annual_tax: float = FALLBACK_ANNUAL_TAX
    estimated_consumption: Dict[str, float] = Field(default_factory=lambda: dict(ESTIMATED_CONSUMPTION))
    fallback_fuel_type: str = FALLBACK_FUEL_TYPE


DEFAULT_TABLES = CostTables()
