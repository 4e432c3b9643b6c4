"""Building a calculator input from partial listing data and user preferences.

Every optional value goes through a small resolver with a fixed fallback so
each default can be checked on its own.
"""
import logging
from datetime import date
from typing import Optional

from carcost.core.constants import DEFAULT_TABLES, CostTables
from carcost.schemas.calculator import CalculatorInput
from carcost.schemas.preferences import UserPreferences
from carcost.schemas.vehicle import VehicleData

logger = logging.getLogger(__name__)

ELECTRIC = "el"
PLUG_IN_HYBRID = "laddhybrid"

# checked in order, first match wins ("diesel" must be tested before "el")
FUEL_KEYWORDS = (
    (("bensin", "petrol"), "bensin"),
    (("diesel",), "diesel"),
    (("hvo",), "hvo"),
    (("laddhybrid", "plug-in"), "laddhybrid"),
    (("hybrid", "elhybrid"), "hybrid"),
    (("el", "electric"), "el"),
    (("e85", "etanol"), "e85"),
    (("gas", "biogas"), "biogas"),
)


def resolve_vehicle_age(vehicle_age: Optional[float]) -> float:
    """Unknown age counts as a new car."""
    return vehicle_age if vehicle_age is not None else 0


def vehicle_age_from_year(vehicle_year: Optional[int], current_year: Optional[int] = None) -> Optional[int]:
    if vehicle_year is None:
        return None
    year = current_year if current_year is not None else date.today().year
    return max(0, year - vehicle_year)


def resolve_tire_cost(annual_tire_cost: Optional[float], computed: float) -> float:
    """An explicit non-zero yearly tire cost wins over the computed one."""
    if annual_tire_cost is not None and annual_tire_cost != 0:
        return annual_tire_cost
    return computed


def normalize_fuel_type(fuel_type: Optional[str], tables: CostTables = DEFAULT_TABLES) -> str:
    normalized = (fuel_type or "").lower().strip()
    for keywords, key in FUEL_KEYWORDS:
        if any(k in normalized for k in keywords):
            return key
    return tables.fallback_fuel_type


def resolve_fuel_consumption(
    reported: Optional[float],
    fuel_type: str,
    tables: CostTables = DEFAULT_TABLES,
) -> float:
    if reported is not None:
        return reported
    estimate = tables.estimated_consumption.get(fuel_type)
    if estimate is None:
        estimate = tables.estimated_consumption[tables.fallback_fuel_type]
    return estimate


def resolve_annual_tax(
    listing_tax: Optional[float],
    preferred_tax: float,
    fuel_type: str,
    tables: CostTables = DEFAULT_TABLES,
) -> float:
    """Listing tax first, then a user-customised tax, then the fuel default.

    A preference still equal to the stock default is treated as "not set".
    """
    if listing_tax is not None and listing_tax > 0:
        return listing_tax
    if preferred_tax != tables.fallback_annual_tax:
        return preferred_tax
    return tables.default_tax_by_fuel.get(fuel_type, tables.fallback_annual_tax)


def create_calculator_input(
    vehicle: VehicleData,
    prefs: UserPreferences,
    current_year: Optional[int] = None,
    tables: CostTables = DEFAULT_TABLES,
) -> CalculatorInput:
    fuel_type = normalize_fuel_type(vehicle.fuel_type, tables)
    fuel_consumption = resolve_fuel_consumption(vehicle.fuel_consumption, fuel_type, tables)
    if vehicle.fuel_consumption is None:
        logger.debug(f"Estimated consumption {fuel_consumption} for fuel type {fuel_type}")

    is_electric = fuel_type == ELECTRIC
    is_plug_in = fuel_type == PLUG_IN_HYBRID

    return CalculatorInput(
        purchase_price=vehicle.purchase_price,
        fuel_consumption=fuel_consumption,
        primary_fuel_type=fuel_type,
        # an electric car's only "fuel" is electricity
        primary_fuel_price=prefs.secondary_fuel_price if is_electric else prefs.primary_fuel_price,
        has_secondary_fuel=is_plug_in,
        secondary_fuel_type=ELECTRIC,
        secondary_fuel_price=prefs.secondary_fuel_price,
        secondary_fuel_share=prefs.secondary_fuel_share if is_plug_in else 0,
        annual_mileage=prefs.annual_mileage,
        vehicle_type=vehicle.vehicle_type,
        maintenance_level=prefs.maintenance_level,
        depreciation_rate=prefs.depreciation_rate,
        vehicle_age=vehicle_age_from_year(vehicle.vehicle_year, current_year),
        ownership_years=prefs.ownership_years,
        insurance=prefs.insurance,
        parking=prefs.parking,
        washing_care=prefs.washing_care,
        monthly_admin_fee=prefs.monthly_admin_fee,
        financing_type=prefs.financing_type,
        loan_type=prefs.loan_type,
        loan_amount=prefs.loan_amount,
        down_payment_percent=prefs.down_payment_percent,
        residual_value_percent=prefs.residual_value_percent,
        interest_rate=prefs.interest_rate,
        loan_years=prefs.loan_years,
        leasing_type=prefs.leasing_type,
        monthly_leasing_fee=prefs.monthly_leasing_fee,
        leasing_includes_insurance=prefs.leasing_includes_insurance,
        annual_tire_cost=prefs.annual_tire_cost,
        annual_tax=resolve_annual_tax(vehicle.annual_tax, prefs.annual_tax, fuel_type, tables),
        has_malus_tax=prefs.has_malus_tax,
        malus_tax_amount=prefs.malus_tax_amount,
    )
