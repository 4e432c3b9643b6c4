"""Annual cost of car ownership.

``calculate_costs`` is a pure function: every call builds its own result from
the input and the read-only lookup tables, so it can be used concurrently
without locking.
"""
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Tuple

from carcost.core.constants import DEFAULT_TABLES, CostTables
from carcost.core.enums import DepreciationRate, FinancingType, LoanType, MaintenanceLevel, VehicleType
from carcost.schemas.calculator import CalculatorInput, CostBreakdown
from carcost.services.inputs import resolve_tire_cost, resolve_vehicle_age

KM_PER_MIL = 10
MONTHS_PER_YEAR = 12


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (2.5 -> 3, -2.5 -> -2).

    A value that overflowed to inf or became NaN counts as 0.
    """
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def format_per_km(value: float) -> str:
    if not math.isfinite(value):
        return "0.00"
    exact = Decimal(value)
    # Decimal(float) is exact, so halves are decided on the real binary value
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + 3)
        return str(exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _ratio(numerator: int, denominator: float) -> float:
    # an integer total too large for a float is treated like an overflowed component
    try:
        return numerator / denominator
    except OverflowError:
        return math.inf


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def get_depreciation_rate_for_age(age: float, tables: CostTables = DEFAULT_TABLES) -> float:
    """Base yearly depreciation rate for a car of the given age (years)."""
    for bracket in tables.age_depreciation_curve:
        if age < bracket.max_age:
            return bracket.rate
    return tables.age_depreciation_curve[-1].rate


def compute_depreciation(
    purchase_price: float,
    vehicle_age: Optional[float],
    fuel_type: str,
    depreciation_rate: DepreciationRate,
    ownership_years: int,
    tables: CostTables = DEFAULT_TABLES,
) -> int:
    """Average yearly value loss over the ownership period.

    The car is aged one year per simulated step, so ownership that crosses a
    bracket boundary of the age curve picks up the lower rate for the later
    years. Each year's loss is taken from the value left after the previous
    years.
    """
    fuel_mult = tables.fuel_depreciation_multipliers.get(fuel_type, 1.0)
    override_fact = tables.depreciation_override_factors[depreciation_rate]
    start_age = resolve_vehicle_age(vehicle_age)

    total_depreciation = 0.0
    current_value = purchase_price
    for year in range(ownership_years):
        base_rate = get_depreciation_rate_for_age(start_age + year, tables)
        effective_rate = _clamp(base_rate * fuel_mult * override_fact, 0.0, 1.0)
        year_depreciation = current_value * effective_rate
        total_depreciation += year_depreciation
        current_value -= year_depreciation

    if ownership_years <= 0:
        return 0
    return round_half_up(total_depreciation / ownership_years)


def compute_fuel_cost(
    consumption: float,
    primary_price: float,
    has_secondary: bool,
    secondary_price: float,
    secondary_share: float,
    annual_mileage_mil: float,
) -> float:
    # Both legs of a plug-in hybrid use the same consumption figure
    distance_km = annual_mileage_mil * KM_PER_MIL
    if not has_secondary:
        return consumption * primary_price / 10 * distance_km

    share = secondary_share / 100
    primary_leg = consumption * primary_price * (1 - share) / 10 * distance_km
    secondary_leg = consumption * secondary_price * share / 10 * distance_km
    return primary_leg + secondary_leg


def _annuity_payment(principal: float, monthly_rate: float, num_payments: int) -> float:
    if num_payments <= 0:
        return 0.0
    if monthly_rate == 0:
        return principal / num_payments
    try:
        factor = (1 + monthly_rate) ** num_payments
    except OverflowError:
        # the payment tends to interest-only on the full principal
        return principal * monthly_rate
    if factor == 1:
        return principal / num_payments
    return principal * monthly_rate * factor / (factor - 1)


def _residual_payment(
    principal: float,
    residual: float,
    monthly_rate: float,
    num_payments: int,
) -> float:
    amortize_amount = max(0.0, principal - residual)
    monthly_amort = amortize_amount / num_payments if num_payments > 0 else 0.0
    avg_balance = (principal + residual) / 2
    return monthly_amort + avg_balance * monthly_rate


def compute_financing(inp: CalculatorInput) -> Tuple[int, int]:
    """Return ``(monthly_loan_payment, annual_financing)``.

    The annual figure is always derived from the rounded monthly payment.
    """
    if inp.financing_type == FinancingType.LEASING:
        monthly = round_half_up(inp.monthly_leasing_fee)
        return monthly, monthly * MONTHS_PER_YEAR

    if inp.financing_type != FinancingType.LOAN:
        return 0, 0

    num_payments = inp.loan_years * MONTHS_PER_YEAR
    if num_payments <= 0:
        return 0, 0

    down_payment = inp.purchase_price * (inp.down_payment_percent / 100)
    principal = inp.purchase_price - down_payment
    monthly_rate = inp.interest_rate / 100 / MONTHS_PER_YEAR

    if inp.loan_type == LoanType.RESIDUAL:
        residual = inp.purchase_price * inp.residual_value_percent / 100
        base_payment = _residual_payment(principal, residual, monthly_rate, num_payments)
    else:
        base_payment = _annuity_payment(principal, monthly_rate, num_payments)

    monthly = round_half_up(base_payment + inp.monthly_admin_fee)
    return monthly, monthly * MONTHS_PER_YEAR


def compute_maintenance(
    vehicle_type: VehicleType,
    maintenance_level: MaintenanceLevel,
    annual_mileage_mil: float,
    tables: CostTables = DEFAULT_TABLES,
) -> int:
    base_cost = tables.maintenance_costs[vehicle_type][maintenance_level]
    return round_half_up(base_cost * annual_mileage_mil / tables.maintenance_reference_mileage)


def tire_replacement_years(annual_mileage_mil: float, tables: CostTables = DEFAULT_TABLES) -> float:
    """Years between tire sets, between 2 (rubber ageing) and 5."""
    distance_km = annual_mileage_mil * KM_PER_MIL
    if distance_km <= 0:
        return tables.tire_max_years
    return _clamp(tables.tire_replacement_km / distance_km, tables.tire_min_years, tables.tire_max_years)


def compute_tire_cost(
    vehicle_type: VehicleType,
    annual_mileage_mil: float,
    annual_tire_cost: Optional[float] = None,
    tables: CostTables = DEFAULT_TABLES,
) -> int:
    computed = tables.tire_costs[vehicle_type] / tire_replacement_years(annual_mileage_mil, tables)
    return round_half_up(resolve_tire_cost(annual_tire_cost, computed))


def compute_annual_tax(annual_tax: float, has_malus_tax: bool, malus_tax_amount: float) -> float:
    return annual_tax + (malus_tax_amount if has_malus_tax else 0.0)


def calculate_costs(inp: CalculatorInput, tables: CostTables = DEFAULT_TABLES) -> CostBreakdown:
    fuel = round_half_up(compute_fuel_cost(
        inp.fuel_consumption,
        inp.primary_fuel_price,
        inp.has_secondary_fuel,
        inp.secondary_fuel_price,
        inp.secondary_fuel_share,
        inp.annual_mileage,
    ))
    depreciation = compute_depreciation(
        inp.purchase_price,
        inp.vehicle_age,
        inp.primary_fuel_type,
        inp.depreciation_rate,
        inp.ownership_years,
        tables,
    )
    tax = round_half_up(compute_annual_tax(inp.annual_tax, inp.has_malus_tax, inp.malus_tax_amount))
    maintenance = compute_maintenance(inp.vehicle_type, inp.maintenance_level, inp.annual_mileage, tables)
    tires = compute_tire_cost(inp.vehicle_type, inp.annual_mileage, inp.annual_tire_cost, tables)

    # a leasing fee that covers insurance replaces the separate premium
    if inp.financing_type == FinancingType.LEASING and inp.leasing_includes_insurance:
        insurance = 0
    else:
        insurance = round_half_up(inp.insurance * MONTHS_PER_YEAR)
    parking = round_half_up(inp.parking * MONTHS_PER_YEAR)
    washing_care = round_half_up(inp.washing_care * MONTHS_PER_YEAR)

    monthly_loan_payment, financing = compute_financing(inp)

    variable_costs = fuel + maintenance + tires
    fixed_costs = tax + insurance + parking + washing_care + financing + depreciation
    total_annual = variable_costs + fixed_costs

    if inp.annual_mileage > 0:
        cost_per_mil = round_half_up(_ratio(total_annual, inp.annual_mileage))
        cost_per_km = format_per_km(_ratio(total_annual, inp.annual_mileage * KM_PER_MIL))
    else:
        cost_per_mil = 0
        cost_per_km = "0.00"

    return CostBreakdown(
        fuel=fuel,
        depreciation=depreciation,
        tax=tax,
        maintenance=maintenance,
        tires=tires,
        insurance=insurance,
        parking=parking,
        washing_care=washing_care,
        financing=financing,
        monthly_loan_payment=monthly_loan_payment,
        variable_costs=variable_costs,
        fixed_costs=fixed_costs,
        total_annual=total_annual,
        monthly_total=round_half_up(_ratio(total_annual, MONTHS_PER_YEAR)),
        cost_per_mil=cost_per_mil,
        cost_per_km=cost_per_km,
    )
