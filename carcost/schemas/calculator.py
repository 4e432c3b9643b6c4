from typing import Optional

from carcost.core.enums import (
    DepreciationRate,
    FinancingType,
    LeasingType,
    LoanType,
    MaintenanceLevel,
    VehicleType,
)
from carcost.schemas.base import CamelModel


class CalculatorInput(CamelModel):
    purchase_price: float
    fuel_consumption: float  # per mil (10 km)
    primary_fuel_type: str = "bensin"
    primary_fuel_price: float = 18.5
    has_secondary_fuel: bool = False
    secondary_fuel_type: str = "el"
    secondary_fuel_price: float = 2.5
    secondary_fuel_share: float = 0.0  # percent of distance on the secondary fuel
    annual_mileage: float = 1500  # mil/year
    vehicle_type: VehicleType = VehicleType.NORMAL
    maintenance_level: MaintenanceLevel = MaintenanceLevel.NORMAL
    depreciation_rate: DepreciationRate = DepreciationRate.NORMAL
    vehicle_age: Optional[float] = None
    ownership_years: int = 5

    # monthly amounts
    insurance: float = 0.0
    parking: float = 0.0
    washing_care: float = 0.0
    monthly_admin_fee: float = 0.0

    financing_type: FinancingType = FinancingType.CASH
    loan_type: LoanType = LoanType.ANNUITY
    loan_amount: float = 0.0
    down_payment_percent: float = 20.0
    residual_value_percent: float = 50.0
    interest_rate: float = 5.0  # annual percent
    loan_years: int = 3

    leasing_type: LeasingType = LeasingType.PRIVATE
    monthly_leasing_fee: float = 0.0
    leasing_includes_insurance: bool = False

    annual_tire_cost: Optional[float] = None
    annual_tax: float = 0.0
    has_malus_tax: bool = False
    malus_tax_amount: float = 0.0


class CostBreakdown(CamelModel):
    fuel: int
    depreciation: int
    tax: int
    maintenance: int
    tires: int
    insurance: int
    parking: int
    washing_care: int
    financing: int
    monthly_loan_payment: int
    variable_costs: int
    fixed_costs: int
    total_annual: int
    monthly_total: int
    cost_per_mil: int
    cost_per_km: str


class DepreciationRateOut(CamelModel):
    age: float
    rate: float
