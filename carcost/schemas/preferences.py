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


class UserPreferences(CamelModel):
    annual_mileage: float = 1500
    primary_fuel_type: str = "bensin"
    primary_fuel_price: float = 18.5
    has_secondary_fuel: bool = False
    secondary_fuel_type: str = "el"
    secondary_fuel_price: float = 2.5
    secondary_fuel_share: float = 50
    vehicle_type: VehicleType = VehicleType.NORMAL
    maintenance_level: MaintenanceLevel = MaintenanceLevel.NORMAL
    depreciation_rate: DepreciationRate = DepreciationRate.NORMAL
    ownership_years: int = 5
    insurance: float = 500      # kr/month
    parking: float = 0          # kr/month
    washing_care: float = 250   # kr/month
    financing_type: FinancingType = FinancingType.CASH
    loan_type: LoanType = LoanType.RESIDUAL
    loan_amount: float = 0
    down_payment_percent: float = 20
    residual_value_percent: float = 50
    interest_rate: float = 5.0
    loan_years: int = 3
    monthly_admin_fee: float = 60
    leasing_type: LeasingType = LeasingType.PRIVATE
    monthly_leasing_fee: float = 3500
    leasing_includes_insurance: bool = False
    annual_tax: float = 2000
    has_malus_tax: bool = False
    malus_tax_amount: float = 0
    annual_tire_cost: Optional[float] = None


class PreferencesUpdate(CamelModel):
    annual_mileage: Optional[float] = None
    primary_fuel_type: Optional[str] = None
    primary_fuel_price: Optional[float] = None
    has_secondary_fuel: Optional[bool] = None
    secondary_fuel_type: Optional[str] = None
    secondary_fuel_price: Optional[float] = None
    secondary_fuel_share: Optional[float] = None
    vehicle_type: Optional[VehicleType] = None
    maintenance_level: Optional[MaintenanceLevel] = None
    depreciation_rate: Optional[DepreciationRate] = None
    ownership_years: Optional[int] = None
    insurance: Optional[float] = None
    parking: Optional[float] = None
    washing_care: Optional[float] = None
    financing_type: Optional[FinancingType] = None
    loan_type: Optional[LoanType] = None
    loan_amount: Optional[float] = None
    down_payment_percent: Optional[float] = None
    residual_value_percent: Optional[float] = None
    interest_rate: Optional[float] = None
    loan_years: Optional[int] = None
    monthly_admin_fee: Optional[float] = None
    leasing_type: Optional[LeasingType] = None
    monthly_leasing_fee: Optional[float] = None
    leasing_includes_insurance: Optional[bool] = None
    annual_tax: Optional[float] = None
    has_malus_tax: Optional[bool] = None
    malus_tax_amount: Optional[float] = None
    annual_tire_cost: Optional[float] = None


DEFAULT_PREFERENCES = UserPreferences()
