from typing import Optional

from pydantic import Field

from carcost.core.enums import SiteName, VehicleType
from carcost.schemas.base import CamelModel
from carcost.schemas.calculator import CalculatorInput, CostBreakdown


class VehicleData(CamelModel):
    """Vehicle facts read from a listing; ``None`` where the listing had nothing."""

    purchase_price: float
    fuel_type: str = "bensin"
    fuel_type_label: Optional[str] = None
    fuel_consumption: Optional[float] = None
    vehicle_year: Optional[int] = None
    mileage: Optional[float] = None
    engine_power: Optional[float] = None
    co2_emissions: Optional[float] = None
    vehicle_type: VehicleType = VehicleType.NORMAL
    vehicle_name: Optional[str] = None
    effective_interest_rate: Optional[float] = None
    annual_tax: Optional[float] = None


class VehicleCostRequest(CamelModel):
    vehicle: VehicleData
    url: Optional[str] = Field(None, max_length=2048)
    site: Optional[SiteName] = None


class VehicleCostResponse(CamelModel):
    input: CalculatorInput
    breakdown: CostBreakdown
    history_id: Optional[str] = None
