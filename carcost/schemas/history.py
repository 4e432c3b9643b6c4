from typing import Optional

from pydantic import Field

from carcost.core.enums import SiteName
from carcost.schemas.base import CamelModel
from carcost.schemas.calculator import CostBreakdown
from carcost.schemas.vehicle import VehicleData


class HistoryItem(CamelModel):
    id: str
    url: str
    site: SiteName
    vehicle_name: Optional[str] = None
    purchase_price: float
    fuel_type: str
    fuel_type_label: Optional[str] = None
    vehicle_year: Optional[int] = None
    mileage: Optional[float] = None
    monthly_total: int
    cost_per_mil: int
    timestamp: int  # epoch milliseconds


class HistoryCreate(CamelModel):
    vehicle: VehicleData
    costs: CostBreakdown
    site: SiteName
    url: str = Field(..., min_length=1, max_length=2048)


class HistoryCount(CamelModel):
    count: int
