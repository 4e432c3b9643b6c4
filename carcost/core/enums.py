from enum import Enum


class VehicleType(str, Enum):
    SIMPLE = "simple"
    NORMAL = "normal"
    LARGE = "large"
    LUXURY = "luxury"

    def __str__(self):
        return self.value


class MaintenanceLevel(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

    def __str__(self):
        return self.value


class DepreciationRate(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

    def __str__(self):
        return self.value


class FinancingType(str, Enum):
    CASH = "cash"
    LOAN = "loan"
    LEASING = "leasing"

    def __str__(self):
        return self.value


class LoanType(str, Enum):
    ANNUITY = "annuity"
    RESIDUAL = "residual"

    def __str__(self):
        return self.value


class LeasingType(str, Enum):
    PRIVATE = "private"
    BUSINESS = "business"

    def __str__(self):
        return self.value


class SiteName(str, Enum):
    BLOCKET = "blocket"
    WAYKE = "wayke"
    CARLA = "carla"

    def __str__(self):
        return self.value
