"""Domain models - pure Python dataclasses representing simulation inputs and results"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ValidationErrorCode(str, Enum):
    """Machine-readable codes attached to field validation errors"""

    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_NUMBER = "INVALID_NUMBER"
    INVALID_EMAIL = "INVALID_EMAIL"
    NEGATIVE_NUMBER = "NEGATIVE_NUMBER"
    ZERO_VALUE = "ZERO_VALUE"
    SURFACE_OUT_OF_RANGE = "SURFACE_OUT_OF_RANGE"
    BEDROOMS_OUT_OF_RANGE = "BEDROOMS_OUT_OF_RANGE"
    LOCATION_SCORE_OUT_OF_RANGE = "LOCATION_SCORE_OUT_OF_RANGE"


@dataclass(frozen=True)
class FieldError:
    """Validation failure for a single input field"""

    field: str
    code: ValidationErrorCode
    message: str


@dataclass(frozen=True)
class PropertyFeatures:
    """Property characteristics feeding the rental price regression"""

    surface: float  # square meters
    bedrooms: int
    location_score: float


@dataclass(frozen=True)
class SimulationInput:
    """Validated prospect submission"""

    purchase_price: float
    monthly_rent: float
    annual_fee: float
    email: str
    surface: Optional[float] = None
    bedrooms: Optional[int] = None
    location_score: Optional[float] = None

    @property
    def features(self) -> Optional[PropertyFeatures]:
        """Data-driven triple, only when all three values were supplied"""
        if self.surface is None or self.bedrooms is None or self.location_score is None:
            return None
        return PropertyFeatures(
            surface=self.surface,
            bedrooms=self.bedrooms,
            location_score=self.location_score,
        )


@dataclass(frozen=True)
class BaselineYield:
    """Three-year projection from the prospect's own rent assumption"""

    three_year_rent: float
    three_year_fee: float
    three_year_commission: float
    average_monthly_net_income: float
    monthly_net_return_pct: float


@dataclass(frozen=True)
class DataDrivenYield:
    """Three-year projection from the regression-estimated annual paid price"""

    annual_paid_price: float
    three_year_income: float
    commission: float
    three_year_fee: float
    three_year_net_income: float
    expected_monthly_net_income: float
    expected_monthly_net_return_pct: float


@dataclass(frozen=True)
class SimulationResult:
    """Output of the yield calculator"""

    baseline: BaselineYield
    data_driven: Optional[DataDrivenYield] = None

    @property
    def average_monthly_net_income(self) -> float:
        return self.baseline.average_monthly_net_income

    @property
    def monthly_net_return_pct(self) -> float:
        return self.baseline.monthly_net_return_pct

    @property
    def expected_monthly_net_income(self) -> Optional[float]:
        if self.data_driven is None:
            return None
        return self.data_driven.expected_monthly_net_income

    @property
    def expected_monthly_net_return_pct(self) -> Optional[float]:
        if self.data_driven is None:
            return None
        return self.data_driven.expected_monthly_net_return_pct


@dataclass(frozen=True)
class ResultDisplay:
    """Display-ready strings for a simulation result"""

    average_monthly_net_income: str
    monthly_net_return: str
    show_expected: bool
    expected_monthly_net_income: Optional[str] = None
    expected_monthly_net_return: Optional[str] = None
