"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, List, Optional

# Raw JSON values, left uncoerced for the domain validator
RawValue = Any


class SimulationRequest(BaseModel):
    """Request body for POST /v1/simulations"""

    purchase_price: RawValue = Field(None, description="Property acquisition cost")
    monthly_rent: RawValue = Field(None, description="Expected monthly rent")
    annual_fee: RawValue = Field(None, description="Yearly platform/management fee")
    email: RawValue = Field(None, description="Prospect contact email")
    surface: RawValue = Field(None, description="Surface in m², 20 to 120")
    bedrooms: RawValue = Field(None, description="Number of bedrooms, 1 to 4")
    location_score: RawValue = Field(None, description="Location score, 5.0 to 10.0")
    data_driven: bool = Field(False, description="Require surface, bedrooms and location score")


class SimulationInputSchema(BaseModel):
    """Validated simulation inputs"""

    purchase_price: float
    monthly_rent: float
    annual_fee: float
    email: str
    surface: Optional[float] = None
    bedrooms: Optional[int] = None
    location_score: Optional[float] = None


class SimulationResultSchema(BaseModel):
    """Unrounded calculator output"""

    average_monthly_net_income: float
    monthly_net_return_pct: float
    expected_monthly_net_income: Optional[float] = None
    expected_monthly_net_return_pct: Optional[float] = None


class ResultDisplaySchema(BaseModel):
    """Display-ready result strings"""

    average_monthly_net_income: str
    monthly_net_return: str
    show_expected: bool
    expected_monthly_net_income: Optional[str] = None
    expected_monthly_net_return: Optional[str] = None


class SimulationResponse(BaseModel):
    """Response for POST /v1/simulations and /v1/simulations/preview"""

    simulation_id: Optional[str] = None
    created_at: Optional[str] = None
    saved: bool
    input: SimulationInputSchema
    result: SimulationResultSchema
    display: ResultDisplaySchema


class FieldErrorSchema(BaseModel):
    """Single field validation failure"""

    field: str
    code: str
    message: str


class ErrorResponse(BaseModel):
    """4xx/5xx error body"""

    error: str
    message: str
    details: List[FieldErrorSchema] = []


class SimulationListItem(BaseModel):
    """Stored simulation with baseline metrics recomputed at read time"""

    simulation_id: str
    purchase_price: float
    monthly_rent: float
    annual_fee: float
    email: str
    created_at: str
    average_monthly_net_income: float
    monthly_net_return_pct: float


class SimulationListResponse(BaseModel):
    """Response for GET /v1/simulations"""

    count: int
    simulations: List[SimulationListItem]
