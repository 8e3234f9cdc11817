"""Yield calculation engine - core business logic for net rental yield projections"""

import math

from net_yield.domain.models import (
    BaselineYield,
    DataDrivenYield,
    PropertyFeatures,
    SimulationInput,
    SimulationResult,
)
from net_yield.domain.exceptions import YieldCalculationError

PROJECTION_YEARS = 3
PROJECTION_MONTHS = 36

# Commission tiers 30% + 25% + 20%, charged on a single year of income
COMMISSION_RATE = 0.75

# Log-linear regression estimating the annual paid price of a rental
REGRESSION_INTERCEPT = 3.608
SURFACE_ELASTICITY = 0.285
BEDROOMS_ELASTICITY = -0.043
LOCATION_SCORE_ELASTICITY = 0.851
DAILY_RATE_ELASTICITY = 0.735
DAYS_PER_MONTH = 30


def _require_positive_price(purchase_price: float) -> None:
    if purchase_price <= 0:
        raise YieldCalculationError(
            f"Purchase price must be greater than zero, got {purchase_price}"
        )


def calculate_baseline(purchase_price: float, monthly_rent: float, annual_fee: float) -> BaselineYield:
    """
    Project average monthly net income over three years from the flat rent.

    Requirements:
    - Gross income is three years of monthly rent
    - Fees are three years of the annual platform fee
    - Commission is charged on ONE year of rent only
    - Return is expressed as a percentage of the purchase price

    Example:
        price 200000, rent 1200, fee 500
        (43200 - 1500 - 10800) / 36 = 858.33 per month, 0.43% return
    """
    _require_positive_price(purchase_price)

    three_year_rent = monthly_rent * 12 * PROJECTION_YEARS
    three_year_fee = annual_fee * PROJECTION_YEARS
    three_year_commission = monthly_rent * 12 * COMMISSION_RATE

    average_monthly_net_income = (
        three_year_rent - three_year_fee - three_year_commission
    ) / PROJECTION_MONTHS
    monthly_net_return_pct = (average_monthly_net_income / purchase_price) * 100

    return BaselineYield(
        three_year_rent=three_year_rent,
        three_year_fee=three_year_fee,
        three_year_commission=three_year_commission,
        average_monthly_net_income=average_monthly_net_income,
        monthly_net_return_pct=monthly_net_return_pct,
    )


def estimate_annual_paid_price(features: PropertyFeatures, monthly_rent: float) -> float:
    """
    Estimate what a property actually earns in a year.

    annual_paid_price = e^3.608 * surface^0.285 * bedrooms^-0.043
                        * location_score^0.851 * (monthly_rent / 30)^0.735

    monthly_rent / 30 stands in for the average listed daily price.
    """
    return (
        math.exp(REGRESSION_INTERCEPT)
        * features.surface ** SURFACE_ELASTICITY
        * features.bedrooms ** BEDROOMS_ELASTICITY
        * features.location_score ** LOCATION_SCORE_ELASTICITY
        * (monthly_rent / DAYS_PER_MONTH) ** DAILY_RATE_ELASTICITY
    )


def calculate_data_driven(
    purchase_price: float,
    monthly_rent: float,
    annual_fee: float,
    features: PropertyFeatures,
) -> DataDrivenYield:
    """
    Project expected monthly net income from the regression estimate.

    Mirrors the baseline: three years of income and fees, but commission on
    one year of the estimated annual price.
    """
    _require_positive_price(purchase_price)

    annual_paid_price = estimate_annual_paid_price(features, monthly_rent)
    three_year_income = annual_paid_price * PROJECTION_YEARS
    commission = annual_paid_price * COMMISSION_RATE
    three_year_fee = annual_fee * PROJECTION_YEARS
    three_year_net_income = three_year_income - commission - three_year_fee

    expected_monthly_net_income = three_year_net_income / PROJECTION_MONTHS
    expected_monthly_net_return_pct = (expected_monthly_net_income / purchase_price) * 100

    return DataDrivenYield(
        annual_paid_price=annual_paid_price,
        three_year_income=three_year_income,
        commission=commission,
        three_year_fee=three_year_fee,
        three_year_net_income=three_year_net_income,
        expected_monthly_net_income=expected_monthly_net_income,
        expected_monthly_net_return_pct=expected_monthly_net_return_pct,
    )


def calculate_yield(simulation_input: SimulationInput) -> SimulationResult:
    """
    Main entry point: baseline projection, plus the data-driven projection
    when surface, bedrooms and location score are all present.
    """
    baseline = calculate_baseline(
        simulation_input.purchase_price,
        simulation_input.monthly_rent,
        simulation_input.annual_fee,
    )

    features = simulation_input.features
    data_driven = None
    if features is not None:
        data_driven = calculate_data_driven(
            simulation_input.purchase_price,
            simulation_input.monthly_rent,
            simulation_input.annual_fee,
            features,
        )

    return SimulationResult(baseline=baseline, data_driven=data_driven)
