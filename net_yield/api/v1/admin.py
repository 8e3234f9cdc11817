"""GET /v1/simulations - Admin listing of stored simulations"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from net_yield.api.v1.schemas import ErrorResponse, SimulationListItem, SimulationListResponse
from net_yield.api.dependencies import get_request_id, get_simulation_repository
from net_yield.infrastructure.database.repositories import SimulationRepository
from net_yield.domain.yield_calculator import calculate_baseline
from net_yield.domain.exceptions import SimulationPersistenceError, YieldCalculationError
from net_yield.infrastructure.observability.metrics import persistence_failures_counter
from net_yield.utils.date_utils import to_utc_isoformat
from net_yield.config import settings

router = APIRouter()


@router.get(
    "/simulations",
    response_model=SimulationListResponse,
    responses={500: {"model": ErrorResponse}},
)
def list_simulations(
    request: Request,
    limit: Optional[int] = Query(None, ge=1, le=settings.listing_max_limit, description="Maximum records"),
    repository: SimulationRepository = Depends(get_simulation_repository),
):
    """
    Retrieve stored simulations, newest first.

    Derived metrics are not stored; they are recomputed from the stored
    inputs with the same baseline calculator used at submission time.
    """
    request_id = get_request_id(request)

    try:
        simulations = repository.list_simulations(limit=limit)
    except SimulationPersistenceError as e:
        persistence_failures_counter.inc()
        logging.error(f"Failed to load simulations: {e}", extra={"request_id": request_id})
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error", message="Failed to load simulations").model_dump(),
        )

    items = []
    for sim in simulations:
        try:
            baseline = calculate_baseline(sim.purchase_price, sim.monthly_rent, sim.annual_fee)
        except YieldCalculationError as e:
            # Rows written outside the API may break the price precondition
            logging.warning(f"Skipping simulation {sim.id}: {e}", extra={"request_id": request_id})
            continue

        items.append(
            SimulationListItem(
                simulation_id=str(sim.id),
                purchase_price=sim.purchase_price,
                monthly_rent=sim.monthly_rent,
                annual_fee=sim.annual_fee,
                email=sim.email,
                created_at=to_utc_isoformat(sim.created_at),
                average_monthly_net_income=baseline.average_monthly_net_income,
                monthly_net_return_pct=baseline.monthly_net_return_pct,
            )
        )

    return SimulationListResponse(count=len(items), simulations=items)
