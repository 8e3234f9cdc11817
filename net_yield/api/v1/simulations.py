"""POST /v1/simulations - net yield simulation endpoints"""

import time
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from net_yield.api.v1.schemas import (
    ErrorResponse,
    FieldErrorSchema,
    ResultDisplaySchema,
    SimulationInputSchema,
    SimulationRequest,
    SimulationResponse,
    SimulationResultSchema,
)
from net_yield.api.dependencies import get_request_id, get_simulation_repository
from net_yield.infrastructure.database.session import get_db
from net_yield.infrastructure.database.repositories import SimulationRepository
from net_yield.domain.models import FieldError, SimulationInput, SimulationResult, ValidationErrorCode
from net_yield.domain.validation import parse_simulation_input
from net_yield.domain.yield_calculator import calculate_yield
from net_yield.domain.presentation import format_result
from net_yield.domain.exceptions import (
    InvalidSimulationInputError,
    SimulationPersistenceError,
    YieldCalculationError,
)
from net_yield.infrastructure.observability.metrics import (
    persistence_failures_counter,
    record_simulation,
    record_validation_failures,
)
from net_yield.infrastructure.observability.logging import log_simulation, log_validation_failure
from net_yield.utils.date_utils import to_utc_isoformat

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def summarize_errors(errors: List[FieldError]) -> ErrorResponse:
    """Map field errors to a single error title, most fundamental problem first"""
    codes = {e.code for e in errors}
    if ValidationErrorCode.REQUIRED_FIELD in codes:
        title = "Missing required fields"
    elif codes == {ValidationErrorCode.INVALID_EMAIL}:
        title = "Invalid email format"
    else:
        title = "Invalid input values"

    return ErrorResponse(
        error=title,
        message="Invalid fields: " + ", ".join(e.field for e in errors),
        details=[FieldErrorSchema(field=e.field, code=e.code.value, message=e.message) for e in errors],
    )


def _validate(request_body: SimulationRequest, request_id: str) -> SimulationInput:
    raw = request_body.model_dump(exclude={"data_driven"})
    try:
        return parse_simulation_input(raw, data_driven=request_body.data_driven)
    except InvalidSimulationInputError as e:
        codes = [err.code.value for err in e.errors]
        record_validation_failures(codes)
        log_validation_failure(request_id, codes)
        raise


def _build_response(
    simulation_input: SimulationInput,
    result: SimulationResult,
    saved: bool,
    simulation_id: Optional[str] = None,
    created_at: Optional[str] = None,
) -> SimulationResponse:
    display = format_result(result)
    return SimulationResponse(
        simulation_id=simulation_id,
        created_at=created_at,
        saved=saved,
        input=SimulationInputSchema(
            purchase_price=simulation_input.purchase_price,
            monthly_rent=simulation_input.monthly_rent,
            annual_fee=simulation_input.annual_fee,
            email=simulation_input.email,
            surface=simulation_input.surface,
            bedrooms=simulation_input.bedrooms,
            location_score=simulation_input.location_score,
        ),
        result=SimulationResultSchema(
            average_monthly_net_income=result.average_monthly_net_income,
            monthly_net_return_pct=result.monthly_net_return_pct,
            expected_monthly_net_income=result.expected_monthly_net_income,
            expected_monthly_net_return_pct=result.expected_monthly_net_return_pct,
        ),
        display=ResultDisplaySchema(
            average_monthly_net_income=display.average_monthly_net_income,
            monthly_net_return=display.monthly_net_return,
            show_expected=display.show_expected,
            expected_monthly_net_income=display.expected_monthly_net_income,
            expected_monthly_net_return=display.expected_monthly_net_return,
        ),
    )


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "/simulations",
    response_model=SimulationResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
)
def create_simulation(
    request_body: SimulationRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    repository: SimulationRepository = Depends(get_simulation_repository),
):
    """
    Compute a net yield simulation and store the submitted inputs.

    Flow:
    1. Validate fields (400 with per-field codes on failure)
    2. Compute baseline and, when the triple is present, data-driven yields
    3. Persist purchase price, rent, fee and email
    4. Return result; a failed write yields saved=false instead of an error
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        simulation_input = _validate(request_body, request_id)
        result = calculate_yield(simulation_input)
    except InvalidSimulationInputError as e:
        return _error_response(400, summarize_errors(e.errors))
    except YieldCalculationError as e:
        logging.error(f"Calculation precondition violated: {e}", extra={"request_id": request_id})
        return _error_response(500, ErrorResponse(error="Internal server error", message="Failed to compute simulation"))

    simulation_id = None
    created_at = None
    try:
        db_simulation = repository.create_simulation(simulation_input)
        simulation_id = str(db_simulation.id)
        created_at = to_utc_isoformat(db_simulation.created_at)
        db.commit()
        saved = True
    except (SimulationPersistenceError, SQLAlchemyError) as e:
        db.rollback()
        persistence_failures_counter.inc()
        logging.error(f"Failed to save simulation: {e}", extra={"request_id": request_id})
        simulation_id = None
        created_at = None
        saved = False
        response.status_code = 200
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        return _error_response(500, ErrorResponse(error="Internal server error", message="Failed to save simulation"))

    duration_ms = (time.time() - start_time) * 1000
    record_simulation(result.data_driven is not None, result.monthly_net_return_pct, saved)
    log_simulation(request_id, result.data_driven is not None, result.monthly_net_return_pct, saved, duration_ms)

    return _build_response(simulation_input, result, saved, simulation_id, created_at)


@router.post(
    "/simulations/preview",
    response_model=SimulationResponse,
    responses=ERROR_RESPONSES,
)
def preview_simulation(request_body: SimulationRequest, request: Request):
    """Compute a simulation without storing anything"""
    request_id = get_request_id(request)

    try:
        simulation_input = _validate(request_body, request_id)
        result = calculate_yield(simulation_input)
    except InvalidSimulationInputError as e:
        return _error_response(400, summarize_errors(e.errors))
    except YieldCalculationError as e:
        logging.error(f"Calculation precondition violated: {e}", extra={"request_id": request_id})
        return _error_response(500, ErrorResponse(error="Internal server error", message="Failed to compute simulation"))

    return _build_response(simulation_input, result, saved=False)
