"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from net_yield.api.middleware import RequestIDMiddleware, MetricsMiddleware
from net_yield.api.v1 import admin, simulations
from net_yield.api.v1.schemas import ErrorResponse, FieldErrorSchema
from net_yield.infrastructure.database.session import init_db
from net_yield.infrastructure.observability.logging import setup_logging
from net_yield.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables_on_startup:
        init_db()
    yield


async def malformed_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable bodies in the same {error, message} shape as field errors"""
    details = [
        FieldErrorSchema(
            field=".".join(str(part) for part in err.get("loc", ())[1:]) or "body",
            code=err.get("type", "invalid"),
            message=err.get("msg", ""),
        )
        for err in exc.errors()
    ]
    body = ErrorResponse(
        error="Malformed request",
        message="Request body could not be parsed",
        details=details,
    )
    return JSONResponse(status_code=400, content=body.model_dump())


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Net Yield Simulator",
        description="Rental property net yield simulations over three years",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(RequestValidationError, malformed_request_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(simulations.router, prefix="/v1", tags=["simulations"])
    app.include_router(admin.router, prefix="/v1", tags=["admin"])

    return app


app = create_app()
