# wanderplan/main.py

"""Wanderplan Backend - AI itinerary generation with budget tracking."""

from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded

from wanderplan.configs import get_settings
from wanderplan.errors import (
    AggregationError,
    CircuitBreakerError,
    ConfigError,
    InvalidActualCost,
    ItineraryNotFoundError,
    MalformedResponse,
    UnknownActivityError,
    UpstreamError,
    budget_exception_handler,
    circuit_breaker_exception_handler,
    config_exception_handler,
    itinerary_exception_handler,
    upstream_exception_handler,
)
from wanderplan.managers import limiter, rate_limit_exceeded_handler
from wanderplan.middleware import LoggingMiddleware, configure_cors, lifespan
from wanderplan.routes import itinerary_router
from wanderplan.schemas import HealthCheckResponse

settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="Day-by-day travel itineraries grounded in web search, with budget tracking",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)
app.add_middleware(LoggingMiddleware)

app.include_router(itinerary_router)

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (ConfigError, config_exception_handler),
    (UpstreamError, upstream_exception_handler),
    (CircuitBreakerError, circuit_breaker_exception_handler),
    (MalformedResponse, itinerary_exception_handler),
    (ItineraryNotFoundError, itinerary_exception_handler),
    (AggregationError, budget_exception_handler),
    (UnknownActivityError, budget_exception_handler),
    (InvalidActualCost, budget_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint with AI client and circuit breaker status.

    Returns
    -------
    ORJSONResponse
        Health status of the service.
    """
    ai_client = getattr(request.app.state, "ai_client", None)
    trip_session = getattr(request.app.state, "trip_session", None)

    health = HealthCheckResponse(
        version=app.version,
        status="ok",
        timestamp=datetime.now().astimezone().isoformat(timespec="seconds"),
        ai_client="initialized" if ai_client else "not_configured",
        ai_circuit_breaker=ai_client.circuit_breaker.get_state() if ai_client else None,
        has_itinerary=bool(trip_session and trip_session.has_itinerary),
    )
    return ORJSONResponse(health.model_dump())
