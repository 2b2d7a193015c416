from wanderplan.errors.ai import (
    UpstreamAuthError,
    UpstreamEmptyResponse,
    UpstreamError,
    UpstreamNetworkError,
    UpstreamRateLimitError,
    UpstreamRetryableError,
    UpstreamTimeoutError,
    upstream_exception_handler,
)
from wanderplan.errors.base import BaseAppError, create_exception_handler
from wanderplan.errors.budget import (
    AggregationError,
    InvalidActualCost,
    UnknownActivityError,
    budget_exception_handler,
)
from wanderplan.errors.circuit_breaker import (
    CircuitBreakerError,
    circuit_breaker_exception_handler,
)
from wanderplan.errors.config import ConfigError, config_exception_handler
from wanderplan.errors.itinerary import (
    ItineraryNotFoundError,
    MalformedResponse,
    itinerary_exception_handler,
)

__all__ = [
    "AggregationError",
    "BaseAppError",
    "CircuitBreakerError",
    "ConfigError",
    "InvalidActualCost",
    "ItineraryNotFoundError",
    "MalformedResponse",
    "UnknownActivityError",
    "UpstreamAuthError",
    "UpstreamEmptyResponse",
    "UpstreamError",
    "UpstreamNetworkError",
    "UpstreamRateLimitError",
    "UpstreamRetryableError",
    "UpstreamTimeoutError",
    "budget_exception_handler",
    "circuit_breaker_exception_handler",
    "config_exception_handler",
    "create_exception_handler",
    "itinerary_exception_handler",
    "upstream_exception_handler",
]
