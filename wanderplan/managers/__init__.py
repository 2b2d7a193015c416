from wanderplan.managers.actual_cost_store import ActualCostStore
from wanderplan.managers.circuit_breaker import CircuitBreaker, CircuitBreakerConfig, CircuitState
from wanderplan.managers.rate_limiter import limiter, rate_limit_exceeded_handler

# TripSession depends on services, which depend on the AI client; import it
# from wanderplan.managers.trip_session to keep this package import-light.

__all__ = [
    "ActualCostStore",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitState",
    "limiter",
    "rate_limit_exceeded_handler",
]
