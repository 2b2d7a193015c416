# wanderplan/managers/circuit_breaker.py
"""
Circuit breaker pattern implementation for the generative backend.

This module provides circuit breaker functionality so that a failing Gemini
backend is not hammered by every itinerary request.

Features:
    - Async-safe with asyncio.Lock
    - Configurable failure thresholds and recovery timeouts
    - Half-open state with success threshold for gradual recovery
"""

from asyncio import Lock
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from time import monotonic
from typing import Any, TypeVar

from wanderplan.errors import CircuitBreakerError
from wanderplan.monitoring import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation, requests pass through
    OPEN = "open"  # Failing, reject requests immediately
    HALF_OPEN = "half_open"  # Testing if service recovered


@dataclass
class CircuitBreakerConfig:
    """Configuration for CircuitBreaker."""

    name: str = "default"
    failure_threshold: int = 5
    recovery_timeout: float = 60.0
    expected_exceptions: type[Exception] | tuple[type[Exception], ...] = Exception
    half_open_max_calls: int = 1
    success_threshold: int = 1


class CircuitBreaker:
    """
    Circuit breaker for external service calls with async support.

    States:
        - CLOSED: Normal operation, all requests pass through
        - OPEN: Service is failing, requests are rejected immediately
        - HALF_OPEN: Testing recovery, limited requests allowed

    Only exceptions matching ``expected_exceptions`` count as failures; any
    other exception propagates without touching the circuit state.
    While HALF_OPEN at most ``half_open_max_calls`` calls are in flight; further
    callers are rejected with ``CircuitBreakerError`` until the trial calls end.
    """

    __slots__ = (
        "_failure_count",
        "_half_open_calls",
        "_half_open_successes",
        "_last_failure_time",
        "_lock",
        "_state",
        "expected_exceptions",
        "failure_threshold",
        "half_open_max_calls",
        "name",
        "recovery_timeout",
        "success_threshold",
    )

    def __init__(self, config: CircuitBreakerConfig) -> None:
        self.name = config.name
        self.failure_threshold = config.failure_threshold
        self.recovery_timeout = config.recovery_timeout
        self.expected_exceptions = config.expected_exceptions
        self.half_open_max_calls = config.half_open_max_calls
        self.success_threshold = config.success_threshold

        self._failure_count: int = 0
        self._half_open_calls: int = 0
        self._half_open_successes: int = 0
        self._last_failure_time: float | None = None
        self._state: CircuitState = CircuitState.CLOSED
        self._lock: Lock = Lock()

    @property
    def state(self) -> CircuitState:
        """Get current circuit state (read-only)."""
        return self._state

    @property
    def failure_count(self) -> int:
        """Get current failure count (read-only)."""
        return self._failure_count

    async def call(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> T:
        """
        Execute async function with circuit breaker protection.

        Args:
            func: Async function to execute.
            *args: Positional arguments for the function.
            **kwargs: Keyword arguments for the function.

        Returns:
            Result from the function call.

        Raises:
            CircuitBreakerError: If circuit is OPEN and not ready for recovery,
                or HALF_OPEN with every trial slot taken.
            Exception: Original exception if the function fails.
        """
        async with self._lock:
            self._check_state()
            admitted = self._state == CircuitState.HALF_OPEN
            if admitted:
                self._half_open_calls += 1

        try:
            result = await func(*args, **kwargs)
        except self.expected_exceptions:
            await self._on_failure()
            raise
        else:
            await self._on_success()
            return result
        finally:
            if admitted:
                async with self._lock:
                    self._half_open_calls = max(0, self._half_open_calls - 1)

    def _check_state(self) -> None:
        if self._state == CircuitState.OPEN:
            if not self._should_attempt_reset():
                retry_after = self._time_until_reset()
                logger.warning(f"Circuit breaker '{self.name}' is OPEN. Retry in {retry_after:.1f}s")
                raise CircuitBreakerError(
                    detail=f"Service '{self.name}' temporarily unavailable",
                    retry_after=retry_after,
                    circuit_name=self.name,
                )
            self._state = CircuitState.HALF_OPEN
            self._half_open_successes = 0
            self._half_open_calls = 0
            logger.info(f"Circuit breaker '{self.name}' entering HALF_OPEN state")

        if (
            self._state == CircuitState.HALF_OPEN
            and self._half_open_calls >= self.half_open_max_calls
        ):
            logger.warning(f"Circuit breaker '{self.name}' is HALF_OPEN with a trial call in flight")
            raise CircuitBreakerError(
                detail=f"Service '{self.name}' is recovering, try again shortly",
                retry_after=0.0,
                circuit_name=self.name,
            )

    def _should_attempt_reset(self) -> bool:
        if self._last_failure_time is None:
            return True
        return monotonic() - self._last_failure_time >= self.recovery_timeout

    def _time_until_reset(self) -> float:
        if self._last_failure_time is None:
            return 0.0
        elapsed = monotonic() - self._last_failure_time
        return max(0.0, self.recovery_timeout - elapsed)

    async def _on_success(self) -> None:
        async with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._half_open_successes += 1
                if self._half_open_successes >= self.success_threshold:
                    self._state = CircuitState.CLOSED
                    self._failure_count = 0
                    self._half_open_successes = 0
                    logger.info(f"Circuit breaker '{self.name}' recovered, now CLOSED")
            elif self._state == CircuitState.CLOSED:
                self._failure_count = 0

    async def _on_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            self._last_failure_time = monotonic()

            if self._state == CircuitState.HALF_OPEN:
                # Any failure in HALF_OPEN reopens the circuit
                self._state = CircuitState.OPEN
                self._half_open_successes = 0
                logger.warning(f"Circuit breaker '{self.name}' reopened after failure in HALF_OPEN")
            elif self._failure_count >= self.failure_threshold:
                self._state = CircuitState.OPEN
                logger.error(
                    f"Circuit breaker '{self.name}' OPENED after "
                    f"{self._failure_count} consecutive failures",
                )

    async def reset(self) -> None:
        """Manually reset circuit breaker to CLOSED state."""
        async with self._lock:
            self._failure_count = 0
            self._half_open_successes = 0
            self._half_open_calls = 0
            self._last_failure_time = None
            self._state = CircuitState.CLOSED
        logger.info(f"Circuit breaker '{self.name}' manually reset")

    def get_state(self) -> dict[str, Any]:
        """
        Get current circuit breaker state as a dictionary.

        Returns:
            Dictionary with name, state, failure_count, failure_threshold
            and time_until_reset (seconds, only non-zero when OPEN).
        """
        return {
            "name": self.name,
            "state": self._state.value,
            "failure_count": self._failure_count,
            "failure_threshold": self.failure_threshold,
            "time_until_reset": (
                self._time_until_reset() if self._state == CircuitState.OPEN else 0.0
            ),
        }
