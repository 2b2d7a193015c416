from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
    HTTP_504_GATEWAY_TIMEOUT,
)

from wanderplan.errors.base import BaseAppError, create_exception_handler
from wanderplan.monitoring import get_logger

logger = get_logger(__name__)


class UpstreamError(BaseAppError):
    """Base exception for failures of the generative backend."""

    def __init__(self, detail: str = "Failed to generate itinerary") -> None:
        super().__init__(detail=detail, status_code=HTTP_502_BAD_GATEWAY)


class UpstreamAuthError(UpstreamError):
    """The backend rejected the API key or it lacks permission."""

    def __init__(
        self,
        detail: str = (
            "API key might be invalid or has insufficient permissions. "
            "Please check your API key and billing details."
        ),
    ) -> None:
        super().__init__(detail)
        self.status_code = HTTP_401_UNAUTHORIZED


class UpstreamEmptyResponse(UpstreamError):
    """The call succeeded but returned no usable text."""

    def __init__(self, detail: str = "No response received from the model.") -> None:
        super().__init__(detail)


class UpstreamRetryableError(UpstreamError):
    """Transient failure; the same request may succeed if retried."""

    def __init__(self, detail: str = "AI service temporarily unavailable") -> None:
        super().__init__(detail)
        self.status_code = HTTP_503_SERVICE_UNAVAILABLE


class UpstreamTimeoutError(UpstreamRetryableError):
    """The backend did not answer within the configured timeout."""

    def __init__(self, detail: str = "AI request timed out") -> None:
        super().__init__(detail)
        self.status_code = HTTP_504_GATEWAY_TIMEOUT


class UpstreamNetworkError(UpstreamRetryableError):
    """Network connectivity issues."""

    def __init__(self, detail: str = "AI network error") -> None:
        super().__init__(detail)


class UpstreamRateLimitError(UpstreamRetryableError):
    """Quota or rate limit exceeded."""

    def __init__(self, detail: str = "AI quota exceeded") -> None:
        super().__init__(detail)
        self.status_code = HTTP_429_TOO_MANY_REQUESTS


upstream_exception_handler = create_exception_handler(logger)
