from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from wanderplan.errors.base import BaseAppError, create_exception_handler
from wanderplan.monitoring import get_logger

logger = get_logger(__name__)


class ConfigError(BaseAppError):
    """Raised when a required configuration value, such as the API key, is missing."""

    def __init__(
        self,
        detail: str = "GEMINI_API_KEY is not set. Please provide your Gemini API key.",
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_500_INTERNAL_SERVER_ERROR)


config_exception_handler = create_exception_handler(logger)
