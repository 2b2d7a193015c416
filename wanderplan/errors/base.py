from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from wanderplan.utils.helpers import host, truncate

MAX_BODY_TEXT = 500


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: Any,  # noqa: ANN401
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", "Internal Server Error")

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        # Build response content with detail and any additional exception attributes;
        # long text (e.g. a raw model reply) is cut to MAX_BODY_TEXT characters
        content = {"detail": detail}
        content.update(
            {
                k: truncate(v, MAX_BODY_TEXT) if isinstance(v, str) else v
                for k, v in exc.__dict__.items()
                if k not in ("status_code", "detail")
            },
        )

        return ORJSONResponse(content=content, status_code=status_code)

    return handler
