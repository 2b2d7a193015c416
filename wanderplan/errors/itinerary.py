from starlette.status import HTTP_404_NOT_FOUND, HTTP_502_BAD_GATEWAY

from wanderplan.errors.base import BaseAppError, create_exception_handler
from wanderplan.monitoring import get_logger
from wanderplan.utils.helpers import truncate

logger = get_logger(__name__)


class MalformedResponse(BaseAppError):
    """
    The model reply could not be turned into an itinerary.

    Attributes:
        fragment: The offending text, kept for diagnostics.
    """

    def __init__(
        self,
        fragment: str,
        detail: str = (
            "Received malformed JSON string from the model. "
            "Please try again or refine your prompt."
        ),
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_502_BAD_GATEWAY)
        self.fragment = fragment

    def __str__(self) -> str:
        return f"{self.detail} Fragment: {truncate(self.fragment, 200)!r}"


class ItineraryNotFoundError(BaseAppError):
    """No itinerary has been generated yet."""

    def __init__(self, detail: str = "No itinerary available. Please generate one first.") -> None:
        super().__init__(detail=detail, status_code=HTTP_404_NOT_FOUND)


itinerary_exception_handler = create_exception_handler(logger)
