from starlette.status import HTTP_404_NOT_FOUND, HTTP_422_UNPROCESSABLE_CONTENT

from wanderplan.errors.base import BaseAppError, create_exception_handler
from wanderplan.monitoring import get_logger

logger = get_logger(__name__)


class AggregationError(BaseAppError):
    """Budget figures cannot be computed, e.g. for an itinerary without days."""

    def __init__(self, detail: str = "Cannot aggregate budget") -> None:
        super().__init__(detail=detail, status_code=HTTP_422_UNPROCESSABLE_CONTENT)


class UnknownActivityError(BaseAppError):
    """An actual cost was addressed to a (day, activity) position that does not exist."""

    def __init__(self, day_index: int, activity_index: int) -> None:
        super().__init__(
            detail=f"No activity at day index {day_index}, activity index {activity_index}",
            status_code=HTTP_404_NOT_FOUND,
        )
        self.day_index = day_index
        self.activity_index = activity_index


class InvalidActualCost(BaseAppError):
    """A user-entered actual cost is negative or not a finite number."""

    def __init__(self, detail: str = "Actual cost must be a finite, non-negative number") -> None:
        super().__init__(detail=detail, status_code=HTTP_422_UNPROCESSABLE_CONTENT)


budget_exception_handler = create_exception_handler(logger)
