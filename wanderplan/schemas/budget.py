from pydantic import Field

from wanderplan.schemas.base import CamelModel

CostKey = tuple[int, int]
"""(day index, activity index), both zero based."""


class BudgetSummary(CamelModel):
    """Read-only budget figures for the current itinerary and entered costs."""

    user_budget: float
    duration_days: int
    total_estimated: float
    total_actual: float
    average_daily_budget: float
    remaining_budget: float
    remaining_average_daily_budget: float
    is_over_budget: bool


class ActualCostUpdate(CamelModel):
    """Body for setting or clearing one activity's actual cost."""

    actual_cost: float | None = Field(
        default=None,
        description="Amount actually spent; null clears the entry",
        examples=[45000],
    )


class ActualCostEntry(CamelModel):
    day_index: int
    activity_index: int
    actual_cost: float | None = None
