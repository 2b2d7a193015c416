# wanderplan/services/budget.py

from collections.abc import Mapping
from math import isfinite

from wanderplan.errors import AggregationError
from wanderplan.monitoring import get_logger
from wanderplan.schemas.budget import BudgetSummary, CostKey
from wanderplan.schemas.itinerary import GeneratedItinerary
from wanderplan.services.cost_parser import parse_cost

logger = get_logger(__name__)


def total_estimated_cost(itinerary: GeneratedItinerary) -> int | float:
    """Sum the parsed estimated cost of every activity on every day."""
    return sum(
        parse_cost(activity.estimated_cost)
        for day in itinerary.itinerary
        for activity in day.activities
    )


def total_actual_cost(overrides: Mapping[CostKey, float | None]) -> float:
    """Sum the entered actual costs; an empty entry counts as 0, never as the estimate."""
    return sum(value or 0 for value in overrides.values())


def _finite(name: str, value: float) -> float:
    try:
        number = float(value)
    except OverflowError as e:
        msg = f"Budget input too large: {name}"
        raise AggregationError(msg) from e
    if not isfinite(number):
        msg = f"Non-finite budget input: {name}"
        raise AggregationError(msg)
    return number


def summarize_budget(
    user_budget: float,
    duration_days: int,
    total_estimated: float,
    total_actual: float,
) -> BudgetSummary:
    """
    Derive the budget figures from the totals.

    Args:
        user_budget: The traveler's total budget.
        duration_days: Number of itinerary days.
        total_estimated: Sum of parsed estimated costs.
        total_actual: Sum of entered actual costs.

    Returns:
        The budget summary.

    Raises:
        AggregationError: If ``duration_days`` is not positive or any input
            or derived figure is not a finite number.
    """
    if duration_days <= 0:
        msg = "Cannot compute a daily budget for an itinerary without days"
        raise AggregationError(msg)

    user_budget = _finite("user_budget", user_budget)
    total_estimated = _finite("total_estimated", total_estimated)
    total_actual = _finite("total_actual", total_actual)

    remaining_budget = user_budget - total_actual
    figures = {
        "average_daily_budget": user_budget / duration_days,
        "remaining_budget": remaining_budget,
        "remaining_average_daily_budget": remaining_budget / duration_days,
    }
    if bad := [name for name, value in figures.items() if not isfinite(value)]:
        msg = f"Budget figure overflowed: {', '.join(bad)}"
        raise AggregationError(msg)

    return BudgetSummary(
        user_budget=user_budget,
        duration_days=duration_days,
        total_estimated=total_estimated,
        total_actual=total_actual,
        is_over_budget=remaining_budget < 0,
        **figures,
    )


def aggregate_budget(
    itinerary: GeneratedItinerary,
    overrides: Mapping[CostKey, float | None],
    user_budget: float,
) -> BudgetSummary:
    """
    Aggregate estimated and actual costs of an itinerary against the budget.

    Args:
        itinerary: The validated itinerary; its day count is the duration.
        overrides: Entered actual costs keyed by (day index, activity index).
        user_budget: The traveler's total budget.

    Returns:
        The budget summary.

    Raises:
        AggregationError: For an itinerary without days, or non-finite figures.
    """
    summary = summarize_budget(
        user_budget=user_budget,
        duration_days=itinerary.duration_days,
        total_estimated=total_estimated_cost(itinerary),
        total_actual=total_actual_cost(overrides),
    )
    logger.debug(
        "Budget aggregated",
        total_estimated=summary.total_estimated,
        total_actual=summary.total_actual,
        remaining=summary.remaining_budget,
    )
    return summary
