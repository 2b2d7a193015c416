from collections.abc import Callable

import pytest

from wanderplan.errors import AggregationError
from wanderplan.schemas.itinerary import GeneratedItinerary
from wanderplan.services.budget import (
    aggregate_budget,
    summarize_budget,
    total_actual_cost,
    total_estimated_cost,
)
from wanderplan.services.cost_parser import parse_cost

MakeItinerary = Callable[..., GeneratedItinerary]


class TestTotals:
    """Tests for estimated and actual cost totals."""

    def test_total_estimated_cost(self, bali_itinerary: GeneratedItinerary) -> None:
        # 50,000 + 250.000 + 80.000
        assert total_estimated_cost(bali_itinerary) == 380000

    def test_matches_sum_of_parsed_costs(self, make_itinerary: MakeItinerary) -> None:
        """Every activity on every day is counted exactly once."""
        itinerary = make_itinerary(
            [("A", "IDR 1.000"), ("B", "Rp 2,500")],
            [],
            [("C", "Free"), ("D", "350"), ("E", "USD 12.50")],
        )
        expected = sum(
            parse_cost(activity.estimated_cost)
            for day in itinerary.itinerary
            for activity in day.activities
        )

        assert total_estimated_cost(itinerary) == expected == 1000 + 2500 + 350 + 1250
        assert aggregate_budget(itinerary, {}, 10_000).total_estimated == expected

    def test_unparseable_costs_count_as_zero(self, make_itinerary: MakeItinerary) -> None:
        itinerary = make_itinerary([("Beach", "Free"), ("Temple", "IDR 10,000")], [("Rest", "")])
        assert total_estimated_cost(itinerary) == 10000

    def test_total_actual_cost_treats_empty_as_zero(self) -> None:
        assert total_actual_cost({(0, 0): 100.0, (0, 1): None, (1, 0): 0.0}) == 100.0
        assert total_actual_cost({}) == 0


class TestSummarizeBudget:
    """Tests for derived budget figures."""

    def test_figures(self) -> None:
        summary = summarize_budget(
            user_budget=1_000_000,
            duration_days=4,
            total_estimated=600_000,
            total_actual=200_000,
        )

        assert summary.average_daily_budget == 250_000
        assert summary.remaining_budget == 800_000
        assert summary.remaining_average_daily_budget == 200_000
        assert summary.is_over_budget is False

    def test_five_day_trip(self) -> None:
        summary = summarize_budget(1_000_000, 5, 0, 200_000)

        assert summary.remaining_budget == 800_000
        assert summary.remaining_average_daily_budget == 160_000

    def test_over_budget(self) -> None:
        summary = summarize_budget(100, 2, 0, 150)

        assert summary.remaining_budget == -50
        assert summary.remaining_average_daily_budget == -25
        assert summary.is_over_budget is True

    def test_exactly_on_budget_is_not_over(self) -> None:
        assert summarize_budget(100, 1, 0, 100).is_over_budget is False

    def test_estimate_does_not_affect_remaining(self) -> None:
        """Only entered actual costs reduce the remaining budget."""
        summary = summarize_budget(100, 1, 10_000, 0)

        assert summary.remaining_budget == 100
        assert summary.is_over_budget is False

    @pytest.mark.parametrize("duration_days", [0, -1])
    def test_no_days_is_an_error(self, duration_days: int) -> None:
        with pytest.raises(AggregationError):
            summarize_budget(100, duration_days, 0, 0)

    @pytest.mark.parametrize(
        ("user_budget", "total_actual"),
        [(float("inf"), 0), (float("nan"), 0), (100, float("inf")), (10**400, 0)],
    )
    def test_non_finite_inputs(self, user_budget: float, total_actual: float) -> None:
        with pytest.raises(AggregationError):
            summarize_budget(user_budget, 1, 0, total_actual)

    def test_overflowing_figure(self) -> None:
        """A finite budget whose remainder overflows is rejected."""
        with pytest.raises(AggregationError, match="remaining"):
            summarize_budget(1.7e308, 1, 0, -1.7e308)


class TestAggregateBudget:
    """Tests for aggregation over an itinerary and entered costs."""

    def test_duration_comes_from_itinerary(self, bali_itinerary: GeneratedItinerary) -> None:
        summary = aggregate_budget(bali_itinerary, {}, 1_000_000)

        assert summary.duration_days == 2
        assert summary.average_daily_budget == 500_000
        assert summary.total_estimated == 380_000
        assert summary.total_actual == 0

    def test_entered_costs(self, bali_itinerary: GeneratedItinerary) -> None:
        summary = aggregate_budget(bali_itinerary, {(0, 0): 60_000, (1, 0): None}, 100_000)

        assert summary.total_actual == 60_000
        assert summary.remaining_budget == 40_000
        assert summary.remaining_average_daily_budget == 20_000

    def test_empty_itinerary(self, make_itinerary: MakeItinerary) -> None:
        with pytest.raises(AggregationError):
            aggregate_budget(make_itinerary(), {}, 100)

    def test_days_without_activities(self, make_itinerary: MakeItinerary) -> None:
        summary = aggregate_budget(make_itinerary([], []), {}, 100)

        assert summary.duration_days == 2
        assert summary.total_estimated == 0
        assert summary.average_daily_budget == 50
