# wanderplan/managers/trip_session.py

from dataclasses import dataclass
from threading import Lock

from wanderplan.errors import ItineraryNotFoundError
from wanderplan.managers.actual_cost_store import ActualCostStore
from wanderplan.monitoring import get_logger
from wanderplan.schemas.budget import ActualCostEntry, BudgetSummary
from wanderplan.schemas.itinerary import ItineraryResult
from wanderplan.services.budget import aggregate_budget

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TripState:
    """The installed itinerary and the budget it was requested with."""

    result: ItineraryResult
    user_budget: float


class TripSession:
    """
    The current itinerary together with its actual cost store.

    Installing a new itinerary swaps the whole ``TripState`` and reseeds the
    store; entered costs survive regeneration. Cost edits go straight to the
    store and never wait on a generation round trip.
    """

    __slots__ = ("_install_lock", "_state", "costs")

    def __init__(self, costs: ActualCostStore | None = None) -> None:
        self.costs = costs or ActualCostStore()
        self._state: TripState | None = None
        self._install_lock = Lock()

    @property
    def has_itinerary(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> TripState:
        """
        Return the installed state.

        Raises:
            ItineraryNotFoundError: If nothing has been generated yet.
        """
        if (state := self._state) is None:
            raise ItineraryNotFoundError
        return state

    def _ensure_installed(self) -> None:
        if self._state is None:
            raise ItineraryNotFoundError

    def install(self, result: ItineraryResult, user_budget: float) -> None:
        """
        Replace the current itinerary with a newly generated one.

        Args:
            result: The validated generation result.
            user_budget: The traveler's total budget for this itinerary.
        """
        with self._install_lock:
            self.costs.reseed(result.itinerary_data)
            self._state = TripState(result=result, user_budget=user_budget)
        logger.info(
            "Itinerary installed",
            days=result.itinerary_data.duration_days,
            sources=len(result.source_urls),
        )

    def set_actual_cost(
        self,
        day_index: int,
        activity_index: int,
        value: float | None,
    ) -> BudgetSummary:
        """Enter or clear one actual cost and return the refreshed summary."""
        self._ensure_installed()
        self.costs.set(day_index, activity_index, value)
        return self.budget_summary()

    def actual_costs(self) -> list[ActualCostEntry]:
        """List every activity position with its entered cost."""
        self._ensure_installed()
        return [
            ActualCostEntry(day_index=day_index, activity_index=activity_index, actual_cost=value)
            for (day_index, activity_index), value in sorted(self.costs.snapshot().items())
        ]

    def budget_summary(self) -> BudgetSummary:
        """
        Aggregate the current itinerary against its budget.

        Raises:
            ItineraryNotFoundError: If nothing has been generated yet.
            AggregationError: If the itinerary has no days.
        """
        with self._install_lock:
            state = self.state
            overrides = self.costs.snapshot()
        return aggregate_budget(state.result.itinerary_data, overrides, state.user_budget)
