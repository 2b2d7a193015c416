from wanderplan.schemas.budget import (
    ActualCostEntry,
    ActualCostUpdate,
    BudgetSummary,
    CostKey,
)
from wanderplan.schemas.generation import (
    GenerationParams,
    GenerationResponse,
    GroundingReference,
    LatLng,
    PromptSpec,
)
from wanderplan.schemas.health import HealthCheckResponse
from wanderplan.schemas.itinerary import (
    GeneratedItinerary,
    ItineraryActivity,
    ItineraryDayContent,
    ItineraryResult,
    TravelPreferences,
)

__all__ = [
    "ActualCostEntry",
    "ActualCostUpdate",
    "BudgetSummary",
    "CostKey",
    "GeneratedItinerary",
    "GenerationParams",
    "GenerationResponse",
    "GroundingReference",
    "HealthCheckResponse",
    "ItineraryActivity",
    "ItineraryDayContent",
    "ItineraryResult",
    "LatLng",
    "PromptSpec",
    "TravelPreferences",
]
