from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from wanderplan.clients.ai_client import AiClient
from wanderplan.configs import Settings, get_settings
from wanderplan.errors import ConfigError
from wanderplan.managers.rate_limiter import limiter
from wanderplan.managers.trip_session import TripSession
from wanderplan.monitoring import get_logger
from wanderplan.schemas.budget import ActualCostEntry, ActualCostUpdate, BudgetSummary
from wanderplan.schemas.itinerary import ItineraryResult, TravelPreferences
from wanderplan.services.itinerary import generate_itinerary

logger = get_logger(__name__)

router = APIRouter(prefix="/itinerary", tags=["🗺️ Itinerary"])


def get_ai_client(request: Request) -> AiClient:
    """Return the AI client built at startup, or fail before any network call."""
    if (ai_client := getattr(request.app.state, "ai_client", None)) is None:
        raise ConfigError
    return ai_client


def get_trip_session(request: Request) -> TripSession:
    return request.app.state.trip_session


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


AiDep = Annotated[AiClient, Depends(get_ai_client)]
SessionDep = Annotated[TripSession, Depends(get_trip_session)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
DayIndex = Annotated[int, Path(ge=0, description="Zero-based day index")]
ActivityIndex = Annotated[int, Path(ge=0, description="Zero-based activity index")]


@router.post(
    "",
    summary="Generate an itinerary",
    response_model=ItineraryResult,
    response_model_exclude_none=True,
    response_class=ORJSONResponse,
    operation_id="generate_itinerary",
)
@limiter.limit(get_settings().RATE_LIMIT_ITINERARY)
async def create_itinerary(
    request: Request,
    response: Response,
    preferences: TravelPreferences,
    ai_client: AiDep,
    session: SessionDep,
    settings: SettingsDep,
) -> ItineraryResult:
    """
    Generate a new itinerary and make it the current one.

    Actual costs entered for the previous itinerary are carried over to the
    matching activities of the new one.
    """
    result = await generate_itinerary(preferences, ai_client, settings)
    session.install(result, preferences.budget)
    return result


@router.get(
    "",
    summary="Get the current itinerary",
    response_model=ItineraryResult,
    response_model_exclude_none=True,
    response_class=ORJSONResponse,
    operation_id="get_itinerary",
)
async def current_itinerary(session: SessionDep) -> ItineraryResult:
    """Return the itinerary installed by the last successful generation."""
    return session.state.result


@router.get(
    "/budget",
    summary="Get the budget summary",
    response_model=BudgetSummary,
    response_class=ORJSONResponse,
    operation_id="get_budget_summary",
)
async def budget_summary(session: SessionDep) -> BudgetSummary:
    """Estimated vs. actual costs of the current itinerary against the budget."""
    return session.budget_summary()


@router.get(
    "/actual-costs",
    summary="List entered actual costs",
    response_model=list[ActualCostEntry],
    response_class=ORJSONResponse,
    operation_id="list_actual_costs",
)
async def list_actual_costs(session: SessionDep) -> list[ActualCostEntry]:
    return session.actual_costs()


@router.put(
    "/actual-costs/{day_index}/{activity_index}",
    summary="Enter an actual cost",
    response_model=BudgetSummary,
    response_class=ORJSONResponse,
    operation_id="set_actual_cost",
)
async def set_actual_cost(
    day_index: DayIndex,
    activity_index: ActivityIndex,
    update: ActualCostUpdate,
    session: SessionDep,
) -> BudgetSummary:
    """
    Enter or clear (``null``) what was actually spent on one activity.

    Returns the refreshed budget summary.
    """
    logger.info(
        "Actual cost updated",
        day_index=day_index,
        activity_index=activity_index,
        cleared=update.actual_cost is None,
    )
    return session.set_actual_cost(day_index, activity_index, update.actual_cost)
