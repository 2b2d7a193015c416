# wanderplan/services/itinerary.py

from datetime import date
from time import perf_counter

from wanderplan.clients.ai_client import AiClient
from wanderplan.configs.settings import Settings
from wanderplan.monitoring import get_logger
from wanderplan.schemas.itinerary import ItineraryResult, TravelPreferences
from wanderplan.services.grounding import source_urls_from_metadata
from wanderplan.services.itinerary_validator import validate_itinerary
from wanderplan.services.prompt_builder import build_prompt
from wanderplan.services.response_extractor import extract_json_payload
from wanderplan.utils.helpers import time_taken

logger = get_logger(__name__)


async def generate_itinerary(
    preferences: TravelPreferences,
    ai_client: AiClient,
    settings: Settings,
    today: date | None = None,
) -> ItineraryResult:
    """
    Generate an itinerary for the given preferences.

    Every stage fails fast and whole: there is never a partial itinerary.

    Args:
        preferences: The traveler's preferences.
        ai_client: The AI client to use for itinerary generation.
        settings: Application settings (prompt language and cost example).
        today: Date of day 1, defaults to the current date.

    Returns:
        The validated itinerary and its deduplicated source URLs.

    Raises:
        UpstreamError: If the backend call fails (see ``AiClient.generate``).
        MalformedResponse: If the reply holds no valid itinerary JSON.
    """
    start_time = perf_counter()
    logger.info(
        "Generating itinerary",
        destination=preferences.destination,
        days=preferences.duration_days,
        with_location=preferences.has_location,
    )

    prompt = build_prompt(
        preferences,
        today,
        language=settings.ITINERARY_LANGUAGE,
        cost_example=settings.COST_EXAMPLE,
    )
    response = await ai_client.generate(prompt)

    payload = extract_json_payload(response.text)
    itinerary = validate_itinerary(payload.data)
    source_urls = source_urls_from_metadata(response.grounding_metadata)

    logger.info(
        "Itinerary generated",
        days=itinerary.duration_days,
        sources=len(source_urls),
        fenced=payload.fenced,
        took=time_taken(start_time),
    )
    return ItineraryResult(itinerary_data=itinerary, source_urls=tuple(source_urls))
