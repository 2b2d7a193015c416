# wanderplan/services/itinerary_validator.py

from typing import Any

from orjson import dumps
from pydantic import ValidationError

from wanderplan.errors import MalformedResponse
from wanderplan.monitoring import get_logger
from wanderplan.schemas.itinerary import GeneratedItinerary
from wanderplan.utils.helpers import truncate

logger = get_logger(__name__)


def _fragment(payload: Any) -> str:  # noqa: ANN401
    try:
        return truncate(dumps(payload).decode(), 1000)
    except TypeError:
        return truncate(repr(payload), 1000)


def validate_itinerary(payload: Any) -> GeneratedItinerary:  # noqa: ANN401
    """
    Check the parsed payload against the itinerary schema.

    This is the trust boundary: anything past it is a validated, immutable
    ``GeneratedItinerary``.

    Args:
        payload: The parsed JSON value.

    Returns:
        The validated itinerary, ``summary`` passed through when present.

    Raises:
        MalformedResponse: If ``itinerary`` is missing, is not an array, or
            any day or activity does not match the schema.
    """
    if not isinstance(payload, dict):
        logger.error("Itinerary payload is not a JSON object", type=type(payload).__name__)
        raise MalformedResponse(
            fragment=_fragment(payload),
            detail="Model response is not a JSON object.",
        )

    if not isinstance(payload.get("itinerary"), list):
        logger.error("Itinerary payload has no 'itinerary' array", keys=sorted(payload))
        raise MalformedResponse(
            fragment=_fragment(payload),
            detail="Model response has no 'itinerary' array.",
        )

    try:
        itinerary = GeneratedItinerary.model_validate(payload)
    except ValidationError as e:
        logger.error("Itinerary payload failed schema validation", errors=e.error_count())
        raise MalformedResponse(
            fragment=_fragment(payload),
            detail=f"Model response does not match the itinerary schema: {e.error_count()} error(s).",
        ) from e

    logger.info(
        "Itinerary validated",
        days=itinerary.duration_days,
        activities=itinerary.activity_count(),
    )
    return itinerary
