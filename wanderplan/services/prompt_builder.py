# wanderplan/services/prompt_builder.py

from datetime import date

from wanderplan.configs.settings import DEFAULT_PRICE_CHECK_PLACEHOLDER
from wanderplan.schemas.generation import LatLng, PromptSpec
from wanderplan.schemas.itinerary import TravelPreferences

SYSTEM_ROLE = (
    "You are a professional, helpful, and creative Travel Planner AI. Your goal is to create "
    "detailed, day-by-day travel itineraries based on the user's input. Always use real-time, "
    "current information when suggesting activities, attractions, and estimated costs."
)

OUTPUT_SCHEMA = f"""```json
{{
  "itinerary": [
    {{
      "day": 1,
      "date": "YYYY-MM-DD",
      "activities": [
        {{
          "name": "Name of place or activity",
          "description": "Short description (optional)",
          "openingHours": "Opening/closing hours (optional)",
          "estimatedCost": "Estimated cost in local currency",
          "priceCheckLinkPlaceholder": "{DEFAULT_PRICE_CHECK_PLACEHOLDER}"
        }}
      ]
    }}
  ],
  "summary": "Overall trip summary (optional)"
}}
```"""


def activity_fields(cost_example: str) -> str:
    """
    Per-activity content the model must provide.

    Args:
        cost_example: A sample cost string in the destination's currency.

    Returns:
        A numbered list of the required activity fields.
    """
    return f"""
    1. Name of the place or activity
    2. Opening/closing hours
    3. Estimated cost in local currency, e.g. "{cost_example}"
    4. A price check link placeholder, always "{DEFAULT_PRICE_CHECK_PLACEHOLDER}"
    """


def output_contract(language: str) -> str:
    """Strict reply format: one JSON object inside a ```json fence."""
    return f"""
    Your entire response MUST be a single JSON object, formatted as a string within
    markdown code fences (```json ... ```). Do not add any text outside the fence.
    The JSON structure must strictly adhere to the following format, where
    "description", "openingHours" and "summary" are optional:

    {OUTPUT_SCHEMA}

    Number the days sequentially starting at 1 and give every day an ISO date.
    Ensure all text content, including names and descriptions, is in {language}.
    """


def location_clause(location: LatLng) -> str:
    return (
        f" Consider my current location ({location.latitude}, {location.longitude}) "
        "for relevant nearby suggestions."
    )


def build_prompt(
    preferences: TravelPreferences,
    today: date | None = None,
    *,
    language: str = "Bahasa Indonesia",
    cost_example: str = "IDR 50,000",
) -> PromptSpec:
    """
    Build the instruction text and tool configuration for itinerary generation.

    The result depends only on the arguments: day 1 is anchored to ``today``
    (the current date when omitted) since no trip start date is collected.
    Maps grounding and a location bias are requested only when both
    coordinates are present; a single coordinate is ignored.

    Args:
        preferences: The traveler's preferences.
        today: Date of day 1, defaults to ``date.today()``.
        language: Language the itinerary text must be written in.
        cost_example: Sample cost string shown to the model.

    Returns:
        The prompt specification to hand to the AI client.
    """
    start_date = (today or date.today()).isoformat()

    instruction_text = f"""{SYSTEM_ROLE}

    Plan a detailed, day-by-day travel itinerary in {preferences.destination} for
    {preferences.duration_days} days, starting from {start_date}.
    My interests are {preferences.interests}.
    For each activity, include:
    {activity_fields(cost_example)}
    {output_contract(language)}"""

    location = None
    if preferences.has_location:
        location = LatLng(latitude=preferences.latitude, longitude=preferences.longitude)
        instruction_text += location_clause(location)

    return PromptSpec(
        instruction_text=instruction_text,
        maps_grounding=location is not None,
        location_bias=location,
    )
