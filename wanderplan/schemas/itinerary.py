# wanderplan/schemas/itinerary.py

"""
Schemas for itinerary generation requests and results.

Field names follow the JSON contract given to the model (camelCase on the
wire), while Python code uses snake_case attributes. Every itinerary model is
frozen: a regenerated itinerary replaces the old one wholesale.
"""

from pydantic import ConfigDict, Field, field_validator

from wanderplan.configs.settings import (
    DEFAULT_PRICE_CHECK_PLACEHOLDER,
    MAX_DESTINATION_LENGTH,
    MAX_INTERESTS_LENGTH,
    MAX_TRIP_DURATION,
    MIN_TRIP_DURATION,
)
from wanderplan.schemas.base import CamelModel


class TravelPreferences(CamelModel):
    """
    Trip preferences submitted by the traveler.

    Coordinates are only used when both are present; a lone latitude or
    longitude is ignored by the prompt builder.

    Example:
        >>> TravelPreferences(
        ...     destination="Yogyakarta",
        ...     duration_days=3,
        ...     budget=1_500_000,
        ...     interests="temples, batik, street food",
        ... )
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    destination: str = Field(
        ...,
        min_length=1,
        max_length=MAX_DESTINATION_LENGTH,
        description="Destination city or region",
        examples=["Yogyakarta"],
    )
    duration_days: int = Field(
        ...,
        ge=MIN_TRIP_DURATION,
        le=MAX_TRIP_DURATION,
        description="The duration of the trip in days",
        examples=[5],
    )
    budget: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Total trip budget, in the destination's currency",
        examples=[1_000_000],
    )
    interests: str = Field(
        ...,
        min_length=1,
        max_length=MAX_INTERESTS_LENGTH,
        description="Free-text traveler interests",
        examples=["culinary, history, nature"],
    )
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)

    @field_validator("destination", "interests")
    @classmethod
    def strip_markup(cls, v: str) -> str:
        """Drop characters that could break out of the prompt template."""
        cleaned = v.replace("`", "").replace("<", "").replace(">", "").strip()
        if not cleaned:
            msg = "Value cannot be blank"
            raise ValueError(msg)
        return cleaned

    @property
    def has_location(self) -> bool:
        """Whether both coordinates were supplied."""
        return self.latitude is not None and self.longitude is not None


class ItineraryActivity(CamelModel):
    """A single activity within a day."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    description: str | None = None
    opening_hours: str | None = None
    estimated_cost: str = ""
    price_check_link_placeholder: str = DEFAULT_PRICE_CHECK_PLACEHOLDER
    actual_cost: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class ItineraryDayContent(CamelModel):
    """One day of the itinerary. Activity order is meaningful."""

    day: int
    date: str
    activities: tuple[ItineraryActivity, ...] = ()


class GeneratedItinerary(CamelModel):
    """The structured itinerary returned by the model."""

    itinerary: tuple[ItineraryDayContent, ...]
    summary: str | None = None

    @property
    def duration_days(self) -> int:
        return len(self.itinerary)

    def activity_count(self) -> int:
        return sum(len(day.activities) for day in self.itinerary)


class ItineraryResult(CamelModel):
    """Validated itinerary plus the deduplicated grounding source URLs."""

    itinerary_data: GeneratedItinerary
    source_urls: tuple[str, ...] = ()
