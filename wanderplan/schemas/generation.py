# wanderplan/schemas/generation.py

"""Request and response shapes exchanged with the generative backend."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from wanderplan.configs.settings import DEFAULT_TEMPERATURE, DEFAULT_TOP_K, DEFAULT_TOP_P


class LatLng(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class GenerationParams(BaseModel):
    """Sampling parameters; fixed, never derived from the itinerary request."""

    model_config = ConfigDict(frozen=True)

    temperature: float = DEFAULT_TEMPERATURE
    top_p: float = DEFAULT_TOP_P
    top_k: int = DEFAULT_TOP_K


class PromptSpec(BaseModel):
    """
    Instruction text plus the tool configuration to send with it.

    Attributes:
        instruction_text: The full prompt.
        web_search: Google Search grounding, always on.
        maps_grounding: Google Maps grounding, on only with a location.
        location_bias: Coordinates biasing retrieval, or ``None``.
        generation: Sampling parameters.
    """

    model_config = ConfigDict(frozen=True)

    instruction_text: str
    web_search: Literal[True] = True
    maps_grounding: bool = False
    location_bias: LatLng | None = None
    generation: GenerationParams = Field(default_factory=GenerationParams)


class GenerationResponse(BaseModel):
    """Raw model text and the first candidate's grounding metadata, if any."""

    model_config = ConfigDict(frozen=True)

    text: str
    grounding_metadata: dict[str, Any] | None = None


class GroundingReference(BaseModel):
    """A decoded grounding source, tagged by where it came from."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["web", "maps"]
    uri: str = Field(..., min_length=1)
