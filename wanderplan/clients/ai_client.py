# wanderplan/clients/ai_client.py

from asyncio import timeout
from typing import Any

from google.genai import Client
from google.genai.client import AsyncClient
from google.genai.errors import APIError, ServerError
from google.genai.types import (
    GenerateContentConfig,
    GenerateContentResponse,
    GoogleMaps,
    GoogleSearch,
    RetrievalConfig,
    Tool,
    ToolConfig,
)
from google.genai.types import LatLng as GenaiLatLng
from httpx import TimeoutException, TransportError

from wanderplan.configs.settings import Settings
from wanderplan.decorators import with_retry
from wanderplan.errors import (
    ConfigError,
    UpstreamAuthError,
    UpstreamEmptyResponse,
    UpstreamError,
    UpstreamNetworkError,
    UpstreamRateLimitError,
    UpstreamRetryableError,
    UpstreamTimeoutError,
)
from wanderplan.managers.circuit_breaker import CircuitBreaker, CircuitBreakerConfig
from wanderplan.monitoring import get_logger
from wanderplan.schemas.generation import GenerationResponse, PromptSpec

logger = get_logger(__name__)

# Backend messages meaning the key is wrong or lacks access
AUTH_MARKERS = (
    "api key not valid",
    "api_key_invalid",
    "permission_denied",
    "unauthenticated",
    "requested entity was not found",
)

# Network-related exceptions that should be caught and converted
NETWORK_EXCEPTIONS = (TransportError, ConnectionError, OSError)


def map_exception(e: Exception) -> UpstreamError:
    """
    Map a backend or transport exception onto the upstream error taxonomy.

    Args:
        e: The exception raised while calling the backend.

    Returns:
        The matching upstream error; retryable kinds for timeouts, network
        failures, rate limits and 5xx responses.
    """
    error_msg = str(e)
    lowered = error_msg.lower()

    if isinstance(e, TimeoutException | TimeoutError):
        return UpstreamTimeoutError(f"AI request timed out: {error_msg}")
    if any(marker in lowered for marker in AUTH_MARKERS):
        return UpstreamAuthError()
    if isinstance(e, APIError):
        if e.code in (401, 403):
            return UpstreamAuthError()
        if e.code == 429 or "resource_exhausted" in lowered:
            return UpstreamRateLimitError(f"Quota exceeded: {error_msg}")
        if isinstance(e, ServerError) or e.code >= 500:
            return UpstreamRetryableError(f"AI service temporarily unavailable: {error_msg}")
    elif isinstance(e, NETWORK_EXCEPTIONS):
        return UpstreamNetworkError(f"Network error: {error_msg}")
    return UpstreamError(f"Failed to generate itinerary: {error_msg or type(e).__name__}")


def build_config(prompt: PromptSpec) -> GenerateContentConfig:
    """
    Translate a prompt spec into a Gemini request configuration.

    Google Search grounding is always on. Google Maps grounding and the
    retrieval location bias are added only when the prompt carries a location.
    JSON mode is not used because it cannot be combined with tools; the
    prompt asks for fenced JSON instead.
    """
    tools = [Tool(google_search=GoogleSearch())]
    tool_config = None

    if prompt.maps_grounding and prompt.location_bias is not None:
        tools.append(Tool(google_maps=GoogleMaps()))
        tool_config = ToolConfig(
            retrieval_config=RetrievalConfig(
                lat_lng=GenaiLatLng(
                    latitude=prompt.location_bias.latitude,
                    longitude=prompt.location_bias.longitude,
                ),
            ),
        )

    return GenerateContentConfig(
        tools=tools,
        tool_config=tool_config,
        temperature=prompt.generation.temperature,
        top_p=prompt.generation.top_p,
        top_k=prompt.generation.top_k,
    )


def grounding_metadata_of(response: GenerateContentResponse) -> dict[str, Any] | None:
    """Return the first candidate's grounding metadata as a plain dict, if any."""
    if not response.candidates:
        return None
    metadata = response.candidates[0].grounding_metadata
    if metadata is None:
        return None
    return metadata.model_dump(mode="json", exclude_none=True)


class AiClient:
    """
    Async client for Google's Gemini API.

    Settings are injected once at construction; the API key is never re-read
    per call. Each call is bounded by a timeout, transient failures are
    retried with exponential backoff, and a circuit breaker stops calls while
    the backend keeps failing.

    Raises:
        ConfigError: On construction, when no API key is configured. No
            network client is created in that case.
    """

    def __init__(
        self,
        settings: Settings,
        circuit_breaker: CircuitBreaker | None = None,
    ) -> None:
        if not settings.has_api_key:
            raise ConfigError

        self._model = settings.GEMINI_MODEL
        self._timeout = settings.AI_REQUEST_TIMEOUT
        self._max_retries = settings.AI_MAX_RETRIES
        self._retry_delay = settings.AI_RETRY_DELAY
        self._max_retry_delay = settings.AI_MAX_RETRY_DELAY
        self._circuit_breaker = circuit_breaker or CircuitBreaker(
            config=CircuitBreakerConfig(
                name="gemini_ai",
                failure_threshold=settings.AI_CIRCUIT_FAILURE_THRESHOLD,
                recovery_timeout=settings.AI_CIRCUIT_RECOVERY_TIMEOUT,
                expected_exceptions=UpstreamRetryableError,
            ),
        )

        try:
            api_key = settings.GEMINI_API_KEY.get_secret_value()
            self._client: AsyncClient = Client(api_key=api_key).aio
        except ValueError as e:
            logger.exception("Failed to initialize Gemini client")
            raise ConfigError(f"Failed to initialize Gemini client: {e}") from e

        logger.info(f"AiClient initialized with model: {self._model}")

    @property
    def client(self) -> AsyncClient:
        """Get the underlying google-genai async client."""
        return self._client

    @property
    def circuit_breaker(self) -> CircuitBreaker:
        return self._circuit_breaker

    async def generate(self, prompt: PromptSpec) -> GenerationResponse:
        """
        Send a prompt and return the raw reply text with grounding metadata.

        Args:
            prompt: Instruction text and tool configuration.

        Returns:
            The reply text (stripped) and the first candidate's grounding
            metadata, ``None`` when absent.

        Raises:
            UpstreamAuthError: If the key is invalid or lacks permission.
            UpstreamEmptyResponse: If the reply has no text.
            UpstreamRetryableError: If transient failures outlast the retries.
            UpstreamError: For any other backend failure.
            CircuitBreakerError: If the circuit is open.
        """
        config = build_config(prompt)
        generate_with_retry = with_retry(
            max_retries=self._max_retries,
            base_delay=self._retry_delay,
            max_delay=self._max_retry_delay,
            exec_retry=(UpstreamRetryableError,),
        )(self._generate_once)

        return await generate_with_retry(prompt.instruction_text, config)

    async def _generate_once(
        self,
        contents: str,
        config: GenerateContentConfig,
    ) -> GenerationResponse:
        return await self._circuit_breaker.call(self._call_backend, contents, config)

    async def _call_backend(
        self,
        contents: str,
        config: GenerateContentConfig,
    ) -> GenerationResponse:
        try:
            async with timeout(self._timeout):
                response = await self._client.models.generate_content(
                    model=self._model,
                    contents=contents,
                    config=config,
                )
        except Exception as e:
            error = map_exception(e)
            logger.warning(
                "Gemini call failed",
                error_type=type(error).__name__,
                retryable=isinstance(error, UpstreamRetryableError),
                error=str(e),
            )
            raise error from e

        text = (response.text or "").strip() if response else ""
        if not text:
            raise UpstreamEmptyResponse

        return GenerationResponse(text=text, grounding_metadata=grounding_metadata_of(response))

    async def close(self) -> None:
        try:
            logger.info("Closing AI client")
            await self._client.aclose()
        except Exception:
            logger.exception("Failed to close AI client")
        else:
            logger.info("AI client closed successfully")
