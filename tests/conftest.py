# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from copy import deepcopy

# Must happen before the app (and its cached settings) is imported anywhere
os.environ["GEMINI_API_KEY"] = ""
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_TO_FILE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from wanderplan.clients.ai_client import AiClient
from wanderplan.main import app
from wanderplan.managers import CircuitBreaker, CircuitBreakerConfig, limiter
from wanderplan.schemas.generation import GenerationResponse
from wanderplan.schemas.itinerary import GeneratedItinerary

BALI_PAYLOAD: dict[str, Any] = {
    "itinerary": [
        {
            "day": 1,
            "date": "2025-03-10",
            "activities": [
                {
                    "name": "Tanah Lot Temple",
                    "openingHours": "07:00 - 19:00",
                    "estimatedCost": "IDR 50,000",
                    "priceCheckLinkPlaceholder": "Check Price",
                },
                {
                    "name": "Jimbaran Seafood Dinner",
                    "description": "Grilled fish on the beach",
                    "estimatedCost": "IDR 250.000",
                    "priceCheckLinkPlaceholder": "Check Price",
                },
            ],
        },
        {
            "day": 2,
            "date": "2025-03-11",
            "activities": [
                {
                    "name": "Ubud Monkey Forest",
                    "estimatedCost": "Rp 80.000",
                    "priceCheckLinkPlaceholder": "Check Price",
                },
            ],
        },
    ],
    "summary": "Temples, beaches and jungle.",
}


def fenced(payload: str) -> str:
    return f"Here is your plan:\n```json\n{payload}\n```\nEnjoy!"


@pytest.fixture
def bali_payload() -> dict[str, Any]:
    return deepcopy(BALI_PAYLOAD)


@pytest.fixture
def bali_itinerary() -> GeneratedItinerary:
    return GeneratedItinerary.model_validate(BALI_PAYLOAD)


@pytest.fixture
def make_itinerary() -> Callable[..., GeneratedItinerary]:
    """Build an itinerary from per-day lists of (name, estimated cost)."""

    def _make(*days: list[tuple[str, str]]) -> GeneratedItinerary:
        return GeneratedItinerary.model_validate(
            {
                "itinerary": [
                    {
                        "day": i + 1,
                        "date": f"2025-01-{i + 1:02d}",
                        "activities": [
                            {"name": name, "estimatedCost": cost} for name, cost in activities
                        ],
                    }
                    for i, activities in enumerate(days)
                ],
            },
        )

    return _make


@pytest.fixture
def mock_ai_client() -> MagicMock:
    mock_client = MagicMock(spec=AiClient)
    mock_client.generate = AsyncMock(
        return_value=GenerationResponse(
            text=fenced(GeneratedItinerary.model_validate(BALI_PAYLOAD).model_dump_json()),
            grounding_metadata={
                "grounding_chunks": [
                    {"web": {"uri": "https://example.com/bali", "title": "Bali"}},
                    {"maps": {"uri": "https://maps.google.com/?cid=1"}},
                    {"web": {"uri": "https://example.com/bali"}},
                ],
            },
        ),
    )
    mock_client.circuit_breaker = CircuitBreaker(config=CircuitBreakerConfig(name="test_ai"))
    mock_client.close = AsyncMock()
    return mock_client


@pytest.fixture
def client(mock_ai_client: MagicMock) -> Generator[TestClient]:
    # Disable rate limiting for tests
    limiter.enabled = False
    with TestClient(app) as test_client:
        # Lifespan found no API key; install the mock in its place
        app.state.ai_client = mock_ai_client
        yield test_client
        app.state.ai_client = None
