# tests/errors/test_base.py
"""Tests for wanderplan/errors/base.py module."""

from unittest.mock import MagicMock

import pytest
from orjson import loads

from wanderplan.errors import (
    BaseAppError,
    CircuitBreakerError,
    MalformedResponse,
    UnknownActivityError,
    create_exception_handler,
)


def mock_request(ip: str = "192.168.1.1", path: str = "/itinerary") -> MagicMock:
    request = MagicMock()
    request.client.host = ip
    request.url.path = path
    return request


class TestBaseAppError:
    """Tests for BaseAppError exception."""

    def test_default_values(self) -> None:
        """Test default initialization values."""
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500

    def test_custom_values(self) -> None:
        """Test custom initialization values."""
        error = BaseAppError(detail="Custom error", status_code=400)
        assert error.detail == "Custom error"
        assert error.status_code == 400

    def test_str_representation(self) -> None:
        """Test string representation returns message."""
        assert str(BaseAppError(detail="Test error")) == "Test error"


class TestCreateExceptionHandler:
    """Tests for create_exception_handler factory function."""

    @pytest.mark.asyncio
    async def test_handler_with_base_app_error(self) -> None:
        """Test handler with BaseAppError exception."""
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(mock_request(), BaseAppError(detail="Test error", status_code=400))

        assert response.status_code == 400
        assert response.body == b'{"detail":"Test error"}'
        logger.warning.assert_called_once_with(
            "Test error for ip: 192.168.1.1 for endpoint /itinerary",
        )

    @pytest.mark.asyncio
    async def test_handler_with_generic_exception(self) -> None:
        """Test handler falls back to a 500 for plain exceptions."""
        handler = create_exception_handler(MagicMock())

        response = await handler(mock_request(), ValueError("Something went wrong"))

        assert response.status_code == 500
        assert loads(response.body) == {"detail": "Internal Server Error"}

    @pytest.mark.asyncio
    async def test_handler_includes_extra_attributes(self) -> None:
        """Test extra exception attributes are added to the body."""
        handler = create_exception_handler(MagicMock())

        response = await handler(
            mock_request(),
            CircuitBreakerError(detail="Service down", retry_after=12.5, circuit_name="gemini_ai"),
        )

        assert response.status_code == 503
        assert loads(response.body) == {
            "detail": "Service down",
            "retry_after": 12.5,
            "circuit_name": "gemini_ai",
        }

    @pytest.mark.asyncio
    async def test_long_fragment_is_truncated_in_body(self) -> None:
        """Test a raw model reply is cut short before reaching the client."""
        handler = create_exception_handler(MagicMock())
        error = MalformedResponse(fragment="y" * 5000)

        response = await handler(mock_request(), error)

        body = loads(response.body)
        assert response.status_code == 502
        assert body["fragment"] == "y" * 500 + "... [4500 more chars]"
        assert len(error.fragment) == 5000

    @pytest.mark.asyncio
    async def test_unknown_activity_body(self) -> None:
        handler = create_exception_handler(MagicMock())

        response = await handler(mock_request(), UnknownActivityError(3, 7))

        assert response.status_code == 404
        assert loads(response.body)["day_index"] == 3


class TestDomainErrors:
    """Tests for string forms of domain errors."""

    def test_malformed_response_shows_truncated_fragment(self) -> None:
        error = MalformedResponse(fragment="x" * 500)

        text = str(error)
        assert text.startswith("Received malformed JSON string from the model.")
        assert "[300 more chars]" in text
        assert error.fragment == "x" * 500

    def test_circuit_breaker_error_retry_hint(self) -> None:
        assert str(CircuitBreakerError(detail="Down", retry_after=3)) == "Down (retry in 3.0s)"
        assert str(CircuitBreakerError(detail="Down")) == "Down"
