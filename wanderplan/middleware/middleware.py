# wanderplan/middleware/middleware.py
"""
Middleware components for the Wanderplan backend.

This module contains request logging and CORS configuration, plus the
lifespan handler that builds the AI client and trip session at startup and
releases them on shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from wanderplan.clients.ai_client import AiClient
from wanderplan.configs import get_settings
from wanderplan.errors import ConfigError
from wanderplan.managers.trip_session import TripSession
from wanderplan.monitoring import bind_request_id, clear_context, configure_logging, get_logger
from wanderplan.utils.helpers import host

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"Starting {app.title}...")

    app.state.settings = settings
    app.state.trip_session = TripSession()
    app.state.ai_client = None

    try:
        app.state.ai_client = AiClient(settings)
        logger.info("AI client initialized successfully.")
    except ConfigError as e:
        # The app still serves health and budget routes; generation fails with ConfigError
        logger.warning(f"AI client not initialized: {e.detail}")

    yield

    logger.info(f"Shutting down {app.title}...")
    if ai_client := app.state.ai_client:
        await ai_client.close()
    logger.info("Services cleaned up successfully")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    if frontend_url := get_settings().PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        bind_request_id(request_id)

        logger.info(f"Request: {request.method} {request.url.path}, from ip: {host(request)}")
        try:
            response = await call_next(request)
            duration = perf_counter() - start_time
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} "
                f"in {duration:.2f}s",
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()
