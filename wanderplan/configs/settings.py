"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Wanderplan itinerary backend.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MAX_DESTINATION_LENGTH = 100
MAX_INTERESTS_LENGTH = 500
MIN_TRIP_DURATION = 1
MAX_TRIP_DURATION = 30

DEFAULT_PRICE_CHECK_PLACEHOLDER = "Check Price"

# AI Model Configuration
GEMINI_MODEL = "gemini-2.5-flash"

# Generation parameters are fixed and never depend on the itinerary request
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.95
DEFAULT_TOP_K = 64


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Wanderplan Itinerary Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # AI Configuration
    GEMINI_API_KEY: SecretStr | None = None
    GEMINI_MODEL: str = GEMINI_MODEL
    AI_REQUEST_TIMEOUT: float = 60.0  # seconds
    AI_MAX_RETRIES: int = 3  # total attempts, first call included
    AI_RETRY_DELAY: float = 1.0  # seconds
    AI_MAX_RETRY_DELAY: float = 10.0  # seconds
    AI_CIRCUIT_FAILURE_THRESHOLD: int = 5
    AI_CIRCUIT_RECOVERY_TIMEOUT: float = 60.0  # seconds

    # Itinerary prompt
    ITINERARY_LANGUAGE: str = "Bahasa Indonesia"
    COST_EXAMPLE: str = "IDR 50,000"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/wanderplan.log"
    PRODUCTION_FRONTEND_URL: str | None = None

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_ITINERARY: str = "10/minute"

    @property
    def has_api_key(self) -> bool:
        """Whether a non-blank Gemini API key is configured."""
        return bool(self.GEMINI_API_KEY and self.GEMINI_API_KEY.get_secret_value().strip())


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()


settings = get_settings()
