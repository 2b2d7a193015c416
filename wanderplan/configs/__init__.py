from wanderplan.configs.settings import (
    DEFAULT_PRICE_CHECK_PLACEHOLDER,
    GEMINI_MODEL,
    MAX_DESTINATION_LENGTH,
    MAX_INTERESTS_LENGTH,
    MAX_TRIP_DURATION,
    MIN_TRIP_DURATION,
    Settings,
    get_settings,
    settings,
)

__all__ = [
    "DEFAULT_PRICE_CHECK_PLACEHOLDER",
    "GEMINI_MODEL",
    "MAX_DESTINATION_LENGTH",
    "MAX_INTERESTS_LENGTH",
    "MAX_TRIP_DURATION",
    "MIN_TRIP_DURATION",
    "Settings",
    "get_settings",
    "settings",
]
