from wanderplan.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "bind_request_id",
    "clear_context",
    "configure_logging",
    "get_logger",
]
