from wanderplan.middleware.middleware import LoggingMiddleware, configure_cors, lifespan

__all__ = ["LoggingMiddleware", "configure_cors", "lifespan"]
