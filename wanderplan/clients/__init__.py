from wanderplan.clients.ai_client import AiClient

__all__ = ["AiClient"]
