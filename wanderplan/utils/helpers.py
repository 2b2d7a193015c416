from time import perf_counter

from starlette.requests import Request


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def time_taken(start_time: float) -> str:
    """Format the elapsed time since ``start_time`` as seconds."""
    return f"{perf_counter() - start_time:.2f}s"


def truncate(text: str, limit: int = 500) -> str:
    """Shorten ``text`` to ``limit`` characters, marking the cut."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... [{len(text) - limit} more chars]"
