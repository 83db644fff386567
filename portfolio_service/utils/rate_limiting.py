# utils/rate_limiting.py

"""
Rate limiting for the login and refresh endpoints using slowapi.
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..core.config import settings


def get_client_identifier(request: Request) -> str:
    """
    Identify the client for rate limiting.

    Honours ``X-Forwarded-For`` when the service runs behind a proxy.

    Args:
        request: Incoming request

    Returns:
        str: Client identifier
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


def create_limiter() -> Limiter:
    """
    Create the slowapi Limiter instance.

    Returns:
        Limiter: Limiter with in-memory storage
    """
    return Limiter(
        key_func=get_client_identifier,
        enabled=settings.rate_limit_enabled,
        headers_enabled=False,
    )


limiter = create_limiter()
